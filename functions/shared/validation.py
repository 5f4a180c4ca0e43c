# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""
Request validation shared by every handler.

Checks run in a fixed order before any store write: method, body shape,
required fields, then email format. Each check raises a RequestError.
"""

import re
from typing import Any, Iterable

from firebase_functions import https_fn

from shared.constants import MAX_EMAIL_LENGTH
from shared.errors import InvalidBody, InvalidEmail, MethodNotAllowed, MissingRequiredField

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def require_method(req: https_fn.Request, method: str) -> None:
    if req.method != method:
        raise MethodNotAllowed()


def parse_body(req: https_fn.Request) -> dict:
    """Returns the JSON object body of the request.

    Bodies are parsed regardless of the declared content type, since the
    landing page posts plain fetch() payloads.
    """
    body = req.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise InvalidBody()
    return body


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def require_fields(body: dict, fields: Iterable[str], message: str) -> None:
    missing = [field for field in fields if _is_blank(body.get(field))]
    if missing:
        raise MissingRequiredField(message, fields=missing)


def optional_field(body: dict, field: str, default: Any = "") -> Any:
    value = body.get(field)
    return default if _is_blank(value) else value


def is_valid_email(email: Any) -> bool:
    if not isinstance(email, str) or len(email) > MAX_EMAIL_LENGTH:
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def require_email(email: Any) -> str:
    if not is_valid_email(email):
        raise InvalidEmail()
    return email
