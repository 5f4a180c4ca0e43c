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
"""Admin authorization check for the admin-panel cloud functions."""

from dataclasses import dataclass
from typing import Optional

from firebase_admin import exceptions as firebase_exceptions
from firebase_functions import https_fn, logger

from shared.constants import ADMIN_CLAIM
from shared.errors import InvalidToken, NotAuthorized, Unauthenticated

BEARER_PREFIX = "Bearer "


@dataclass
class AdminIdentity:
    """The verified caller, recorded on the documents it writes."""

    uid: str
    email: str


def get_bearer_token(req: https_fn.Request) -> Optional[str]:
    header = req.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX) :].strip()
    return token or None


def verify_admin(req: https_fn.Request, auth_client) -> AdminIdentity:
    """
    Verifies the request's Firebase ID token and requires the admin claim.

    Args:
        req (https_fn.Request): The incoming request.
        auth_client: The firebase_admin.auth module (or a stand-in for it).

    Returns:
        The AdminIdentity of the caller.

    Raises:
        Unauthenticated: No bearer token was provided.
        InvalidToken: The token failed verification.
        NotAuthorized: The token is valid but lacks the admin claim.
    """
    token = get_bearer_token(req)
    if not token:
        raise Unauthenticated()

    try:
        claims = auth_client.verify_id_token(token)
    except (ValueError, firebase_exceptions.FirebaseError) as e:
        logger.warn(f"Rejected ID token: {e}")
        raise InvalidToken()

    if claims.get(ADMIN_CLAIM) is not True:
        logger.warn(f"User {claims.get('uid')} is not an admin")
        raise NotAuthorized()

    return AdminIdentity(uid=claims.get("uid", ""), email=claims.get("email", ""))
