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
JSON response helpers and the error boundary shared by every handler.
"""

import functools
import json
from typing import Callable

from firebase_functions import https_fn, logger

from shared.errors import InternalError, RequestError
from shared.json_utils import json_default
from shared.validation import require_method


def json_response(body: dict, status: int = 200) -> https_fn.Response:
    return https_fn.Response(
        json.dumps(body, default=json_default),
        status=status,
        mimetype="application/json",
    )


def error_response(error: RequestError) -> https_fn.Response:
    return json_response({"error": error.message}, status=error.status)


def client_ip(req: https_fn.Request) -> str:
    """Returns the caller's address, preferring the proxy-forwarded one."""
    return req.headers.get("X-Forwarded-For") or req.remote_addr or ""


def user_agent(req: https_fn.Request) -> str:
    return req.headers.get("User-Agent") or ""


def json_endpoint(method: str) -> Callable:
    """
    Wraps a handler with the method check and the error boundary.

    - OPTIONS preflight requests get an empty 204.
    - A mismatched method is rejected with 405 before the body is read.
    - RequestErrors become {"error": message} with their status.
    - Anything else is logged and collapsed to a generic 500, so store and
      verifier error details never reach the caller.
    """

    def decorator(handler: Callable[..., https_fn.Response]):
        @functools.wraps(handler)
        def wrapper(req: https_fn.Request, *args, **kwargs) -> https_fn.Response:
            if req.method == "OPTIONS":
                return https_fn.Response("", status=204)
            try:
                require_method(req, method)
                return handler(req, *args, **kwargs)
            except RequestError as e:
                logger.warn(f"{handler.__name__} rejected request: {e.status} {e.message}")
                return error_response(e)
            except Exception as e:
                logger.error(f"{handler.__name__} failed: {e}")
                return error_response(InternalError())

        return wrapper

    return decorator
