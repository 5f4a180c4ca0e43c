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
"""Request errors raised by the handlers and rendered as JSON responses."""

from typing import Sequence


class RequestError(Exception):
    """An error that maps directly onto an HTTP status and a short message."""

    status = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MethodNotAllowed(RequestError):
    status = 405
    default_message = "Method Not Allowed"


class InvalidBody(RequestError):
    status = 400
    default_message = "Invalid request body"


class MissingRequiredField(RequestError):
    status = 400
    default_message = "Missing required fields"

    def __init__(self, message: str | None = None, fields: Sequence[str] = ()):
        super().__init__(message)
        self.fields = list(fields)


class InvalidEmail(RequestError):
    status = 400
    default_message = "Invalid email address"


# All authorization failures are 401; only the message differs.
class Unauthenticated(RequestError):
    status = 401
    default_message = "Unauthorized"


class InvalidToken(RequestError):
    status = 401
    default_message = "Invalid token"


class NotAuthorized(RequestError):
    status = 401
    default_message = "Admin access required"


class NotFound(RequestError):
    status = 404
    default_message = "Not found"


class Conflict(RequestError):
    status = 409
    default_message = "Conflict"


class InternalError(RequestError):
    pass


class ConfigurationError(RequestError):
    default_message = "Server is not configured"
