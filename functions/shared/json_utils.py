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

from dataclasses import fields
from datetime import datetime
from typing import Any


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_document(record: Any) -> dict:
    """
    Converts a dataclass record into the camelCase dict stored in Firestore.

    Only top-level field names are converted. Values are passed through as-is
    so Firestore sentinels like SERVER_TIMESTAMP keep their identity and
    client-provided nested data is stored verbatim.
    """
    return {snake_to_camel(f.name): getattr(record, f.name) for f in fields(record)}

def json_default(value: Any) -> Any:
    """json.dumps fallback for Firestore values (timestamps are datetimes)."""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)
