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
Environment-backed configuration for the Vitae cloud functions.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.firebase_constants import WAITLIST_COLLECTION


class Settings(BaseSettings):
    """Settings read from the function's environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Shared secret checked by setAdminClaim. No default; while unset the
    # endpoint refuses every request.
    admin_secret_key: Optional[str] = Field(default=None)

    waitlist_collection: str = Field(default=WAITLIST_COLLECTION)
    waitlist_reject_duplicates: bool = Field(default=False)

    # Local development toggles
    functions_emulator: bool = Field(default=False)
    firestore_emulator_host: str = Field(default="localhost:8081")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


def configure_emulator(settings: Settings) -> None:
    """Points the Firestore client at the local emulator when running under it."""
    if settings.functions_emulator:
        os.environ.setdefault("FIRESTORE_EMULATOR_HOST", settings.firestore_emulator_host)
