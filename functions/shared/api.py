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

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, List


class SubmissionStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass
class WaitlistEntry:
    """Schema for waitlist sign-ups stored in Firestore."""

    email: str
    name: str
    timestamp: Any  # Firestore timestamp created with firestore_v1.SERVER_TIMESTAMP
    user_agent: str
    ip: str


@dataclass
class StartStorySubmission:
    """Schema for "start your story" intake forms stored in Firestore."""

    first_name: str
    last_name: str
    email: str
    phone: Any
    age: Any
    motivation: Any
    timeline: Any
    timestamp: Any  # Firestore timestamp created with firestore_v1.SERVER_TIMESTAMP
    user_agent: str
    ip: str
    status: SubmissionStatus = SubmissionStatus.PENDING


@dataclass
class CustomerStory:
    """
    Schema for curated customer stories managed from the admin panel.

    createdAt/updatedAt are ISO-8601 strings taken from the server clock.
    """

    name: str
    email: str
    created_at: str
    updated_at: str
    created_by: str
    created_by_uid: str
    questions: List[Any] = field(default_factory=list)
    status: SubmissionStatus = SubmissionStatus.IN_PROGRESS


@dataclass
class StoryAnswersUpdate:
    """Fields overwritten on a customer story when its answers are submitted."""

    questions: List[Any]
    updated_at: str
    updated_by: str
    updated_by_uid: str
    status: SubmissionStatus = SubmissionStatus.COMPLETED
