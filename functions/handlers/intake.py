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
"""Public, unauthenticated intake handlers for the landing page forms."""

import hashlib

from firebase_functions import https_fn, logger
from google.api_core import exceptions
from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from handlers.responses import client_ip, json_endpoint, json_response, user_agent
from shared.api import StartStorySubmission, WaitlistEntry
from shared.config import Settings
from shared.constants import START_STORY_SUCCESS_MESSAGE, WAITLIST_SUCCESS_MESSAGE
from shared.errors import Conflict
from shared.firebase_constants import START_STORY_SUBMISSIONS_COLLECTION
from shared.json_utils import to_document
from shared.validation import optional_field, parse_body, require_email, require_fields


def _waitlist_document_id(email: str) -> str:
    """Stable document id for an email, used when duplicates are rejected."""
    return hashlib.sha256(email.strip().lower().encode("utf-8")).hexdigest()


@json_endpoint("POST")
def handle_waitlist_submission(
    req: https_fn.Request, db, settings: Settings
) -> https_fn.Response:
    """
    Adds an email (and optional name) to the waitlist.

    With settings.waitlist_reject_duplicates the entry is written with an
    atomic create at an id derived from the email, so a second sign-up for
    the same address is refused by Firestore itself (409).
    """
    body = parse_body(req)
    require_fields(body, ["email"], "Email is required")
    email = require_email(body["email"])

    logger.info(f"Waitlist submission received: {email}")

    entry = WaitlistEntry(
        email=email,
        name=optional_field(body, "name"),
        timestamp=SERVER_TIMESTAMP,
        user_agent=user_agent(req),
        ip=client_ip(req),
    )
    collection = db.collection(settings.waitlist_collection)

    if settings.waitlist_reject_duplicates:
        doc_ref = collection.document(_waitlist_document_id(email))
        try:
            doc_ref.create(to_document(entry))
        except exceptions.Conflict:
            raise Conflict("Email already registered")
    else:
        _, doc_ref = collection.add(to_document(entry))

    logger.info(f"Waitlist entry written with ID: {doc_ref.id}")
    return json_response(
        {"success": True, "message": WAITLIST_SUCCESS_MESSAGE, "id": doc_ref.id}
    )


@json_endpoint("POST")
def handle_start_story_submission(req: https_fn.Request, db) -> https_fn.Response:
    """Records a "start your story" request for follow-up by the team."""
    body = parse_body(req)
    require_fields(
        body,
        ["firstName", "lastName", "email"],
        "First name, last name, and email are required",
    )
    email = require_email(body["email"])

    submission = StartStorySubmission(
        first_name=body["firstName"],
        last_name=body["lastName"],
        email=email,
        phone=optional_field(body, "phone"),
        age=optional_field(body, "age"),
        motivation=optional_field(body, "motivation"),
        timeline=optional_field(body, "timeline"),
        timestamp=SERVER_TIMESTAMP,
        user_agent=user_agent(req),
        ip=client_ip(req),
    )
    _, doc_ref = db.collection(START_STORY_SUBMISSIONS_COLLECTION).add(
        to_document(submission)
    )

    logger.info(f"Start story submission written with ID: {doc_ref.id}")
    return json_response(
        {"success": True, "message": START_STORY_SUCCESS_MESSAGE, "id": doc_ref.id}
    )
