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
Admin-panel handlers for curated customer stories and admin claims.

Every story handler verifies the caller's Firebase ID token and admin claim
before touching the request body or Firestore.
"""

import hmac
from datetime import datetime, timezone

from firebase_admin import auth
from firebase_functions import https_fn, logger
from google.cloud.firestore_v1 import Query

from handlers.responses import json_endpoint, json_response
from shared.api import CustomerStory, StoryAnswersUpdate
from shared.auth import verify_admin
from shared.config import Settings
from shared.constants import ADMIN_CLAIM
from shared.errors import ConfigurationError, NotFound, Unauthenticated
from shared.firebase_constants import (
    CUSTOMER_STORIES_COLLECTION,
    CUSTOMER_STORIES_PAGE_SIZE,
)
from shared.json_utils import to_document
from shared.validation import optional_field, parse_body, require_email, require_fields


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@json_endpoint("POST")
def create_customer_story(req: https_fn.Request, db, auth_client) -> https_fn.Response:
    admin = verify_admin(req, auth_client)

    body = parse_body(req)
    require_fields(body, ["name", "email"], "Name and email are required")
    email = require_email(body["email"])

    now = _now_iso()
    story = CustomerStory(
        name=body["name"],
        email=email,
        questions=optional_field(body, "questions", default=[]),
        created_at=now,
        updated_at=now,
        created_by=admin.email,
        created_by_uid=admin.uid,
    )
    _, doc_ref = db.collection(CUSTOMER_STORIES_COLLECTION).add(to_document(story))

    logger.info(f"Customer story {doc_ref.id} created by {admin.uid}")
    return json_response(
        {
            "success": True,
            "message": "Customer story created successfully",
            "storyId": doc_ref.id,
        }
    )


@json_endpoint("POST")
def update_story_answers(req: https_fn.Request, db, auth_client) -> https_fn.Response:
    """
    Stores the answers for a customer story and marks it completed.

    Repeated submissions overwrite the previous answers.
    """
    admin = verify_admin(req, auth_client)

    body = parse_body(req)
    require_fields(body, ["storyId", "answers"], "Story ID and answers are required")
    story_id = body["storyId"]
    # Ids with "/" would address a subcollection path, not a story.
    if not isinstance(story_id, str) or "/" in story_id:
        raise NotFound("Story not found")

    doc_ref = db.collection(CUSTOMER_STORIES_COLLECTION).document(story_id)
    if not doc_ref.get().exists:
        raise NotFound("Story not found")

    update = StoryAnswersUpdate(
        questions=body["answers"],
        updated_at=_now_iso(),
        updated_by=admin.email,
        updated_by_uid=admin.uid,
    )
    doc_ref.update(to_document(update))

    logger.info(f"Customer story {story_id} completed by {admin.uid}")
    return json_response(
        {"success": True, "message": "Story answers updated successfully"}
    )


@json_endpoint("GET")
def get_customer_stories(req: https_fn.Request, db, auth_client) -> https_fn.Response:
    """Lists the most recently created customer stories, newest first."""
    verify_admin(req, auth_client)

    query = (
        db.collection(CUSTOMER_STORIES_COLLECTION)
        .order_by("createdAt", direction=Query.DESCENDING)
        .limit(CUSTOMER_STORIES_PAGE_SIZE)
    )
    stories = [{"id": doc.id, **doc.to_dict()} for doc in query.stream()]
    return json_response({"success": True, "stories": stories})


@json_endpoint("POST")
def set_admin_claim(
    req: https_fn.Request, auth_client, settings: Settings
) -> https_fn.Response:
    """
    Grants the admin claim to the user registered under an email address.

    Authorized by the shared ADMIN_SECRET_KEY rather than by an existing admin
    token, so the first admin can be bootstrapped. Requests are refused while
    the secret is unset.
    """
    body = parse_body(req)
    require_fields(body, ["email", "secretKey"], "Email and secret key are required")

    if not settings.admin_secret_key:
        logger.error("ADMIN_SECRET_KEY is not set; refusing to grant admin claims")
        raise ConfigurationError("Admin secret is not configured")

    secret_key = str(body["secretKey"])
    if not hmac.compare_digest(
        secret_key.encode("utf-8"), settings.admin_secret_key.encode("utf-8")
    ):
        logger.warn("Admin claim requested with an invalid secret key")
        raise Unauthenticated()

    email = require_email(body["email"])

    try:
        user = auth_client.get_user_by_email(email)
    except auth.UserNotFoundError:
        raise NotFound("User not found")

    auth_client.set_custom_user_claims(user.uid, {ADMIN_CLAIM: True})

    logger.info(f"Admin claim set for {email} ({user.uid})")
    return json_response(
        {"success": True, "message": f"Admin claim set for {email}", "uid": user.uid}
    )
