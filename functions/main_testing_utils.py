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
"""Builders for requests and Firebase doubles shared by the tests."""

from unittest.mock import MagicMock

from flask import Request
from werkzeug.test import EnvironBuilder

ADMIN_TOKEN = "admin-token"
ADMIN_HEADERS = {"Authorization": f"Bearer {ADMIN_TOKEN}"}
ADMIN_CLAIMS = {"uid": "admin-uid", "email": "admin@example.com", "admin": True}

DEFAULT_HEADERS = {"User-Agent": "test-agent", "X-Forwarded-For": "127.0.0.1"}


def make_request(
    method="POST",
    json=None,
    data=None,
    headers=None,
    remote_addr="127.0.0.1",
) -> Request:
    """
    Builds a real flask Request.

    Pass remote_addr=None to simulate a request without connection info.
    """
    kwargs = {"method": method, "headers": headers or {}}
    if json is not None:
        kwargs["json"] = json
    elif data is not None:
        kwargs["data"] = data
        kwargs["content_type"] = "application/json"

    builder = EnvironBuilder(**kwargs)
    try:
        environ = builder.get_environ()
    finally:
        builder.close()

    if remote_addr is None:
        environ.pop("REMOTE_ADDR", None)
    else:
        environ["REMOTE_ADDR"] = remote_addr
    return Request(environ)


def create_mock_firestore(doc_id="mock-doc-id"):
    """Returns (db, collection, doc_ref) mocks wired like the Firestore client."""
    db = MagicMock()
    collection = db.collection.return_value
    doc_ref = MagicMock()
    doc_ref.id = doc_id
    collection.add.return_value = (None, doc_ref)
    collection.document.return_value = doc_ref
    return db, collection, doc_ref


def create_mock_auth(claims=None):
    auth_client = MagicMock()
    auth_client.verify_id_token.return_value = dict(
        ADMIN_CLAIMS if claims is None else claims
    )
    return auth_client


def create_mock_story_doc(story_id, **fields):
    doc = MagicMock()
    doc.id = story_id
    doc.exists = True
    doc.to_dict.return_value = fields
    return doc
