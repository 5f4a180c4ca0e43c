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

import unittest

from google.api_core import exceptions
from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from handlers import intake
from main_testing_utils import DEFAULT_HEADERS, create_mock_firestore, make_request
from shared.config import Settings


class WaitlistSubmissionTest(unittest.TestCase):

    def setUp(self):
        self.db, self.collection, self.doc_ref = create_mock_firestore()
        self.settings = Settings(waitlist_collection="waitlist")

    def _submit(self, req, settings=None):
        return intake.handle_waitlist_submission(req, self.db, settings or self.settings)

    def test_valid_submission(self):
        req = make_request(
            json={"email": "test@example.com", "name": "Test User"},
            headers=DEFAULT_HEADERS,
        )

        response = self._submit(req)

        self.assertEqual(response.status_code, 200)
        self.db.collection.assert_called_once_with("waitlist")
        self.collection.add.assert_called_once_with(
            {
                "email": "test@example.com",
                "name": "Test User",
                "timestamp": SERVER_TIMESTAMP,
                "userAgent": "test-agent",
                "ip": "127.0.0.1",
            }
        )
        self.assertEqual(
            response.get_json(),
            {
                "success": True,
                "message": "Successfully joined the waitlist!",
                "id": "mock-doc-id",
            },
        )

    def test_missing_name_defaults_to_empty(self):
        req = make_request(json={"email": "test@example.com"}, headers=DEFAULT_HEADERS)

        response = self._submit(req)

        self.assertEqual(response.status_code, 200)
        stored = self.collection.add.call_args.args[0]
        self.assertEqual(stored["name"], "")

    def test_missing_headers_default_to_empty(self):
        req = make_request(json={"email": "test@example.com"}, remote_addr=None)

        response = self._submit(req)

        self.assertEqual(response.status_code, 200)
        stored = self.collection.add.call_args.args[0]
        self.assertEqual(stored["userAgent"], "")
        self.assertEqual(stored["ip"], "")

    def test_ip_falls_back_to_remote_address(self):
        req = make_request(json={"email": "test@example.com"}, remote_addr="10.0.0.7")

        self._submit(req)

        stored = self.collection.add.call_args.args[0]
        self.assertEqual(stored["ip"], "10.0.0.7")

    def test_missing_email(self):
        response = self._submit(make_request(json={"name": "Test User"}))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"error": "Email is required"})
        self.collection.add.assert_not_called()

    def test_invalid_email(self):
        for email in ["invalid-email", "@missingdomain.com", "spaces in@email.com"]:
            with self.subTest(email=email):
                response = self._submit(make_request(json={"email": email}))
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.get_json(), {"error": "Invalid email address"})
        self.collection.add.assert_not_called()

    def test_malformed_body(self):
        for data in ["null", "{not json"]:
            with self.subTest(data=data):
                response = self._submit(make_request(data=data))
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.get_json(), {"error": "Invalid request body"})
        self.collection.add.assert_not_called()

    def test_rejects_non_post_before_reading_body(self):
        for method in ["GET", "PUT", "DELETE"]:
            with self.subTest(method=method):
                response = self._submit(make_request(method=method, data="{not json"))
                self.assertEqual(response.status_code, 405)
                self.assertEqual(response.get_json(), {"error": "Method Not Allowed"})
        self.collection.add.assert_not_called()

    def test_options_preflight(self):
        response = self._submit(make_request(method="OPTIONS"))

        self.assertEqual(response.status_code, 204)
        self.db.collection.assert_not_called()

    def test_store_error_is_not_leaked(self):
        for error in [
            Exception("Database connection failed"),
            exceptions.DeadlineExceeded("Deadline exceeded"),
            OSError("Network is unreachable"),
        ]:
            with self.subTest(error=error):
                self.collection.add.side_effect = error
                response = self._submit(make_request(json={"email": "test@example.com"}))
                self.assertEqual(response.status_code, 500)
                self.assertEqual(response.get_json(), {"error": "Internal Server Error"})

    def test_resubmission_creates_two_records(self):
        first_ref, second_ref = create_mock_firestore("id-1")[2], create_mock_firestore("id-2")[2]
        self.collection.add.side_effect = [(None, first_ref), (None, second_ref)]
        payload = {"email": "test@example.com", "name": "Test User"}

        first = self._submit(make_request(json=payload))
        second = self._submit(make_request(json=payload))

        self.assertEqual(self.collection.add.call_count, 2)
        self.assertEqual(first.get_json()["id"], "id-1")
        self.assertEqual(second.get_json()["id"], "id-2")

    def test_collection_override(self):
        self._submit(
            make_request(json={"email": "test@example.com"}),
            Settings(waitlist_collection="waitlist-staging"),
        )

        self.db.collection.assert_called_once_with("waitlist-staging")


class WaitlistDuplicatePolicyTest(unittest.TestCase):

    def setUp(self):
        self.db, self.collection, self.doc_ref = create_mock_firestore("email-hash")
        self.settings = Settings(waitlist_reject_duplicates=True)

    def test_first_submission_uses_atomic_create(self):
        response = intake.handle_waitlist_submission(
            make_request(json={"email": "Test@Example.com"}), self.db, self.settings
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["id"], "email-hash")
        self.collection.add.assert_not_called()
        self.doc_ref.create.assert_called_once()
        self.assertEqual(
            self.collection.document.call_args.args[0],
            intake._waitlist_document_id("test@example.com"),
        )

    def test_duplicate_submission_conflicts(self):
        self.doc_ref.create.side_effect = exceptions.AlreadyExists("Document already exists")

        response = intake.handle_waitlist_submission(
            make_request(json={"email": "test@example.com"}), self.db, self.settings
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json(), {"error": "Email already registered"})
        self.collection.add.assert_not_called()


class StartStorySubmissionTest(unittest.TestCase):

    def setUp(self):
        self.db, self.collection, self.doc_ref = create_mock_firestore("mock-story-doc-id")

    def _submit(self, req):
        return intake.handle_start_story_submission(req, self.db)

    def test_valid_submission(self):
        req = make_request(
            json={
                "firstName": "John",
                "lastName": "Doe",
                "email": "john.doe@example.com",
                "phone": "555-1234",
                "age": "65",
                "motivation": "For my grandchildren",
                "timeline": "3 months",
            },
            headers=DEFAULT_HEADERS,
        )

        response = self._submit(req)

        self.assertEqual(response.status_code, 200)
        self.db.collection.assert_called_once_with("start-story-submissions")
        self.collection.add.assert_called_once_with(
            {
                "firstName": "John",
                "lastName": "Doe",
                "email": "john.doe@example.com",
                "phone": "555-1234",
                "age": "65",
                "motivation": "For my grandchildren",
                "timeline": "3 months",
                "timestamp": SERVER_TIMESTAMP,
                "userAgent": "test-agent",
                "ip": "127.0.0.1",
                "status": "pending",
            }
        )
        self.assertEqual(
            response.get_json(),
            {
                "success": True,
                "message": "Thank you for starting your story journey! "
                "We'll contact you within 24 hours.",
                "id": "mock-story-doc-id",
            },
        )

    def test_optional_fields_default_to_empty(self):
        req = make_request(
            json={"firstName": "John", "lastName": "Doe", "email": "john.doe@example.com"},
            headers=DEFAULT_HEADERS,
        )

        response = self._submit(req)

        self.assertEqual(response.status_code, 200)
        stored = self.collection.add.call_args.args[0]
        for field in ["phone", "age", "motivation", "timeline"]:
            self.assertEqual(stored[field], "")
        self.assertEqual(stored["status"], "pending")

    def test_missing_required_fields(self):
        response = self._submit(make_request(json={"firstName": "John"}))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.get_json(),
            {"error": "First name, last name, and email are required"},
        )
        self.collection.add.assert_not_called()

    def test_invalid_email(self):
        response = self._submit(
            make_request(json={"firstName": "John", "lastName": "Doe", "email": "invalid-email"})
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"error": "Invalid email address"})
        self.collection.add.assert_not_called()

    def test_long_and_special_strings_stored_verbatim(self):
        long_string = "a" * 10000
        req = make_request(
            json={
                "firstName": long_string,
                "lastName": "García-López",
                "email": "jose@example.com",
                "motivation": "For my niños & família! 💕",
            }
        )

        response = self._submit(req)

        self.assertEqual(response.status_code, 200)
        stored = self.collection.add.call_args.args[0]
        self.assertEqual(stored["firstName"], long_string)
        self.assertEqual(stored["lastName"], "García-López")
        self.assertEqual(stored["motivation"], "For my niños & família! 💕")

    def test_rejects_non_post(self):
        response = self._submit(make_request(method="GET"))

        self.assertEqual(response.status_code, 405)
        self.collection.add.assert_not_called()

    def test_store_error(self):
        self.collection.add.side_effect = Exception("Database write failed")

        response = self._submit(
            make_request(json={"firstName": "John", "lastName": "Doe", "email": "john.doe@example.com"})
        )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {"error": "Internal Server Error"})


if __name__ == "__main__":
    unittest.main()
