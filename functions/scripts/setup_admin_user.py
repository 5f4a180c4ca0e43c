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
Grants admin access to a Vitae user by calling the setAdminClaim function.

Prerequisites:
- The user must already have a Firebase Auth account.
- You must know the admin secret key (ADMIN_SECRET_KEY of the deployment).
- For local setup, the Firebase emulators must be running:
    firebase emulators:start --only functions,firestore,auth

Example:
    python3 scripts/setup_admin_user.py --env local --email admin@example.com
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from pathlib import Path

import requests

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shared.validation import is_valid_email

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30  # seconds
DEFAULT_LOCAL_PROJECT = "vitae-local"
DEFAULT_PRODUCTION_PROJECT = "vitae-460717"
DEFAULT_REGION = "us-central1"


def build_function_url(env: str, project: str, region: str) -> str:
    if env == "local":
        return f"http://127.0.0.1:5001/{project}/{region}/setAdminClaim"
    return f"https://{region}-{project}.cloudfunctions.net/setAdminClaim"


def set_admin_claim(function_url: str, email: str, secret_key: str) -> dict:
    """
    Posts the admin claim request and returns the decoded JSON response.

    Raises:
        requests.RequestException: The function could not be reached.
        ValueError: The response was not JSON.
    """
    response = requests.post(
        function_url,
        json={"email": email, "secretKey": secret_key},
        timeout=REQUEST_TIMEOUT,
    )
    return response.json()


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grant admin access to a user.")
    parser.add_argument(
        "--env", choices=["local", "production"], default="local", help="Target environment."
    )
    parser.add_argument("--email", help="Email address of the user to promote.")
    parser.add_argument(
        "--secret-key", help="Admin secret key. Prompted for when omitted."
    )
    parser.add_argument("--project", help="Firebase project id.")
    parser.add_argument("--region", default=DEFAULT_REGION, help="Functions region.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = _parse_args(argv)

    email = args.email or input("Enter the email address for the admin user: ").strip()
    if not is_valid_email(email):
        logger.error("Invalid email address")
        return 1

    secret_key = args.secret_key or getpass.getpass("Enter the admin secret key: ")
    if not secret_key:
        logger.error("Secret key is required")
        return 1

    project = args.project or (
        DEFAULT_LOCAL_PROJECT if args.env == "local" else DEFAULT_PRODUCTION_PROJECT
    )
    function_url = build_function_url(args.env, project, args.region)
    logger.info(f"Setting up admin user: {email}")
    logger.info(f"Using function URL: {function_url}")

    try:
        result = set_admin_claim(function_url, email, secret_key)
    except requests.RequestException as e:
        logger.error(f"Request error: {e}")
        if args.env == "local":
            logger.info("Make sure the Firebase emulators are running.")
        return 1
    except ValueError as e:
        logger.error(f"Error parsing response: {e}")
        return 1

    if not result.get("success"):
        logger.error(f"Error: {result.get('error', 'Unknown error')}")
        return 1

    logger.info(f"Success! {result.get('message')}")
    logger.info("Next steps:")
    logger.info("1. Make sure the user has created an account in Firebase Auth")
    logger.info("2. The user can now sign in to the admin panel at /admin")
    logger.info(
        "Note: the user may need to sign out and back in for the claim to take effect."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
