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

# Cloud functions for the Vitae landing page - waitlist and story intake
# forms, plus the admin panel for curated customer stories.
#
# This file containing Python cloud functions must be named main.py.
# See https://cloud.google.com/run/docs/write-functions#python for more info.
#
# Exported function names are camelCase because they form the deployed URLs
# the landing page and admin panel call.

# Third-party library imports
from firebase_admin import auth, firestore, initialize_app
from firebase_functions import https_fn, options

# Local application imports
from handlers import admin, intake
from shared.config import configure_emulator, get_settings

CORS_OPTIONS = options.CorsOptions(
    cors_origins="*",
    cors_methods=["get", "post", "options"],
)

initialize_app()
configure_emulator(get_settings())


@https_fn.on_request(cors=CORS_OPTIONS)
def handleWaitlistSubmission(req: https_fn.Request) -> https_fn.Response:
    return intake.handle_waitlist_submission(req, firestore.client(), get_settings())


@https_fn.on_request(cors=CORS_OPTIONS)
def handleStartStorySubmission(req: https_fn.Request) -> https_fn.Response:
    return intake.handle_start_story_submission(req, firestore.client())


@https_fn.on_request(cors=CORS_OPTIONS)
def createCustomerStory(req: https_fn.Request) -> https_fn.Response:
    return admin.create_customer_story(req, firestore.client(), auth)


@https_fn.on_request(cors=CORS_OPTIONS)
def updateStoryAnswers(req: https_fn.Request) -> https_fn.Response:
    return admin.update_story_answers(req, firestore.client(), auth)


@https_fn.on_request(cors=CORS_OPTIONS)
def getCustomerStories(req: https_fn.Request) -> https_fn.Response:
    return admin.get_customer_stories(req, firestore.client(), auth)


@https_fn.on_request(cors=CORS_OPTIONS)
def setAdminClaim(req: https_fn.Request) -> https_fn.Response:
    return admin.set_admin_claim(req, auth, get_settings())
