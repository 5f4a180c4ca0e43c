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

# Firestore collection names shared by the Vitae cloud functions.

WAITLIST_COLLECTION = "waitlist"
START_STORY_SUBMISSIONS_COLLECTION = "start-story-submissions"
CUSTOMER_STORIES_COLLECTION = "customer-stories"

# Number of most recent customer stories returned to the admin panel.
CUSTOMER_STORIES_PAGE_SIZE = 50
