"""Service endpoints and client defaults."""

import os
from datetime import timedelta

BASE_URL = os.getenv("OPENTDB_BASE_URL", "https://opentdb.com").rstrip("/")
QUESTION_PATH = "/api.php"
TOKEN_PATH = "/api_token.php"
CATEGORY_PATH = "/api_category.php"

# HTTP settings
REQUEST_TIMEOUT_SECONDS = float(os.getenv("OPENTDB_TIMEOUT_SECONDS", "10"))

# Session token settings
TOKEN_INACTIVITY_TTL = timedelta(hours=6)

# The service silently caps a single response at this many questions.
# Requests above it are still sent as-is.
MAX_QUESTIONS_PER_REQUEST = 50
