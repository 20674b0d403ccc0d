from __future__ import annotations

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="sanctuary-tests-")

os.environ["APP_ENV"] = "test"
os.environ["PLATFORM"] = "DEV"
os.environ["TOKEN_SECRET"] = "integration-test-secret"
os.environ["TOKEN_TTL_SECONDS"] = "3600"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'sanctuary.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "app.log")
os.environ["ENABLE_RATE_LIMIT"] = "0"
os.environ["ALLOWED_ORIGINS"] = "http://localhost:3000"
