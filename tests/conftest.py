"""Test environment: settings are read at import time, so set them before anything imports app."""

import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="residents-portal-tests-")

os.environ["APP_ENV"] = "dev"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP}/unused.db"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["SIGNUP_DEFAULT_STATUS"] = "pending"
