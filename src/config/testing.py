import os

from .base import DB_CONFIG, FRONTEND_URL, MAX_UPLOAD_BYTES, SMTP_CONFIG, UPLOAD_DIR  # noqa: F401

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = False
SCHEDULER_ENABLED = False
