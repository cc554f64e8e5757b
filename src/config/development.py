import os

from .base import DB_CONFIG, FRONTEND_URL, LOG_LEVEL, MAX_UPLOAD_BYTES, SMTP_CONFIG, UPLOAD_DIR  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Digest/reminder jobs; off by default so the reloader does not start them twice.
SCHEDULER_ENABLED = bool(int(os.getenv("SCHEDULER_ENABLED", "0")))
