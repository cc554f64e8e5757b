import os

from .base import DB_CONFIG, FRONTEND_URL, LOG_LEVEL, MAX_UPLOAD_BYTES, SMTP_CONFIG, UPLOAD_DIR  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
SCHEDULER_ENABLED = bool(int(os.getenv("SCHEDULER_ENABLED", "1")))
