"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

PREPARATORY_SUBJECT_NAME = "Preparatory"
PREPARATORY_SUBJECT_CODE = "PREP"

DEFAULT_ATTENDANCE_THRESHOLD = 75
DEFAULT_HISTORY_LIMIT = 200
REMINDER_INACTIVITY_DAYS = 3
TODO_REMINDER_DAYS = 1

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
NOTIFICATION_TITLE_MAX = 100
NOTIFICATION_MESSAGE_MAX = 500

FALLBACK_TIME_SLOTS = ("09:00 - 10:30", "10:45 - 12:15", "13:00 - 14:30", "14:45 - 16:15")
FALLBACK_MAX_SUBJECTS = 8
