"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AttendanceStatus

DEFAULT_SUBJECT_COLOR = "#0ea5a0"

# Statuses counted as "attended" by every statistic in the app.
ATTENDED_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})
MISSED_STATUSES = frozenset({AttendanceStatus.ABSENT})

AT_RISK_PERCENTAGE = 75.0
DEFAULT_TREND_WEEKS = 7
MAX_TREND_WEEKS = 520

DEFAULT_EVENT_QUEUE_SIZE = 100

# Prefix of the named MySQL lock held by every transaction (suffixed with the database name).
WRITE_LOCK_NAME = "lecture_tracker_writes"
WRITE_LOCK_TIMEOUT_SECONDS = 10

# File names used by the JSON backend inside DATA_DIR.
SUBJECTS_FILE = "subjects.json"
LECTURES_FILE = "lectures.json"
SCHEDULES_FILE = "weeklySchedules.json"
TASKS_FILE = "tasks.json"
