from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance recorded for a single lecture."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ChangeType(str, Enum):
    """Entity collections announced on the change-notification channel."""

    SUBJECTS = "subjects"
    LECTURES = "lectures"
    WEEKLY_SCHEDULES = "weekly-schedules"
    TASKS = "tasks"
