from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple, Optional

from ..core.enums import AttendanceStatus


class LectureKey(NamedTuple):
    """Natural identity of a lecture; generation never creates two with the same key."""

    subject_id: str
    date: str
    start_time: str
    end_time: str


@dataclass(frozen=True)
class Lecture:
    """Domain entity: one dated lecture, optionally with recorded attendance."""

    lecture_id: str
    subject_id: str
    title: str
    date: str
    start_time: str
    end_time: str
    notes: Optional[str] = None
    status: Optional[AttendanceStatus] = None
    attendance_note: Optional[str] = None
    schedule_id: Optional[str] = None

    @property
    def key(self) -> LectureKey:
        return LectureKey(self.subject_id, self.date, self.start_time, self.end_time)

    def to_json(self) -> dict:
        return {
            "id": self.lecture_id,
            "subjectId": self.subject_id,
            "title": self.title,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "notes": self.notes,
            "status": self.status.value if self.status else None,
            "attendanceNote": self.attendance_note,
            "scheduleId": self.schedule_id,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Lecture":
        status = data.get("status")
        return cls(
            lecture_id=str(data["id"]),
            subject_id=str(data["subjectId"]),
            title=data["title"],
            date=data["date"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            notes=data.get("notes"),
            status=AttendanceStatus(status) if status else None,
            attendance_note=data.get("attendanceNote"),
            schedule_id=data.get("scheduleId"),
        )
