from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class WeeklySchedule:
    """A recurring weekly slot for a subject (not a concrete event).

    ``weekday`` counts from 0=Sunday to 6=Saturday.
    """

    schedule_id: str
    subject_id: str
    weekday: int
    start_time: str
    end_time: str
    title: str

    def to_json(self) -> dict:
        return {
            "id": self.schedule_id,
            "subjectId": self.subject_id,
            "weekday": self.weekday,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "title": self.title,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "WeeklySchedule":
        return cls(
            schedule_id=str(data["id"]),
            subject_id=str(data["subjectId"]),
            weekday=int(data["weekday"]),
            start_time=data["startTime"],
            end_time=data["endTime"],
            title=data["title"],
        )
