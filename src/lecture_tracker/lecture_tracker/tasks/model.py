from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import TaskPriority


@dataclass(frozen=True)
class Task:
    """Domain entity: a to-do item, optionally linked to a subject.

    ``completed`` keeps the stored "true"/"false" text form.
    """

    task_id: str
    title: str
    date: str
    completed: str = "false"
    description: Optional[str] = None
    time: Optional[str] = None
    priority: Optional[TaskPriority] = None
    subject_id: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.completed == "true"

    def to_json(self) -> dict:
        return {
            "id": self.task_id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "time": self.time,
            "priority": self.priority.value if self.priority else None,
            "completed": self.completed,
            "subjectId": self.subject_id,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Task":
        priority = data.get("priority")
        return cls(
            task_id=str(data["id"]),
            title=data["title"],
            date=data["date"],
            completed=data.get("completed") or "false",
            description=data.get("description"),
            time=data.get("time"),
            priority=TaskPriority(priority) if priority else None,
            subject_id=data.get("subjectId"),
        )
