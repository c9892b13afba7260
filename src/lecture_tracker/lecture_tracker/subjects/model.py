from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Subject:
    """Domain entity: a course the user attends."""

    subject_id: str
    name: str
    code: str
    color: str
    teacher: Optional[str] = None

    def to_json(self) -> dict:
        return {
            "id": self.subject_id,
            "name": self.name,
            "code": self.code,
            "teacher": self.teacher,
            "color": self.color,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Subject":
        return cls(
            subject_id=str(data["id"]),
            name=data["name"],
            code=data["code"],
            color=data["color"],
            teacher=data.get("teacher"),
        )
