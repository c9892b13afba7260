from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WeeklySchedule


class WeeklyScheduleRepository(Protocol):
    def list_all(self) -> Sequence[WeeklySchedule]:
        raise NotImplementedError

    def get_by_id(self, schedule_id: str) -> Optional[WeeklySchedule]:
        raise NotImplementedError

    def list_by_subject(self, subject_id: str) -> Sequence[WeeklySchedule]:
        raise NotImplementedError

    def list_by_weekday(self, weekday: int) -> Sequence[WeeklySchedule]:
        raise NotImplementedError

    def create(self, schedule: WeeklySchedule) -> WeeklySchedule:
        raise NotImplementedError

    def replace(self, schedule: WeeklySchedule) -> bool:
        raise NotImplementedError

    def delete_by_id(self, schedule_id: str) -> bool:
        raise NotImplementedError

    def delete_by_subject(self, subject_id: str) -> int:
        raise NotImplementedError
