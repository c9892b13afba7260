from __future__ import annotations

from typing import Optional, Sequence

from ..database.json_store import SCHEDULES, JsonFileDatabase
from .model import WeeklySchedule
from .repository import WeeklyScheduleRepository


class JsonWeeklyScheduleRepository(WeeklyScheduleRepository):
    def __init__(self, db: JsonFileDatabase):
        self._db = db

    def list_all(self) -> Sequence[WeeklySchedule]:
        with self._db.transaction() as data:
            return [WeeklySchedule.from_json(r) for r in data.get(SCHEDULES).values()]

    def get_by_id(self, schedule_id: str) -> Optional[WeeklySchedule]:
        with self._db.transaction() as data:
            r = data.get(SCHEDULES).get(schedule_id)
            return WeeklySchedule.from_json(r) if r else None

    def list_by_subject(self, subject_id: str) -> Sequence[WeeklySchedule]:
        with self._db.transaction() as data:
            return [WeeklySchedule.from_json(r) for r in data.get(SCHEDULES).values() if r["subjectId"] == subject_id]

    def list_by_weekday(self, weekday: int) -> Sequence[WeeklySchedule]:
        with self._db.transaction() as data:
            return [WeeklySchedule.from_json(r) for r in data.get(SCHEDULES).values() if int(r["weekday"]) == weekday]

    def create(self, schedule: WeeklySchedule) -> WeeklySchedule:
        with self._db.transaction() as data:
            data.put(SCHEDULES, schedule.to_json())
        return schedule

    def replace(self, schedule: WeeklySchedule) -> bool:
        with self._db.transaction() as data:
            if schedule.schedule_id not in data.get(SCHEDULES):
                return False
            data.put(SCHEDULES, schedule.to_json())
            return True

    def delete_by_id(self, schedule_id: str) -> bool:
        with self._db.transaction() as data:
            return data.remove(SCHEDULES, schedule_id)

    def delete_by_subject(self, subject_id: str) -> int:
        with self._db.transaction() as data:
            ids = [sid for sid, r in data.get(SCHEDULES).items() if r["subjectId"] == subject_id]
            for sid in ids:
                data.remove(SCHEDULES, sid)
            return len(ids)
