from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.identifiers import new_id
from ..common.validators import require_non_empty, require_time, require_time_order, require_weekday
from ..core.enums import ChangeType
from ..core.exceptions import NotFoundError
from ..database.base import TransactionManager
from ..events.notifier import ChangeNotifier
from ..lectures.model import Lecture
from ..subjects.repository import SubjectRepository
from ..subjects.service import require_subject, with_subject_fields
from .generator import LectureGenerator
from .model import WeeklySchedule
from .repository import WeeklyScheduleRepository


class WeeklyScheduleService:
    def __init__(
        self,
        schedules: WeeklyScheduleRepository,
        subjects: SubjectRepository,
        generator: LectureGenerator,
        *,
        tx: TransactionManager,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self._schedules = schedules
        self._subjects = subjects
        self._generator = generator
        self._tx = tx
        self._notifier = notifier or ChangeNotifier()

    def list_schedules(self, subject_id: Optional[str] = None) -> Sequence[WeeklySchedule]:
        if subject_id:
            return self._schedules.list_by_subject(subject_id)
        return self._schedules.list_all()

    def list_schedules_joined(self, subject_id: Optional[str] = None) -> list[dict]:
        with self._tx.transaction():
            schedules = self.list_schedules(subject_id)
            by_id = {s.subject_id: s for s in self._subjects.list_all()}
        return [with_subject_fields(s.to_json(), by_id.get(s.subject_id)) for s in schedules]

    def get_schedule(self, schedule_id: str) -> Optional[WeeklySchedule]:
        return self._schedules.get_by_id(schedule_id)

    def create_schedule(self, data: Mapping[str, Any]) -> WeeklySchedule:
        title = require_non_empty(data.get("title"), "title")
        weekday = require_weekday(data.get("weekday"))
        start_time = require_time(data.get("start_time"), "startTime")
        end_time = require_time(data.get("end_time"), "endTime")
        require_time_order(start_time, end_time)

        with self._tx.transaction():
            subject = require_subject(self._subjects, data.get("subject_id"))
            schedule = self._schedules.create(
                WeeklySchedule(
                    schedule_id=new_id(),
                    subject_id=subject.subject_id,
                    weekday=weekday,
                    start_time=start_time,
                    end_time=end_time,
                    title=title,
                )
            )

        self._notifier.publish(ChangeType.WEEKLY_SCHEDULES)
        return schedule

    def update_schedule(self, schedule_id: str, patch: Mapping[str, Any]) -> WeeklySchedule:
        changes: dict[str, Any] = {}
        if "title" in patch:
            changes["title"] = require_non_empty(patch["title"], "title")
        if "weekday" in patch:
            changes["weekday"] = require_weekday(patch["weekday"])
        if "start_time" in patch:
            changes["start_time"] = require_time(patch["start_time"], "startTime")
        if "end_time" in patch:
            changes["end_time"] = require_time(patch["end_time"], "endTime")

        with self._tx.transaction():
            existing = self._schedules.get_by_id(schedule_id)
            if existing is None:
                raise NotFoundError("Weekly schedule", schedule_id)
            if "subject_id" in patch:
                changes["subject_id"] = require_subject(self._subjects, patch["subject_id"]).subject_id

            updated = replace(existing, **changes)
            require_time_order(updated.start_time, updated.end_time)
            self._schedules.replace(updated)

        self._notifier.publish(ChangeType.WEEKLY_SCHEDULES)
        return updated

    def delete_schedule(self, schedule_id: str) -> bool:
        deleted = self._schedules.delete_by_id(schedule_id)
        if deleted:
            self._notifier.publish(ChangeType.WEEKLY_SCHEDULES)
        return deleted

    def generate_lectures(self, start_date: Any, end_date: Any) -> list[Lecture]:
        generated = self._generator.generate(start_date, end_date)
        self._notifier.publish(ChangeType.LECTURES)
        return generated
