from __future__ import annotations

import logging
from datetime import date
from typing import Any, Sequence

from ..common.datetime_utils import format_iso_date, iter_days, parse_iso_date, sunday_weekday
from ..common.identifiers import new_id
from ..core.exceptions import ValidationError
from ..database.base import TransactionManager
from ..lectures.model import Lecture, LectureKey
from ..lectures.repository import LectureRepository
from .model import WeeklySchedule
from .repository import WeeklyScheduleRepository

logger = logging.getLogger(__name__)


def parse_date_field(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)") from None


class LectureGenerator:
    """Expands weekly schedules into dated lectures over an inclusive date range.

    A lecture is only created when no lecture with the same ``LectureKey``
    exists yet, so running the same (or an overlapping) range twice is safe.
    Dates are naive calendar dates; no timezone conversion happens.
    """

    def __init__(
        self,
        schedules: WeeklyScheduleRepository,
        lectures: LectureRepository,
        *,
        tx: TransactionManager,
    ):
        self._schedules = schedules
        self._lectures = lectures
        self._tx = tx

    def generate(self, start_date: Any, end_date: Any) -> list[Lecture]:
        """Create the missing lectures and return only those, in date order."""
        start = parse_date_field(start_date, "startDate")
        end = parse_date_field(end_date, "endDate")

        generated: list[Lecture] = []
        with self._tx.transaction():
            by_weekday: dict[int, Sequence[WeeklySchedule]] = {}
            existing = {lecture.key for lecture in self._lectures.list_all()}

            for day in iter_days(start, end):
                weekday = sunday_weekday(day)
                if weekday not in by_weekday:
                    by_weekday[weekday] = self._schedules.list_by_weekday(weekday)

                day_s = format_iso_date(day)
                for schedule in by_weekday[weekday]:
                    key = LectureKey(schedule.subject_id, day_s, schedule.start_time, schedule.end_time)
                    if key in existing:
                        continue

                    lecture = self._lectures.create(
                        Lecture(
                            lecture_id=new_id(),
                            subject_id=schedule.subject_id,
                            title=schedule.title,
                            date=day_s,
                            start_time=schedule.start_time,
                            end_time=schedule.end_time,
                            schedule_id=schedule.schedule_id,
                        )
                    )
                    existing.add(key)
                    generated.append(lecture)

        logger.info("Generated %d lecture(s) for %s..%s", len(generated), start, end)
        return generated
