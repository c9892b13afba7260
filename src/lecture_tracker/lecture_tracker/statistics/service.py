from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import format_iso_date, parse_iso_date, start_of_week, today_local
from ..core.constants import (
    AT_RISK_PERCENTAGE,
    ATTENDED_STATUSES,
    DEFAULT_TREND_WEEKS,
    MAX_TREND_WEEKS,
    MISSED_STATUSES,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..database.base import TransactionManager
from ..lectures.model import Lecture
from ..lectures.repository import LectureRepository
from ..subjects.repository import SubjectRepository


def attendance_percentage(attended: int, total: int) -> float:
    """attended/total as a percentage rounded half-up to one decimal; 0 when total is 0."""
    if total <= 0:
        return 0.0
    value = (Decimal(attended) * 100 / Decimal(total)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(value)


def _count(lectures: Iterable[Lecture], statuses: frozenset) -> int:
    return sum(1 for lecture in lectures if lecture.status in statuses)


@dataclass(frozen=True)
class Statistics:
    total_lectures: int
    attended_lectures: int
    missed_lectures: int
    attendance_percentage: float
    breakdown: dict[str, int] = field(default_factory=dict)
    subjects: int = 0

    def to_json(self) -> dict:
        return {
            "totalLectures": self.total_lectures,
            "attendedLectures": self.attended_lectures,
            "missedLectures": self.missed_lectures,
            "attendancePercentage": self.attendance_percentage,
            "breakdown": dict(self.breakdown),
            "subjects": self.subjects,
        }


@dataclass(frozen=True)
class SubjectSummary:
    subject_id: str
    name: str
    code: str
    color: str
    total: int
    marked: int
    attended: int
    missed: int
    percentage: float
    at_risk: bool

    def to_json(self) -> dict:
        return {
            "subjectId": self.subject_id,
            "name": self.name,
            "code": self.code,
            "color": self.color,
            "total": self.total,
            "marked": self.marked,
            "attended": self.attended,
            "missed": self.missed,
            "percentage": self.percentage,
            "atRisk": self.at_risk,
        }


@dataclass(frozen=True)
class WeekPoint:
    period: str
    start: date
    end: date
    attended: int
    missed: int

    def to_json(self) -> dict:
        return {
            "period": self.period,
            "start": format_iso_date(self.start),
            "end": format_iso_date(self.end),
            "attended": self.attended,
            "missed": self.missed,
        }


class StatisticsService:
    """Read-only attendance figures for the dashboard.

    Every figure uses ATTENDED_STATUSES (present, late). Excused lectures count
    toward the total but are neither attended nor missed.
    """

    def __init__(self, lectures: LectureRepository, subjects: SubjectRepository, *, tx: TransactionManager):
        self._lectures = lectures
        self._subjects = subjects
        self._tx = tx

    def get_statistics(self) -> Statistics:
        with self._tx.transaction():
            lectures = list(self._lectures.list_all())
            subject_count = len(self._subjects.list_all())

        total = len(lectures)
        attended = _count(lectures, ATTENDED_STATUSES)
        return Statistics(
            total_lectures=total,
            attended_lectures=attended,
            missed_lectures=_count(lectures, MISSED_STATUSES),
            attendance_percentage=attendance_percentage(attended, total),
            breakdown={s.value: _count(lectures, frozenset({s})) for s in AttendanceStatus},
            subjects=subject_count,
        )

    def subject_summaries(self) -> list[SubjectSummary]:
        """Per-subject attendance over lectures that have a recorded status.

        Unmarked (e.g. upcoming generated) lectures are counted in ``total``
        only, so they do not pull a subject's percentage down.
        """
        with self._tx.transaction():
            subjects = list(self._subjects.list_all())
            lectures = list(self._lectures.list_all())

        by_subject: dict[str, list[Lecture]] = {s.subject_id: [] for s in subjects}
        for lecture in lectures:
            if lecture.subject_id in by_subject:
                by_subject[lecture.subject_id].append(lecture)

        out: list[SubjectSummary] = []
        for s in subjects:
            items = by_subject[s.subject_id]
            marked = sum(1 for lecture in items if lecture.status is not None)
            attended = _count(items, ATTENDED_STATUSES)
            percentage = attendance_percentage(attended, marked)
            out.append(
                SubjectSummary(
                    subject_id=s.subject_id,
                    name=s.name,
                    code=s.code,
                    color=s.color,
                    total=len(items),
                    marked=marked,
                    attended=attended,
                    missed=_count(items, MISSED_STATUSES),
                    percentage=percentage,
                    at_risk=marked > 0 and percentage < AT_RISK_PERCENTAGE,
                )
            )
        return out

    def weekly_trend(self, weeks: int = DEFAULT_TREND_WEEKS, *, today: Optional[date] = None) -> list[WeekPoint]:
        """Attended/missed counts for the last ``weeks`` Sunday-started weeks, oldest first."""
        if not 1 <= weeks <= MAX_TREND_WEEKS:
            raise ValidationError(f"weeks must be between 1 and {MAX_TREND_WEEKS}")
        today = today or today_local()

        with self._tx.transaction():
            marked = [lecture for lecture in self._lectures.list_all() if lecture.status is not None]

        points: list[WeekPoint] = []
        for i in range(weeks - 1, -1, -1):
            week_start = start_of_week(today - timedelta(days=7 * i))
            week_end = week_start + timedelta(days=6)
            in_week = [lecture for lecture in marked if week_start <= parse_iso_date(lecture.date) <= week_end]
            points.append(
                WeekPoint(
                    period=f"Week {weeks - i}",
                    start=week_start,
                    end=week_end,
                    attended=_count(in_week, ATTENDED_STATUSES),
                    missed=_count(in_week, MISSED_STATUSES),
                )
            )
        return points
