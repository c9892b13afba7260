from __future__ import annotations

from datetime import date

import pytest

from src.lecture_tracker.lecture_tracker.core.constants import MAX_TREND_WEEKS
from src.lecture_tracker.lecture_tracker.core.exceptions import ValidationError
from src.lecture_tracker.lecture_tracker.statistics.service import attendance_percentage


def _lectures_with(container, statuses, *, dates=None, code="MTH101"):
    subject = container.subject_service.create_subject({"name": code, "code": code})
    dates = dates or ["2024-01-01"] * len(statuses)
    for i, (status, day) in enumerate(zip(statuses, dates)):
        container.lecture_service.create_lecture(
            {
                "subject_id": subject.subject_id,
                "title": f"L{i}",
                "date": day,
                "start_time": f"{8 + i % 10:02d}:00",
                "end_time": f"{8 + i % 10:02d}:50",
                "status": status,
            }
        )
    return subject


def test_empty_store(container):
    stats = container.statistics_service.get_statistics()

    assert stats.total_lectures == 0
    assert stats.attended_lectures == 0
    assert stats.missed_lectures == 0
    assert stats.attendance_percentage == 0


def test_counts_and_breakdown(container):
    _lectures_with(container, ["present", "late", "absent", "excused", None])

    stats = container.statistics_service.get_statistics()

    assert stats.total_lectures == 5
    assert stats.attended_lectures == 2
    assert stats.missed_lectures == 1
    assert stats.attendance_percentage == 40.0
    assert stats.breakdown == {"present": 1, "absent": 1, "late": 1, "excused": 1}
    assert stats.subjects == 1
    assert stats.attended_lectures + stats.missed_lectures <= stats.total_lectures


def test_to_json_uses_camel_case(container):
    _lectures_with(container, ["present", "absent", "absent"])

    payload = container.statistics_service.get_statistics().to_json()

    assert payload["totalLectures"] == 3
    assert payload["attendedLectures"] == 1
    assert payload["missedLectures"] == 2
    assert payload["attendancePercentage"] == 33.3


@pytest.mark.parametrize(
    "attended,total,expected",
    [
        (0, 0, 0.0),
        (2, 3, 66.7),
        (1, 8, 12.5),
        (1, 16, 6.3),
        (5, 5, 100.0),
    ],
)
def test_percentage_rounds_half_up_to_one_decimal(attended, total, expected):
    assert attendance_percentage(attended, total) == expected


def test_subject_summaries_use_marked_lectures(container):
    good = _lectures_with(container, ["present", "present", "late", None], code="GOOD1")
    bad = _lectures_with(container, ["absent", "absent", "present"], code="BAD1")
    fresh = container.subject_service.create_subject({"name": "New", "code": "NEW1"})

    summaries = {s.subject_id: s for s in container.statistics_service.subject_summaries()}

    assert summaries[good.subject_id].total == 4
    assert summaries[good.subject_id].marked == 3
    assert summaries[good.subject_id].percentage == 100.0
    assert summaries[good.subject_id].at_risk is False

    assert summaries[bad.subject_id].percentage == 33.3
    assert summaries[bad.subject_id].at_risk is True

    assert summaries[fresh.subject_id].percentage == 0.0
    assert summaries[fresh.subject_id].at_risk is False


def test_weekly_trend_uses_sunday_weeks(container, fixed_today):
    # fixed_today is Wednesday 2024-01-10; its week starts Sunday 2024-01-07.
    _lectures_with(
        container,
        ["present", "absent", "late", None],
        dates=["2024-01-06", "2024-01-07", "2024-01-09", "2024-01-09"],
    )

    points = container.statistics_service.weekly_trend(2)

    assert [p.period for p in points] == ["Week 1", "Week 2"]
    assert (points[0].start, points[0].end) == (date(2023, 12, 31), date(2024, 1, 6))
    assert (points[0].attended, points[0].missed) == (1, 0)
    assert (points[1].start, points[1].end) == (date(2024, 1, 7), date(2024, 1, 13))
    assert (points[1].attended, points[1].missed) == (1, 1)
    assert points[1].to_json()["start"] == "2024-01-07"


def test_weekly_trend_default_length(container, fixed_today):
    assert len(container.statistics_service.weekly_trend()) == 7


def test_weekly_trend_rejects_zero_weeks(container):
    with pytest.raises(ValidationError):
        container.statistics_service.weekly_trend(0)


def test_weekly_trend_is_capped(container, fixed_today):
    assert len(container.statistics_service.weekly_trend(MAX_TREND_WEEKS)) == MAX_TREND_WEEKS
    with pytest.raises(ValidationError):
        container.statistics_service.weekly_trend(MAX_TREND_WEEKS + 1)
