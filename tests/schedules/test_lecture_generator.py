from __future__ import annotations

from datetime import date

import pytest

from src.lecture_tracker.lecture_tracker.core.enums import ChangeType
from src.lecture_tracker.lecture_tracker.core.exceptions import ValidationError


@pytest.fixture
def math(container):
    return container.subject_service.create_subject({"name": "Math", "code": "MTH101"})


def _schedule(container, subject, weekday, start="09:00", end="10:30", title="Math lecture"):
    return container.schedule_service.create_schedule(
        {"subject_id": subject.subject_id, "weekday": weekday, "start_time": start, "end_time": end, "title": title}
    )


def test_two_week_range_yields_two_mondays(container, math):
    schedule = _schedule(container, math, weekday=1)

    # 2024-01-01 is a Monday.
    lectures = container.lecture_generator.generate("2024-01-01", "2024-01-14")

    assert [lecture.date for lecture in lectures] == ["2024-01-01", "2024-01-08"]
    for lecture in lectures:
        assert lecture.subject_id == math.subject_id
        assert lecture.title == "Math lecture"
        assert (lecture.start_time, lecture.end_time) == ("09:00", "10:30")
        assert lecture.status is None
        assert lecture.schedule_id == schedule.schedule_id


def test_generation_is_idempotent(container, math):
    _schedule(container, math, weekday=1)

    first = container.lecture_generator.generate(date(2024, 1, 1), date(2024, 1, 14))
    second = container.lecture_generator.generate(date(2024, 1, 1), date(2024, 1, 14))

    assert len(first) == 2
    assert second == []
    assert len(container.lectures_repo.list_all()) == 2


def test_overlapping_range_only_adds_missing_days(container, math):
    _schedule(container, math, weekday=1)
    container.lecture_generator.generate("2024-01-01", "2024-01-07")

    lectures = container.lecture_generator.generate("2024-01-01", "2024-01-14")

    assert [lecture.date for lecture in lectures] == ["2024-01-08"]


def test_existing_manual_lecture_with_same_key_is_not_duplicated(container, math):
    _schedule(container, math, weekday=1)
    container.lecture_service.create_lecture(
        {"subject_id": math.subject_id, "title": "Manual", "date": "2024-01-01", "start_time": "09:00", "end_time": "10:30"}
    )

    lectures = container.lecture_generator.generate("2024-01-01", "2024-01-01")

    assert lectures == []


def test_different_time_on_same_day_is_a_new_lecture(container, math):
    _schedule(container, math, weekday=1, start="09:00", end="10:00")
    _schedule(container, math, weekday=1, start="14:00", end="15:00")

    lectures = container.lecture_generator.generate("2024-01-01", "2024-01-01")

    assert sorted(lecture.start_time for lecture in lectures) == ["09:00", "14:00"]


def test_sunday_is_weekday_zero(container, math):
    _schedule(container, math, weekday=0)

    lectures = container.lecture_generator.generate("2024-01-01", "2024-01-14")

    assert [lecture.date for lecture in lectures] == ["2024-01-07", "2024-01-14"]


def test_no_schedules_generates_nothing(container):
    assert container.lecture_generator.generate("2024-01-01", "2024-03-01") == []


def test_start_after_end_is_an_empty_range(container, math):
    _schedule(container, math, weekday=1)

    assert container.lecture_generator.generate("2024-01-14", "2024-01-01") == []


@pytest.mark.parametrize("start,end", [("2024-13-01", "2024-12-31"), ("yesterday", "2024-01-01"), (None, "2024-01-01")])
def test_invalid_dates_are_rejected(container, start, end):
    with pytest.raises(ValidationError):
        container.lecture_generator.generate(start, end)


def test_service_publishes_lectures_once_per_call(container, math):
    _schedule(container, math, weekday=1)
    sub = container.notifier.subscribe()

    container.schedule_service.generate_lectures("2024-01-01", "2024-01-14")
    container.schedule_service.generate_lectures("2024-01-01", "2024-01-14")

    assert sub.drain() == [ChangeType.LECTURES, ChangeType.LECTURES]


def test_schedule_validation(container, math):
    with pytest.raises(ValidationError):
        _schedule(container, math, weekday=7)
    with pytest.raises(ValidationError):
        _schedule(container, math, weekday=1, start="11:00", end="10:00")
    with pytest.raises(ValidationError):
        container.schedule_service.create_schedule(
            {"subject_id": "missing", "weekday": 1, "start_time": "09:00", "end_time": "10:00", "title": "X"}
        )

    assert container.schedule_service.list_schedules() == []


def test_range_ending_on_last_representable_day(container, math):
    # 9999-12-31 is a Friday.
    _schedule(container, math, weekday=5)

    lectures = container.lecture_generator.generate("9999-12-30", "9999-12-31")

    assert [lecture.date for lecture in lectures] == ["9999-12-31"]
