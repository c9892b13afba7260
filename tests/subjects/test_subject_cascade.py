from __future__ import annotations

import pytest

from src.lecture_tracker.lecture_tracker.lectures.json_lecture_repository import JsonLectureRepository
from src.lecture_tracker.lecture_tracker.lectures.model import Lecture
from src.lecture_tracker.lecture_tracker.schedules.json_schedule_repository import JsonWeeklyScheduleRepository
from src.lecture_tracker.lecture_tracker.schedules.model import WeeklySchedule
from src.lecture_tracker.lecture_tracker.subjects.cascade import CascadeResult, SubjectCascade
from src.lecture_tracker.lecture_tracker.subjects.json_subject_repository import JsonSubjectRepository
from src.lecture_tracker.lecture_tracker.subjects.model import Subject
from src.lecture_tracker.lecture_tracker.tasks.json_task_repository import JsonTaskRepository


class ExplodingTasks(JsonTaskRepository):
    """Fails after the lectures and schedules have already been deleted."""

    def clear_subject(self, subject_id: str) -> int:
        raise RuntimeError("disk on fire")


def _seed(container):
    math = container.subject_service.create_subject({"name": "Math", "code": "MTH101"})
    physics = container.subject_service.create_subject({"name": "Physics", "code": "PHY1"})
    container.schedule_service.create_schedule(
        {"subject_id": math.subject_id, "weekday": 1, "start_time": "09:00", "end_time": "10:30", "title": "Math"}
    )
    container.schedule_service.create_schedule(
        {"subject_id": physics.subject_id, "weekday": 2, "start_time": "11:00", "end_time": "12:00", "title": "Phys"}
    )
    for day in ("2024-01-01", "2024-01-08"):
        container.lecture_service.create_lecture(
            {"subject_id": math.subject_id, "title": "Math", "date": day, "start_time": "09:00", "end_time": "10:30"}
        )
    container.lecture_service.create_lecture(
        {"subject_id": physics.subject_id, "title": "Phys", "date": "2024-01-02", "start_time": "11:00", "end_time": "12:00"}
    )
    container.task_service.create_task({"title": "Homework", "date": "2024-01-03", "subject_id": math.subject_id})
    container.task_service.create_task({"title": "Lab report", "date": "2024-01-04", "subject_id": physics.subject_id})
    return math, physics


def test_cascade_removes_dependents_and_unlinks_tasks(container):
    math, physics = _seed(container)

    result = container.subject_cascade.delete_subject(math.subject_id)

    assert result == CascadeResult(math.subject_id, lectures_deleted=2, schedules_deleted=1, tasks_unlinked=1)
    assert container.subjects_repo.get_by_id(math.subject_id) is None
    assert container.lectures_repo.list_by_subject(math.subject_id) == []
    assert container.schedules_repo.list_by_subject(math.subject_id) == []

    tasks = {t.title: t for t in container.tasks_repo.list_all()}
    assert tasks["Homework"].subject_id is None
    assert tasks["Lab report"].subject_id == physics.subject_id

    # Other subjects are untouched.
    assert len(container.lectures_repo.list_by_subject(physics.subject_id)) == 1
    assert len(container.schedules_repo.list_by_subject(physics.subject_id)) == 1


def test_cascade_on_missing_subject_returns_none(container):
    _seed(container)

    assert container.subject_cascade.delete_subject("missing") is None
    assert len(container.lectures_repo.list_all()) == 3


def test_cascade_failure_rolls_everything_back(store):
    subjects = JsonSubjectRepository(store)
    lectures = JsonLectureRepository(store)
    schedules = JsonWeeklyScheduleRepository(store)

    subjects.create(Subject(subject_id="s1", name="Math", code="MTH101", color="#000"))
    lectures.create(Lecture("l1", "s1", "Math", "2024-01-01", "09:00", "10:00"))
    schedules.create(WeeklySchedule("w1", "s1", 1, "09:00", "10:00", "Math"))

    cascade = SubjectCascade(subjects, lectures, schedules, ExplodingTasks(store), tx=store)

    with pytest.raises(RuntimeError):
        cascade.delete_subject("s1")

    assert subjects.get_by_id("s1") is not None
    assert [lecture.lecture_id for lecture in lectures.list_all()] == ["l1"]
    assert [s.schedule_id for s in schedules.list_all()] == ["w1"]


def test_example_scenario(container):
    math = container.subject_service.create_subject({"name": "Math", "code": "MTH101"})
    schedule = container.schedule_service.create_schedule(
        {"subject_id": math.subject_id, "weekday": 1, "start_time": "09:00", "end_time": "10:00", "title": "Math"}
    )
    task = container.task_service.create_task({"title": "Read ch.1", "date": "2024-01-01", "subject_id": math.subject_id})
    lecture = container.lecture_service.create_lecture(
        {"subject_id": math.subject_id, "title": "Math", "date": "2024-01-01", "start_time": "09:00", "end_time": "10:00"}
    )

    assert container.subject_service.delete_subject(math.subject_id) is True

    assert container.lecture_service.get_lecture(lecture.lecture_id) is None
    assert container.schedule_service.get_schedule(schedule.schedule_id) is None
    remaining = container.task_service.get_task(task.task_id)
    assert remaining is not None
    assert remaining.subject_id is None
