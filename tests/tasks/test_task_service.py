from __future__ import annotations

import pytest

from src.lecture_tracker.lecture_tracker.core.enums import TaskPriority
from src.lecture_tracker.lecture_tracker.core.exceptions import NotFoundError, ValidationError


def test_create_task_defaults(container):
    task = container.task_service.create_task({"title": "Buy notebook", "date": "2024-01-05"})

    assert task.completed == "false"
    assert task.is_completed is False
    assert task.subject_id is None
    assert task.priority is None
    assert task.time is None


def test_create_task_with_everything(container):
    math = container.subject_service.create_subject({"name": "Math", "code": "MTH101"})

    task = container.task_service.create_task(
        {
            "title": "Problem set 3",
            "description": "Exercises 1-10",
            "date": "2024-01-05",
            "time": "18:00",
            "priority": "high",
            "completed": True,
            "subject_id": math.subject_id,
        }
    )

    assert task.priority is TaskPriority.HIGH
    assert task.completed == "true"
    assert task.subject_id == math.subject_id


@pytest.mark.parametrize(
    "data",
    [
        {"title": "X", "date": "2024-01-05", "priority": "urgent"},
        {"title": "X", "date": "2024-01-05", "completed": "yes"},
        {"title": "X", "date": "2024-01-05", "time": "25:00"},
        {"title": "X", "date": "2024-01-05", "subject_id": "missing"},
        {"title": "X"},
    ],
)
def test_create_task_validation(container, data):
    with pytest.raises(ValidationError):
        container.task_service.create_task(data)

    assert container.task_service.list_tasks() == []


def test_list_tasks_by_date(container):
    container.task_service.create_task({"title": "A", "date": "2024-01-05"})
    container.task_service.create_task({"title": "B", "date": "2024-01-06"})

    assert [t.title for t in container.task_service.list_tasks("2024-01-06")] == ["B"]


def test_toggle_completed_and_unlink_subject(container):
    math = container.subject_service.create_subject({"name": "Math", "code": "MTH101"})
    task = container.task_service.create_task({"title": "A", "date": "2024-01-05", "subject_id": math.subject_id})

    done = container.task_service.set_completed(task.task_id, True)
    assert done.completed == "true"

    unlinked = container.task_service.update_task(task.task_id, {"subject_id": ""})
    assert unlinked.subject_id is None
    assert unlinked.completed == "true"


def test_joined_list_has_null_subject_fields_when_unlinked(container):
    container.task_service.create_task({"title": "A", "date": "2024-01-05"})

    [row] = container.task_service.list_tasks_joined()

    assert row["subjectName"] is None
    assert row["completed"] == "false"


def test_update_missing_task(container):
    with pytest.raises(NotFoundError):
        container.task_service.update_task("missing", {"title": "X"})
