from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.identifiers import new_id
from ..common.validators import (
    normalize_completed,
    optional_enum,
    optional_text,
    optional_time,
    require_iso_date,
    require_non_empty,
)
from ..core.enums import ChangeType, TaskPriority
from ..core.exceptions import NotFoundError
from ..database.base import TransactionManager
from ..events.notifier import ChangeNotifier
from ..subjects.repository import SubjectRepository
from ..subjects.service import require_subject, with_subject_fields
from .model import Task
from .repository import TaskRepository


class TaskService:
    """Use case: manage tasks.

    A task's subject link is soft: it is checked when set, and cleared (not
    cascaded) when the subject goes away.
    """

    def __init__(
        self,
        tasks: TaskRepository,
        subjects: SubjectRepository,
        *,
        tx: TransactionManager,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self._tasks = tasks
        self._subjects = subjects
        self._tx = tx
        self._notifier = notifier or ChangeNotifier()

    def list_tasks(self, date: Optional[str] = None) -> Sequence[Task]:
        if date:
            return self._tasks.list_by_date(date)
        return self._tasks.list_all()

    def list_tasks_joined(self, date: Optional[str] = None) -> list[dict]:
        with self._tx.transaction():
            tasks = self.list_tasks(date)
            by_id = {s.subject_id: s for s in self._subjects.list_all()}
        return [
            with_subject_fields(t.to_json(), by_id.get(t.subject_id) if t.subject_id else None) for t in tasks
        ]

    def get_task(self, task_id: str) -> Optional[Task]:
        return self._tasks.get_by_id(task_id)

    def _subject_link(self, value: Any) -> Optional[str]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return require_subject(self._subjects, value).subject_id

    def create_task(self, data: Mapping[str, Any]) -> Task:
        title = require_non_empty(data.get("title"), "title")
        date = require_iso_date(data.get("date"), "date")
        time = optional_time(data.get("time"), "time")
        priority = optional_enum(data.get("priority"), TaskPriority, "priority")
        completed = normalize_completed(data.get("completed"))
        description = optional_text(data.get("description"), "description")

        with self._tx.transaction():
            task = self._tasks.create(
                Task(
                    task_id=new_id(),
                    title=title,
                    date=date,
                    completed=completed,
                    description=description,
                    time=time,
                    priority=priority,
                    subject_id=self._subject_link(data.get("subject_id")),
                )
            )

        self._notifier.publish(ChangeType.TASKS)
        return task

    def update_task(self, task_id: str, patch: Mapping[str, Any]) -> Task:
        changes: dict[str, Any] = {}
        if "title" in patch:
            changes["title"] = require_non_empty(patch["title"], "title")
        if "date" in patch:
            changes["date"] = require_iso_date(patch["date"], "date")
        if "time" in patch:
            changes["time"] = optional_time(patch["time"], "time")
        if "priority" in patch:
            changes["priority"] = optional_enum(patch["priority"], TaskPriority, "priority")
        if "completed" in patch:
            changes["completed"] = normalize_completed(patch["completed"])
        if "description" in patch:
            changes["description"] = optional_text(patch["description"], "description")

        with self._tx.transaction():
            existing = self._tasks.get_by_id(task_id)
            if existing is None:
                raise NotFoundError("Task", task_id)
            if "subject_id" in patch:
                changes["subject_id"] = self._subject_link(patch["subject_id"])

            updated = replace(existing, **changes)
            self._tasks.replace(updated)

        self._notifier.publish(ChangeType.TASKS)
        return updated

    def set_completed(self, task_id: str, completed: bool) -> Task:
        return self.update_task(task_id, {"completed": completed})

    def delete_task(self, task_id: str) -> bool:
        deleted = self._tasks.delete_by_id(task_id)
        if deleted:
            self._notifier.publish(ChangeType.TASKS)
        return deleted
