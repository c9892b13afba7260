from __future__ import annotations

from typing import Optional, Sequence

from ..database.json_store import TASKS, JsonFileDatabase
from .model import Task
from .repository import TaskRepository


class JsonTaskRepository(TaskRepository):
    def __init__(self, db: JsonFileDatabase):
        self._db = db

    def list_all(self) -> Sequence[Task]:
        with self._db.transaction() as data:
            return [Task.from_json(r) for r in data.get(TASKS).values()]

    def get_by_id(self, task_id: str) -> Optional[Task]:
        with self._db.transaction() as data:
            r = data.get(TASKS).get(task_id)
            return Task.from_json(r) if r else None

    def list_by_date(self, date: str) -> Sequence[Task]:
        with self._db.transaction() as data:
            return [Task.from_json(r) for r in data.get(TASKS).values() if r["date"] == date]

    def create(self, task: Task) -> Task:
        with self._db.transaction() as data:
            data.put(TASKS, task.to_json())
        return task

    def replace(self, task: Task) -> bool:
        with self._db.transaction() as data:
            if task.task_id not in data.get(TASKS):
                return False
            data.put(TASKS, task.to_json())
            return True

    def delete_by_id(self, task_id: str) -> bool:
        with self._db.transaction() as data:
            return data.remove(TASKS, task_id)

    def clear_subject(self, subject_id: str) -> int:
        with self._db.transaction() as data:
            linked = [r for r in data.get(TASKS).values() if r.get("subjectId") == subject_id]
            for r in linked:
                data.put(TASKS, {**r, "subjectId": None})
            return len(linked)
