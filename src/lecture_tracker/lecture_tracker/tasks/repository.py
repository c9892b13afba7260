from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Task


class TaskRepository(Protocol):
    def list_all(self) -> Sequence[Task]:
        raise NotImplementedError

    def get_by_id(self, task_id: str) -> Optional[Task]:
        raise NotImplementedError

    def list_by_date(self, date: str) -> Sequence[Task]:
        raise NotImplementedError

    def create(self, task: Task) -> Task:
        raise NotImplementedError

    def replace(self, task: Task) -> bool:
        raise NotImplementedError

    def delete_by_id(self, task_id: str) -> bool:
        raise NotImplementedError

    def clear_subject(self, subject_id: str) -> int:
        """Unlink tasks from a subject (subject_id -> None), keeping the tasks.

        Returns how many tasks were unlinked.
        """

        raise NotImplementedError
