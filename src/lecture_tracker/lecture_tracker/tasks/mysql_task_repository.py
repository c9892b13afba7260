from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TaskPriority
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Task
from .repository import TaskRepository

_COLUMNS = "id, title, description, task_date, task_time, priority, completed, subject_id"


def _row_to_task(r: dict) -> Task:
    return Task(
        task_id=r["id"],
        title=r["title"],
        date=r["task_date"],
        completed=r.get("completed") or "false",
        description=r.get("description"),
        time=r.get("task_time"),
        priority=TaskPriority(r["priority"]) if r.get("priority") else None,
        subject_id=r.get("subject_id"),
    )


def _params(task: Task) -> tuple:
    return (
        task.title,
        task.description,
        task.date,
        task.time,
        task.priority.value if task.priority else None,
        task.completed,
        task.subject_id,
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks ORDER BY seq ASC")
            return [_row_to_task(r) for r in fetchall(cur)]

    def get_by_id(self, task_id: str) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE id=%s", (task_id,))
            r = fetchone(cur)
            return _row_to_task(r) if r else None

    def list_by_date(self, date: str) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE task_date=%s ORDER BY seq ASC", (date,))
            return [_row_to_task(r) for r in fetchall(cur)]

    def create(self, task: Task) -> Task:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(id, title, description, task_date, task_time, priority, completed, subject_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (task.task_id, *_params(task)),
            )
        return task

    def replace(self, task: Task) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET title=%s, description=%s, task_date=%s, task_time=%s,
                    priority=%s, completed=%s, subject_id=%s
                WHERE id=%s
                """,
                (*_params(task), task.task_id),
            )
            cur.execute("SELECT 1 AS found FROM tasks WHERE id=%s", (task.task_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, task_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE id=%s", (task_id,))
            return cur.rowcount > 0

    def clear_subject(self, subject_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET subject_id=NULL WHERE subject_id=%s", (subject_id,))
            return int(cur.rowcount)
