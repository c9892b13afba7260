from __future__ import annotations

from contextlib import contextmanager
from typing import Optional, Sequence

import mysql.connector

from ..common.validators import normalize_code
from ..core.exceptions import DuplicateCodeError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Subject
from .repository import SubjectRepository

_COLUMNS = "id, name, code, teacher, color"

# ER_DUP_ENTRY; only uix_subject_code can collide besides the primary key.
_DUPLICATE_ENTRY = 1062


def _row_to_subject(r: dict) -> Subject:
    return Subject(
        subject_id=r["id"],
        name=r["name"],
        code=r["code"],
        color=r["color"],
        teacher=r.get("teacher"),
    )


@contextmanager
def _unique_code(code: str):
    try:
        yield
    except mysql.connector.IntegrityError as exc:
        if exc.errno == _DUPLICATE_ENTRY:
            raise DuplicateCodeError(code) from exc
        raise


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subjects ORDER BY seq ASC")
            return [_row_to_subject(r) for r in fetchall(cur)]

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subjects WHERE id=%s", (subject_id,))
            r = fetchone(cur)
            return _row_to_subject(r) if r else None

    def create(self, subject: Subject) -> Subject:
        with db_cursor(self._conn_factory) as (_, cur), _unique_code(subject.code):
            cur.execute(
                """
                INSERT INTO subjects(id, name, code, code_key, teacher, color)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    subject.subject_id,
                    subject.name,
                    subject.code,
                    normalize_code(subject.code),
                    subject.teacher,
                    subject.color,
                ),
            )
        return subject

    def replace(self, subject: Subject) -> bool:
        with db_cursor(self._conn_factory) as (_, cur), _unique_code(subject.code):
            cur.execute(
                """
                UPDATE subjects
                SET name=%s, code=%s, code_key=%s, teacher=%s, color=%s
                WHERE id=%s
                """,
                (
                    subject.name,
                    subject.code,
                    normalize_code(subject.code),
                    subject.teacher,
                    subject.color,
                    subject.subject_id,
                ),
            )
            # MySQL reports 0 affected rows when nothing changed; check existence instead.
            cur.execute("SELECT 1 AS found FROM subjects WHERE id=%s", (subject.subject_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, subject_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subjects WHERE id=%s", (subject_id,))
            return cur.rowcount > 0
