from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Lecture
from .repository import LectureRepository

_COLUMNS = "id, subject_id, title, lecture_date, start_time, end_time, notes, status, attendance_note, schedule_id"


def _row_to_lecture(r: dict) -> Lecture:
    return Lecture(
        lecture_id=r["id"],
        subject_id=r["subject_id"],
        title=r["title"],
        date=r["lecture_date"],
        start_time=r["start_time"],
        end_time=r["end_time"],
        notes=r.get("notes"),
        status=AttendanceStatus(r["status"]) if r.get("status") else None,
        attendance_note=r.get("attendance_note"),
        schedule_id=r.get("schedule_id"),
    )


def _params(lecture: Lecture) -> tuple:
    return (
        lecture.subject_id,
        lecture.title,
        lecture.date,
        lecture.start_time,
        lecture.end_time,
        lecture.notes,
        lecture.status.value if lecture.status else None,
        lecture.attendance_note,
        lecture.schedule_id,
    )


class MySQLLectureRepository(LectureRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Lecture]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM lectures ORDER BY seq ASC")
            return [_row_to_lecture(r) for r in fetchall(cur)]

    def get_by_id(self, lecture_id: str) -> Optional[Lecture]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM lectures WHERE id=%s", (lecture_id,))
            r = fetchone(cur)
            return _row_to_lecture(r) if r else None

    def list_by_subject(self, subject_id: str) -> Sequence[Lecture]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM lectures WHERE subject_id=%s ORDER BY seq ASC", (subject_id,))
            return [_row_to_lecture(r) for r in fetchall(cur)]

    def create(self, lecture: Lecture) -> Lecture:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO lectures(
                    id, subject_id, title, lecture_date, start_time, end_time,
                    notes, status, attendance_note, schedule_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (lecture.lecture_id, *_params(lecture)),
            )
        return lecture

    def replace(self, lecture: Lecture) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE lectures
                SET subject_id=%s, title=%s, lecture_date=%s, start_time=%s, end_time=%s,
                    notes=%s, status=%s, attendance_note=%s, schedule_id=%s
                WHERE id=%s
                """,
                (*_params(lecture), lecture.lecture_id),
            )
            cur.execute("SELECT 1 AS found FROM lectures WHERE id=%s", (lecture.lecture_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, lecture_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM lectures WHERE id=%s", (lecture_id,))
            return cur.rowcount > 0

    def delete_by_subject(self, subject_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM lectures WHERE subject_id=%s", (subject_id,))
            return int(cur.rowcount)
