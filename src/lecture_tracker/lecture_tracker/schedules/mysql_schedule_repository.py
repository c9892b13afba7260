from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WeeklySchedule
from .repository import WeeklyScheduleRepository

_COLUMNS = "id, subject_id, weekday, start_time, end_time, title"


def _row_to_schedule(r: dict) -> WeeklySchedule:
    return WeeklySchedule(
        schedule_id=r["id"],
        subject_id=r["subject_id"],
        weekday=int(r["weekday"]),
        start_time=r["start_time"],
        end_time=r["end_time"],
        title=r["title"],
    )


class MySQLWeeklyScheduleRepository(WeeklyScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[WeeklySchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM weekly_schedules ORDER BY seq ASC")
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def get_by_id(self, schedule_id: str) -> Optional[WeeklySchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM weekly_schedules WHERE id=%s", (schedule_id,))
            r = fetchone(cur)
            return _row_to_schedule(r) if r else None

    def list_by_subject(self, subject_id: str) -> Sequence[WeeklySchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM weekly_schedules WHERE subject_id=%s ORDER BY seq ASC",
                (subject_id,),
            )
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def list_by_weekday(self, weekday: int) -> Sequence[WeeklySchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM weekly_schedules WHERE weekday=%s ORDER BY seq ASC",
                (int(weekday),),
            )
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def create(self, schedule: WeeklySchedule) -> WeeklySchedule:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO weekly_schedules(id, subject_id, weekday, start_time, end_time, title)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    schedule.schedule_id,
                    schedule.subject_id,
                    schedule.weekday,
                    schedule.start_time,
                    schedule.end_time,
                    schedule.title,
                ),
            )
        return schedule

    def replace(self, schedule: WeeklySchedule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE weekly_schedules
                SET subject_id=%s, weekday=%s, start_time=%s, end_time=%s, title=%s
                WHERE id=%s
                """,
                (
                    schedule.subject_id,
                    schedule.weekday,
                    schedule.start_time,
                    schedule.end_time,
                    schedule.title,
                    schedule.schedule_id,
                ),
            )
            cur.execute("SELECT 1 AS found FROM weekly_schedules WHERE id=%s", (schedule.schedule_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, schedule_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM weekly_schedules WHERE id=%s", (schedule_id,))
            return cur.rowcount > 0

    def delete_by_subject(self, subject_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM weekly_schedules WHERE subject_id=%s", (subject_id,))
            return int(cur.rowcount)
