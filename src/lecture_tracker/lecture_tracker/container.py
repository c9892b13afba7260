from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .core.constants import DEFAULT_EVENT_QUEUE_SIZE
from .database.base import TransactionManager
from .database.connection import DBConfig, DatabaseConnection
from .database.json_store import JsonFileDatabase
from .events.notifier import ChangeNotifier
from .lectures.json_lecture_repository import JsonLectureRepository
from .lectures.mysql_lecture_repository import MySQLLectureRepository
from .lectures.repository import LectureRepository
from .lectures.service import LectureService
from .schedules.generator import LectureGenerator
from .schedules.json_schedule_repository import JsonWeeklyScheduleRepository
from .schedules.mysql_schedule_repository import MySQLWeeklyScheduleRepository
from .schedules.repository import WeeklyScheduleRepository
from .schedules.service import WeeklyScheduleService
from .statistics.service import StatisticsService
from .subjects.cascade import SubjectCascade
from .subjects.json_subject_repository import JsonSubjectRepository
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.repository import SubjectRepository
from .subjects.service import SubjectService
from .tasks.json_task_repository import JsonTaskRepository
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    tx: TransactionManager
    notifier: ChangeNotifier

    subjects_repo: SubjectRepository
    lectures_repo: LectureRepository
    schedules_repo: WeeklyScheduleRepository
    tasks_repo: TaskRepository

    subject_cascade: SubjectCascade
    lecture_generator: LectureGenerator

    subject_service: SubjectService
    lecture_service: LectureService
    schedule_service: WeeklyScheduleService
    task_service: TaskService
    statistics_service: StatisticsService


def build_container(
    *,
    backend: str = "json",
    data_dir: Optional[str] = None,
    db_config: Optional[Mapping[str, Any]] = None,
    event_queue_size: int = DEFAULT_EVENT_QUEUE_SIZE,
) -> Container:
    backend = (backend or "json").strip().lower()
    if backend == "json":
        db = JsonFileDatabase(data_dir)
        tx: TransactionManager = db
        subjects_repo: SubjectRepository = JsonSubjectRepository(db)
        lectures_repo: LectureRepository = JsonLectureRepository(db)
        schedules_repo: WeeklyScheduleRepository = JsonWeeklyScheduleRepository(db)
        tasks_repo: TaskRepository = JsonTaskRepository(db)
    elif backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(dict(db_config or {})))
        tx = conn
        subjects_repo = MySQLSubjectRepository(conn)
        lectures_repo = MySQLLectureRepository(conn)
        schedules_repo = MySQLWeeklyScheduleRepository(conn)
        tasks_repo = MySQLTaskRepository(conn)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r} (expected 'json' or 'mysql')")

    logger.info("Using %s storage backend", backend)

    notifier = ChangeNotifier(queue_size=event_queue_size)
    subject_cascade = SubjectCascade(subjects_repo, lectures_repo, schedules_repo, tasks_repo, tx=tx)
    lecture_generator = LectureGenerator(schedules_repo, lectures_repo, tx=tx)

    return Container(
        tx=tx,
        notifier=notifier,
        subjects_repo=subjects_repo,
        lectures_repo=lectures_repo,
        schedules_repo=schedules_repo,
        tasks_repo=tasks_repo,
        subject_cascade=subject_cascade,
        lecture_generator=lecture_generator,
        subject_service=SubjectService(subjects_repo, subject_cascade, tx=tx, notifier=notifier),
        lecture_service=LectureService(lectures_repo, subjects_repo, tx=tx, notifier=notifier),
        schedule_service=WeeklyScheduleService(
            schedules_repo, subjects_repo, lecture_generator, tx=tx, notifier=notifier
        ),
        task_service=TaskService(tasks_repo, subjects_repo, tx=tx, notifier=notifier),
        statistics_service=StatisticsService(lectures_repo, subjects_repo, tx=tx),
    )
