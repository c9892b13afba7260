from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..database.base import TransactionManager
from ..lectures.repository import LectureRepository
from ..schedules.repository import WeeklyScheduleRepository
from ..tasks.repository import TaskRepository
from .repository import SubjectRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CascadeResult:
    subject_id: str
    lectures_deleted: int
    schedules_deleted: int
    tasks_unlinked: int


class SubjectCascade:
    """Removes a subject together with everything that depends on it.

    Lectures and weekly schedules are deleted; tasks survive with their subject
    link cleared. All of it happens in one transaction, so readers see either
    the subject with its dependents or none of them.
    """

    def __init__(
        self,
        subjects: SubjectRepository,
        lectures: LectureRepository,
        schedules: WeeklyScheduleRepository,
        tasks: TaskRepository,
        *,
        tx: TransactionManager,
    ):
        self._subjects = subjects
        self._lectures = lectures
        self._schedules = schedules
        self._tasks = tasks
        self._tx = tx

    def delete_subject(self, subject_id: str) -> Optional[CascadeResult]:
        """Returns None (and touches nothing) when the subject does not exist."""
        with self._tx.transaction():
            if self._subjects.get_by_id(subject_id) is None:
                return None

            result = CascadeResult(
                subject_id=subject_id,
                lectures_deleted=self._lectures.delete_by_subject(subject_id),
                schedules_deleted=self._schedules.delete_by_subject(subject_id),
                tasks_unlinked=self._tasks.clear_subject(subject_id),
            )
            self._subjects.delete_by_id(subject_id)

        logger.info(
            "Deleted subject %s (lectures=%d, schedules=%d, tasks unlinked=%d)",
            subject_id,
            result.lectures_deleted,
            result.schedules_deleted,
            result.tasks_unlinked,
        )
        return result
