from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.identifiers import new_id
from ..common.validators import (
    optional_enum,
    optional_text,
    require_iso_date,
    require_non_empty,
    require_time,
    require_time_order,
)
from ..core.enums import AttendanceStatus, ChangeType
from ..core.exceptions import NotFoundError
from ..database.base import TransactionManager
from ..events.notifier import ChangeNotifier
from ..subjects.repository import SubjectRepository
from ..subjects.service import require_subject, with_subject_fields
from .model import Lecture
from .repository import LectureRepository


class LectureService:
    def __init__(
        self,
        lectures: LectureRepository,
        subjects: SubjectRepository,
        *,
        tx: TransactionManager,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self._lectures = lectures
        self._subjects = subjects
        self._tx = tx
        self._notifier = notifier or ChangeNotifier()

    def list_lectures(self, subject_id: Optional[str] = None) -> Sequence[Lecture]:
        if subject_id:
            return self._lectures.list_by_subject(subject_id)
        return self._lectures.list_all()

    def list_lectures_joined(self, subject_id: Optional[str] = None) -> list[dict]:
        """Lectures as JSON, each with subjectName/subjectCode/subjectColor."""
        with self._tx.transaction():
            lectures = self.list_lectures(subject_id)
            by_id = {s.subject_id: s for s in self._subjects.list_all()}
        return [with_subject_fields(lecture.to_json(), by_id.get(lecture.subject_id)) for lecture in lectures]

    def get_lecture(self, lecture_id: str) -> Optional[Lecture]:
        return self._lectures.get_by_id(lecture_id)

    def create_lecture(self, data: Mapping[str, Any]) -> Lecture:
        title = require_non_empty(data.get("title"), "title")
        date = require_iso_date(data.get("date"), "date")
        start_time = require_time(data.get("start_time"), "startTime")
        end_time = require_time(data.get("end_time"), "endTime")
        require_time_order(start_time, end_time)
        notes = optional_text(data.get("notes"), "notes")
        status = optional_enum(data.get("status"), AttendanceStatus, "status")
        attendance_note = optional_text(data.get("attendance_note"), "attendanceNote")
        schedule_id = optional_text(data.get("schedule_id"), "scheduleId")

        with self._tx.transaction():
            subject = require_subject(self._subjects, data.get("subject_id"))
            lecture = self._lectures.create(
                Lecture(
                    lecture_id=new_id(),
                    subject_id=subject.subject_id,
                    title=title,
                    date=date,
                    start_time=start_time,
                    end_time=end_time,
                    notes=notes,
                    status=status,
                    attendance_note=attendance_note,
                    schedule_id=schedule_id,
                )
            )

        self._notifier.publish(ChangeType.LECTURES)
        return lecture

    def update_lecture(self, lecture_id: str, patch: Mapping[str, Any]) -> Lecture:
        changes: dict[str, Any] = {}
        if "title" in patch:
            changes["title"] = require_non_empty(patch["title"], "title")
        if "date" in patch:
            changes["date"] = require_iso_date(patch["date"], "date")
        if "start_time" in patch:
            changes["start_time"] = require_time(patch["start_time"], "startTime")
        if "end_time" in patch:
            changes["end_time"] = require_time(patch["end_time"], "endTime")
        if "notes" in patch:
            changes["notes"] = optional_text(patch["notes"], "notes")
        if "status" in patch:
            changes["status"] = optional_enum(patch["status"], AttendanceStatus, "status")
        if "attendance_note" in patch:
            changes["attendance_note"] = optional_text(patch["attendance_note"], "attendanceNote")
        if "schedule_id" in patch:
            changes["schedule_id"] = optional_text(patch["schedule_id"], "scheduleId")

        with self._tx.transaction():
            existing = self._lectures.get_by_id(lecture_id)
            if existing is None:
                raise NotFoundError("Lecture", lecture_id)
            if "subject_id" in patch:
                changes["subject_id"] = require_subject(self._subjects, patch["subject_id"]).subject_id

            updated = replace(existing, **changes)
            require_time_order(updated.start_time, updated.end_time)
            self._lectures.replace(updated)

        self._notifier.publish(ChangeType.LECTURES)
        return updated

    def mark_attendance(self, lecture_id: str, status: Optional[str], note: Optional[str] = None) -> Lecture:
        """Record (or clear, with status None) attendance for one lecture."""
        return self.update_lecture(lecture_id, {"status": status, "attendance_note": note})

    def delete_lecture(self, lecture_id: str) -> bool:
        deleted = self._lectures.delete_by_id(lecture_id)
        if deleted:
            self._notifier.publish(ChangeType.LECTURES)
        return deleted
