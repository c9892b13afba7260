from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.identifiers import new_id
from ..common.validators import normalize_code, optional_text, require_non_empty
from ..core.constants import DEFAULT_SUBJECT_COLOR
from ..core.enums import ChangeType
from ..core.exceptions import DuplicateCodeError, NotFoundError, ValidationError
from ..database.base import TransactionManager
from ..events.notifier import ChangeNotifier
from .cascade import SubjectCascade
from .model import Subject
from .repository import SubjectRepository

logger = logging.getLogger(__name__)


def ensure_unique_code(subjects: Iterable[Subject], code: str, *, exclude_id: Optional[str] = None) -> None:
    """Raise DuplicateCodeError if another subject already uses ``code``.

    Codes are compared trimmed and case-folded. Used by both create and update.
    """
    key = normalize_code(code)
    for s in subjects:
        if s.subject_id != exclude_id and normalize_code(s.code) == key:
            raise DuplicateCodeError(code)


class SubjectService:
    """Use case: manage subjects (create, partial update, cascading delete)."""

    def __init__(
        self,
        subjects: SubjectRepository,
        cascade: SubjectCascade,
        *,
        tx: TransactionManager,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self._subjects = subjects
        self._cascade = cascade
        self._tx = tx
        self._notifier = notifier or ChangeNotifier()

    def list_subjects(self) -> Sequence[Subject]:
        return self._subjects.list_all()

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        return self._subjects.get_by_id(subject_id)

    def create_subject(self, data: Mapping[str, Any]) -> Subject:
        name = require_non_empty(data.get("name"), "name")
        code = require_non_empty(data.get("code"), "code")
        teacher = optional_text(data.get("teacher"), "teacher")
        color = optional_text(data.get("color"), "color") or DEFAULT_SUBJECT_COLOR

        with self._tx.transaction():
            ensure_unique_code(self._subjects.list_all(), code)
            subject = self._subjects.create(
                Subject(subject_id=new_id(), name=name, code=code, color=color, teacher=teacher)
            )

        self._notifier.publish(ChangeType.SUBJECTS)
        return subject

    def update_subject(self, subject_id: str, patch: Mapping[str, Any]) -> Subject:
        """Apply only the fields present in ``patch``.

        ``teacher: None`` clears the teacher; a missing key keeps it.
        """
        changes: dict[str, Any] = {}
        if "name" in patch:
            changes["name"] = require_non_empty(patch["name"], "name")
        if "code" in patch:
            changes["code"] = require_non_empty(patch["code"], "code")
        if "teacher" in patch:
            changes["teacher"] = optional_text(patch["teacher"], "teacher")
        if "color" in patch:
            changes["color"] = require_non_empty(patch["color"], "color")

        with self._tx.transaction():
            existing = self._subjects.get_by_id(subject_id)
            if existing is None:
                raise NotFoundError("Subject", subject_id)
            if "code" in changes:
                ensure_unique_code(self._subjects.list_all(), changes["code"], exclude_id=subject_id)

            updated = replace(existing, **changes)
            self._subjects.replace(updated)

        self._notifier.publish(ChangeType.SUBJECTS)
        return updated

    def delete_subject(self, subject_id: str) -> bool:
        result = self._cascade.delete_subject(subject_id)
        if result is None:
            return False

        self._notifier.publish(
            ChangeType.SUBJECTS,
            ChangeType.LECTURES,
            ChangeType.WEEKLY_SCHEDULES,
            ChangeType.TASKS,
        )
        return True


def require_subject(subjects: SubjectRepository, subject_id: Any) -> Subject:
    """Resolve a foreign key to an existing subject or raise ValidationError."""
    subject_id = require_non_empty(subject_id, "subjectId")
    subject = subjects.get_by_id(subject_id)
    if subject is None:
        raise ValidationError("Subject does not exist")
    return subject


def with_subject_fields(record: dict, subject: Optional[Subject]) -> dict:
    """Record JSON plus the display fields of its subject (null when unlinked)."""
    return {
        **record,
        "subjectName": subject.name if subject else None,
        "subjectCode": subject.code if subject else None,
        "subjectColor": subject.color if subject else None,
    }
