from __future__ import annotations

from typing import Optional, Sequence

from ..database.json_store import SUBJECTS, JsonFileDatabase
from .model import Subject
from .repository import SubjectRepository


class JsonSubjectRepository(SubjectRepository):
    def __init__(self, db: JsonFileDatabase):
        self._db = db

    def list_all(self) -> Sequence[Subject]:
        with self._db.transaction() as data:
            return [Subject.from_json(r) for r in data.get(SUBJECTS).values()]

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        with self._db.transaction() as data:
            r = data.get(SUBJECTS).get(subject_id)
            return Subject.from_json(r) if r else None

    def create(self, subject: Subject) -> Subject:
        with self._db.transaction() as data:
            data.put(SUBJECTS, subject.to_json())
        return subject

    def replace(self, subject: Subject) -> bool:
        with self._db.transaction() as data:
            if subject.subject_id not in data.get(SUBJECTS):
                return False
            data.put(SUBJECTS, subject.to_json())
            return True

    def delete_by_id(self, subject_id: str) -> bool:
        with self._db.transaction() as data:
            return data.remove(SUBJECTS, subject_id)
