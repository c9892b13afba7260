from __future__ import annotations

from typing import Optional, Sequence

from ..database.json_store import LECTURES, JsonFileDatabase
from .model import Lecture
from .repository import LectureRepository


class JsonLectureRepository(LectureRepository):
    def __init__(self, db: JsonFileDatabase):
        self._db = db

    def list_all(self) -> Sequence[Lecture]:
        with self._db.transaction() as data:
            return [Lecture.from_json(r) for r in data.get(LECTURES).values()]

    def get_by_id(self, lecture_id: str) -> Optional[Lecture]:
        with self._db.transaction() as data:
            r = data.get(LECTURES).get(lecture_id)
            return Lecture.from_json(r) if r else None

    def list_by_subject(self, subject_id: str) -> Sequence[Lecture]:
        with self._db.transaction() as data:
            return [Lecture.from_json(r) for r in data.get(LECTURES).values() if r["subjectId"] == subject_id]

    def create(self, lecture: Lecture) -> Lecture:
        with self._db.transaction() as data:
            data.put(LECTURES, lecture.to_json())
        return lecture

    def replace(self, lecture: Lecture) -> bool:
        with self._db.transaction() as data:
            if lecture.lecture_id not in data.get(LECTURES):
                return False
            data.put(LECTURES, lecture.to_json())
            return True

    def delete_by_id(self, lecture_id: str) -> bool:
        with self._db.transaction() as data:
            return data.remove(LECTURES, lecture_id)

    def delete_by_subject(self, subject_id: str) -> int:
        with self._db.transaction() as data:
            ids = [lid for lid, r in data.get(LECTURES).items() if r["subjectId"] == subject_id]
            for lid in ids:
                data.remove(LECTURES, lid)
            return len(ids)
