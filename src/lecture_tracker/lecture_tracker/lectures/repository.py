from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Lecture


class LectureRepository(Protocol):
    def list_all(self) -> Sequence[Lecture]:
        raise NotImplementedError

    def get_by_id(self, lecture_id: str) -> Optional[Lecture]:
        raise NotImplementedError

    def list_by_subject(self, subject_id: str) -> Sequence[Lecture]:
        raise NotImplementedError

    def create(self, lecture: Lecture) -> Lecture:
        raise NotImplementedError

    def replace(self, lecture: Lecture) -> bool:
        raise NotImplementedError

    def delete_by_id(self, lecture_id: str) -> bool:
        raise NotImplementedError

    def delete_by_subject(self, subject_id: str) -> int:
        """Delete every lecture of a subject. Returns how many were removed."""

        raise NotImplementedError
