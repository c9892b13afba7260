from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    """Repository interface for Subject.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        raise NotImplementedError

    def create(self, subject: Subject) -> Subject:
        raise NotImplementedError

    def replace(self, subject: Subject) -> bool:
        raise NotImplementedError

    def delete_by_id(self, subject_id: str) -> bool:
        raise NotImplementedError
