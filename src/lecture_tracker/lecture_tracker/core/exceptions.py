class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateCodeError(ValidationError):
    """Raised when a subject code is already used by another subject."""

    def __init__(self, code: str):
        super().__init__(f"Subject code already exists: {code.strip()}")
        self.code = code


class NotFoundError(DomainError):
    """Raised when an update targets a record that does not exist."""

    def __init__(self, entity: str, record_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.record_id = record_id


class StorageError(DomainError):
    """Raised when the durable write (or initial load) of the store fails.

    The in-memory state has already been rolled back when this is raised.
    """
