from __future__ import annotations


class PersistenceError(RuntimeError):
    """Raised when a write or read against the data store fails."""


class ConflictError(PersistenceError):
    """Raised when a conditional update finds a different prior status."""

    def __init__(self, record_id: str, expected_status: str, actual_status: str) -> None:
        self.record_id = record_id
        self.expected_status = expected_status
        self.actual_status = actual_status
        super().__init__(
            f"Record {record_id} is '{actual_status}', expected '{expected_status}'; it was changed by another writer."
        )


class NotFoundError(PersistenceError):
    """Raised when the requested record does not exist."""
