# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Error taxonomy for schedule operations.

User errors (validation, missing id, unknown record) are raised before any
I/O. Store errors come from the blob-store client and propagate unchanged
through the service, which stamps the operation that was in flight.
"""

from typing import Any, Optional


class ScheduleError(Exception):
    """Base exception for every schedule-related failure."""


class ScheduleValidationError(ScheduleError):
    """One or more validation rules failed. Carries every violated rule."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__(", ".join(errors))
        self.errors = list(errors)


class MissingIdentifierError(ScheduleError):
    """An update or delete was issued without a record id."""

    def __init__(self, message: str = "ID jadwal wajib diisi") -> None:
        super().__init__(message)


class ScheduleNotFoundError(ScheduleError):
    """No record with the requested id exists in the collection."""

    def __init__(self, schedule_id: str) -> None:
        super().__init__("Jadwal tidak ditemukan")
        self.schedule_id = schedule_id


class BlobStoreError(ScheduleError):
    """Base for failures talking to the versioned blob store."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
        operation: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details
        self.operation = operation


class VersionConflictError(BlobStoreError):
    """The blob changed since it was read. Retry from a fresh read."""


class TransportError(BlobStoreError):
    """The store could not be reached or answered with an unexpected status."""


class AuthError(BlobStoreError):
    """The store rejected our credentials."""


class MalformedResponseError(BlobStoreError):
    """The store answered with something we cannot decode."""

    def __init__(self, message: str, raw_body: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.raw_body = raw_body
        if self.details is None and raw_body is not None:
            self.details = raw_body[:500] if isinstance(raw_body, str) else raw_body


class StoreConfigurationError(BlobStoreError):
    """The store cannot be used with the current configuration."""
