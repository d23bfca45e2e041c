# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Schedule management — business logic for CRUD operations.

Every command is one read -> mutate -> conditional write cycle. The sha
obtained by the read is sent with the write, so a concurrent commit makes
the write fail with VersionConflictError instead of overwriting it. No
retry happens here; the caller decides whether to re-issue the request.
"""

import secrets
import string
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from app.core.exceptions import (
    BlobStoreError,
    MissingIdentifierError,
    ScheduleNotFoundError,
    ScheduleValidationError,
    VersionConflictError,
)
from app.core.logging import get_logger
from app.metrics.prometheus import SCHEDULE_MUTATIONS, VALIDATION_FAILURES, VERSION_CONFLICTS
from app.models.domain import ScheduleRecord
from app.repositories.schedule_repository import ScheduleRepository
from app.services.validation import validate_schedule

logger = get_logger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_schedule_id() -> str:
    """``jadwal_<epoch ms>_<9 base-36 chars>``. Collisions are not checked."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"jadwal_{int(time.time() * 1000)}_{suffix}"


@contextmanager
def store_operation(operation: str) -> Iterator[None]:
    """Stamp store failures with the operation that was in flight."""
    try:
        yield
    except VersionConflictError as exc:
        exc.operation = operation
        VERSION_CONFLICTS.labels(operation=operation).inc()
        logger.warning(
            "Version conflict during %s: %s", operation, exc.details or exc,
            extra={"operation": operation},
        )
        raise
    except BlobStoreError as exc:
        exc.operation = operation
        logger.error(
            "Blob store failure during %s: %s", operation, exc,
            extra={"operation": operation},
        )
        raise


class ScheduleService:
    """Business logic for the class schedule collection."""

    def __init__(self, repo: ScheduleRepository) -> None:
        self._repo = repo

    # ── Commands ──

    def create_schedule(
        self,
        class_: Optional[str],
        day: Optional[str],
        subject: Optional[str],
        teacher: Optional[str],
        start_time: Optional[str],
        end_time: Optional[str],
    ) -> ScheduleRecord:
        """Validate, assign an id and append. Raises ScheduleValidationError."""
        self._validate("create", class_, day, subject, teacher, start_time, end_time)
        record = ScheduleRecord(
            id=generate_schedule_id(),
            class_=class_,
            day=day,
            subject=subject,
            teacher=teacher,
            start_time=start_time,
            end_time=end_time,
        )

        with store_operation("create"):
            snapshot = self._repo.load()
            snapshot.records.append(record)
            self._repo.save(
                snapshot.records,
                snapshot.sha,
                f"Tambah jadwal: {record.subject} untuk {record.class_}",
            )

        SCHEDULE_MUTATIONS.labels(operation="create").inc()
        logger.info("Schedule created: id=%s, class=%s, day=%s", record.id, record.class_, record.day)
        return record

    def update_schedule(
        self,
        schedule_id: Optional[str],
        class_: Optional[str],
        day: Optional[str],
        subject: Optional[str],
        teacher: Optional[str],
        start_time: Optional[str],
        end_time: Optional[str],
    ) -> ScheduleRecord:
        """Replace a record wholesale. Raises MissingIdentifierError,
        ScheduleValidationError or ScheduleNotFoundError."""
        if not schedule_id:
            raise MissingIdentifierError()
        self._validate("update", class_, day, subject, teacher, start_time, end_time)
        record = ScheduleRecord(
            id=schedule_id,
            class_=class_,
            day=day,
            subject=subject,
            teacher=teacher,
            start_time=start_time,
            end_time=end_time,
        )

        with store_operation("update"):
            snapshot = self._repo.load()
            index = snapshot.index_of(schedule_id)
            if index == -1:
                raise ScheduleNotFoundError(schedule_id)
            snapshot.records[index] = record
            self._repo.save(
                snapshot.records,
                snapshot.sha,
                f"Update jadwal: {record.subject} untuk {record.class_}",
            )

        SCHEDULE_MUTATIONS.labels(operation="update").inc()
        logger.info("Schedule updated: id=%s", schedule_id)
        return record

    def delete_schedule(self, schedule_id: Optional[str]) -> ScheduleRecord:
        """Remove a record and return it. Raises ScheduleNotFoundError."""
        if not schedule_id:
            raise MissingIdentifierError()

        with store_operation("delete"):
            snapshot = self._repo.load()
            index = snapshot.index_of(schedule_id)
            if index == -1:
                raise ScheduleNotFoundError(schedule_id)
            removed = snapshot.records.pop(index)
            self._repo.save(
                snapshot.records,
                snapshot.sha,
                f"Hapus jadwal: {removed.subject} untuk {removed.class_}",
            )

        SCHEDULE_MUTATIONS.labels(operation="delete").inc()
        logger.info("Schedule deleted: id=%s", schedule_id)
        return removed

    # ── Queries ──

    def list_schedules(self) -> list[ScheduleRecord]:
        with store_operation("list"):
            return self._repo.load().records

    def get_schedule(self, schedule_id: str) -> ScheduleRecord:
        with store_operation("get"):
            snapshot = self._repo.load()
        index = snapshot.index_of(schedule_id)
        if index == -1:
            raise ScheduleNotFoundError(schedule_id)
        return snapshot.records[index]

    # ── Helpers ──

    @staticmethod
    def _validate(operation: str, *fields: Optional[str]) -> None:
        errors = validate_schedule(*fields)
        if errors:
            VALIDATION_FAILURES.labels(operation=operation).inc()
            logger.info("Schedule rejected on %s: %d rule(s) violated", operation, len(errors))
            raise ScheduleValidationError(errors)
