# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Schedule data access.
Encodes the schedule collection to / from the JSON file held in a
versioned blob store. NO business rules here — pure load / save.
"""

import json
from typing import Optional

from pydantic import ValidationError

from app.core.exceptions import MalformedResponseError
from app.models.domain import ScheduleRecord, ScheduleSnapshot
from app.repositories.blob_store import VersionedBlobStore


class ScheduleRepository:
    """The whole schedule collection as one JSON array in one blob."""

    def __init__(self, store: VersionedBlobStore, path: str) -> None:
        self._store = store
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    # ── Read ──

    def load(self) -> ScheduleSnapshot:
        """Read the current collection and the sha it was read at."""
        blob = self._store.read(self._path)
        if blob is None:
            return ScheduleSnapshot(records=[], sha=None)
        return ScheduleSnapshot(records=self.decode(blob.content), sha=blob.sha)

    # ── Write ──

    def save(
        self,
        records: list[ScheduleRecord],
        expected_sha: Optional[str],
        message: str,
    ) -> str:
        """Conditionally replace the collection. Returns the new sha."""
        return self._store.write(self._path, self.encode(records), expected_sha, message)

    # ── Codec ──

    @staticmethod
    def encode(records: list[ScheduleRecord]) -> bytes:
        payload = [r.to_json() for r in records]
        return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")

    @staticmethod
    def decode(content: bytes) -> list[ScheduleRecord]:
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedResponseError(
                f"Schedule file is not valid UTF-8: {exc}",
                raw_body=content.decode("utf-8", errors="backslashreplace"),
            ) from exc
        if not text.strip():
            return []
        try:
            raw = json.loads(text)
        except ValueError as exc:
            raise MalformedResponseError(
                f"Schedule file is not valid JSON: {exc}", raw_body=text
            ) from exc
        if not isinstance(raw, list):
            raise MalformedResponseError(
                "Schedule file must contain a JSON array", raw_body=text
            )
        try:
            return [ScheduleRecord.model_validate(item) for item in raw]
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Schedule file holds an invalid record: {exc.error_count()} error(s)",
                raw_body=text,
            ) from exc
