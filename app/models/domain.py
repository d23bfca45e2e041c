# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

VALID_CLASSES: tuple[str, ...] = ("XI A", "XI B")
VALID_DAYS: tuple[str, ...] = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat")


class ScheduleRecord(BaseModel):
    """A single class schedule entry as stored in the JSON file.

    Unknown keys already present in the file are kept so that rewriting the
    collection never drops data belonging to other records.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., min_length=1)
    class_: str = Field(..., alias="class")
    day: str
    subject: str
    teacher: str
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")

    def to_json(self) -> dict:
        """Wire representation, using the original camelCase keys."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class Blob:
    """Raw blob content together with its version token."""

    content: bytes
    sha: str


@dataclass
class ScheduleSnapshot:
    """Decoded collection plus the version token it was read at.

    ``sha`` is None when the file does not exist yet.
    """

    records: list[ScheduleRecord] = field(default_factory=list)
    sha: Optional[str] = None

    def index_of(self, schedule_id: str) -> int:
        for i, record in enumerate(self.records):
            if record.id == schedule_id:
                return i
        return -1
