# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.

Field contents are deliberately loose here: business rules live in
app.services.validation so every violation is reported at once.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Schedule Schemas ──

class ScheduleCreateRequest(BaseModel):
    """Body of POST /api/jadwal."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    class_: Optional[str] = Field(default=None, alias="class", description="XI A or XI B")
    day: Optional[str] = Field(default=None, description="Senin .. Jumat")
    subject: Optional[str] = Field(default=None, description="Subject name")
    teacher: Optional[str] = Field(default=None, description="Teacher name")
    start_time: Optional[str] = Field(default=None, alias="startTime", description="HH:MM")
    end_time: Optional[str] = Field(default=None, alias="endTime", description="HH:MM")


class ScheduleUpdateRequest(ScheduleCreateRequest):
    """Body of PUT /api/jadwal — a full replacement, id included."""

    id: Optional[str] = Field(default=None, description="Existing schedule id")


class ScheduleResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    class_: str = Field(..., alias="class")
    day: str
    subject: str
    teacher: str
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")


class ScheduleMutationResponse(BaseModel):
    success: bool = True
    message: str
    schedule: dict[str, Any]


class ErrorResponse(BaseModel):
    error: str
    errors: Optional[list[str]] = None
    details: Optional[Any] = None
    operation: Optional[str] = None
    retryable: Optional[bool] = None
