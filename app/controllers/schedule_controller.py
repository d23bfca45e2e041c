# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Schedule CRUD endpoints.
Thin HTTP layer — delegates ALL logic to ScheduleService.
Domain errors are mapped to status codes by the handlers in main.py.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.schemas.schedule import (
    ScheduleCreateRequest,
    ScheduleMutationResponse,
    ScheduleResponse,
    ScheduleUpdateRequest,
)
from app.services.schedule_service import ScheduleService
from app.core.dependencies import get_schedule_service

router = APIRouter(prefix="/api", tags=["Jadwal"])


@router.get("/jadwal", response_model=list[ScheduleResponse], response_model_by_alias=True)
def list_schedules(
    service: ScheduleService = Depends(get_schedule_service),
):
    """List every schedule entry in file order."""
    return [r.to_json() for r in service.list_schedules()]


@router.get("/jadwal/{schedule_id}", response_model=ScheduleResponse, response_model_by_alias=True)
def get_schedule(
    schedule_id: str,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Get a single schedule entry."""
    return service.get_schedule(schedule_id).to_json()


@router.post("/jadwal", status_code=201, response_model=ScheduleMutationResponse)
def create_schedule(
    payload: ScheduleCreateRequest,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Add a schedule entry. The id is assigned by the server."""
    record = service.create_schedule(
        class_=payload.class_,
        day=payload.day,
        subject=payload.subject,
        teacher=payload.teacher,
        start_time=payload.start_time,
        end_time=payload.end_time,
    )
    return {
        "success": True,
        "message": "Jadwal berhasil ditambahkan",
        "schedule": record.to_json(),
    }


@router.put("/jadwal", response_model=ScheduleMutationResponse)
def update_schedule(
    payload: ScheduleUpdateRequest,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Replace an existing schedule entry wholesale."""
    record = service.update_schedule(
        schedule_id=payload.id,
        class_=payload.class_,
        day=payload.day,
        subject=payload.subject,
        teacher=payload.teacher,
        start_time=payload.start_time,
        end_time=payload.end_time,
    )
    return {
        "success": True,
        "message": "Jadwal berhasil diperbarui",
        "schedule": record.to_json(),
    }


@router.delete("/jadwal", response_model=ScheduleMutationResponse)
def delete_schedule(
    schedule_id: Optional[str] = Query(default=None, alias="id"),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Delete a schedule entry by ``?id=``."""
    record = service.delete_schedule(schedule_id)
    return {
        "success": True,
        "message": "Jadwal berhasil dihapus",
        "schedule": record.to_json(),
    }
