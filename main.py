# type: ignore
# pyright: reportGeneralTypeIssues=false
"""
Jadwal Service
==============
CRUD endpoint for class schedule entries. The collection lives in a single
JSON file inside a GitHub repository; every write is conditional on the
blob sha read just before it, so concurrent edits fail with 409 instead of
silently overwriting each other.

Port: 8000
"""
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.controllers import schedule_controller, system_controller
from app.core.config import settings
from app.core.exceptions import (
    AuthError,
    BlobStoreError,
    MalformedResponseError,
    MissingIdentifierError,
    ScheduleNotFoundError,
    ScheduleValidationError,
    StoreConfigurationError,
    TransportError,
    VersionConflictError,
)
from app.core.logging import get_logger
from app.middleware import MetricsMiddleware, RequestIDMiddleware
from app.schemas.schedule import ErrorResponse

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Log startup configuration and shutdown."""
    logger.info(
        "Jadwal service starting — backend=%s repo=%s path=%s branch=%s",
        settings.BLOB_STORE_BACKEND,
        settings.GITHUB_REPO,
        settings.GITHUB_FILE_PATH,
        settings.GITHUB_BRANCH,
    )
    if not settings.store_configured:
        logger.warning("GITHUB_TOKEN is not set — data endpoints will answer 500")
    yield
    logger.info("Jadwal service shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Jadwal Service",
    description="Class schedule CRUD backed by a JSON file in a GitHub repository.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Concurrent modification"},
        502: {"model": ErrorResponse, "description": "Blob store failure"},
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)

app.include_router(system_controller.router)
app.include_router(schedule_controller.router)


# ── Error mapping ─────────────────────────────────────────────────────────
def _error(status_code: int, error: str, **extra: Any) -> JSONResponse:
    content = {"error": error}
    content.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content=content)


def _store_error(status_code: int, exc: BlobStoreError, **extra: Any) -> JSONResponse:
    details = exc.details
    if details is not None and not isinstance(details, (str, list, dict)):
        details = str(details)
    return _error(
        status_code,
        exc.message,
        details=details,
        operation=exc.operation,
        upstream_status=exc.status_code,
        **extra,
    )


@app.exception_handler(ScheduleValidationError)
async def validation_error_handler(request: Request, exc: ScheduleValidationError):
    return _error(400, str(exc), errors=exc.errors)


@app.exception_handler(MissingIdentifierError)
async def missing_identifier_handler(request: Request, exc: MissingIdentifierError):
    return _error(400, str(exc))


@app.exception_handler(ScheduleNotFoundError)
async def not_found_handler(request: Request, exc: ScheduleNotFoundError):
    return _error(404, str(exc), id=exc.schedule_id)


@app.exception_handler(VersionConflictError)
async def version_conflict_handler(request: Request, exc: VersionConflictError):
    return _store_error(409, exc, retryable=True)


@app.exception_handler(StoreConfigurationError)
async def store_configuration_handler(request: Request, exc: StoreConfigurationError):
    return _error(500, exc.message)


@app.exception_handler(AuthError)
@app.exception_handler(TransportError)
@app.exception_handler(MalformedResponseError)
@app.exception_handler(BlobStoreError)
async def blob_store_error_handler(request: Request, exc: BlobStoreError):
    return _store_error(502, exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc), "request_id": req_id},
    )


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
