# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire the blob store, repository and service.
"""

from app.core.config import Settings, settings
from app.core.exceptions import StoreConfigurationError
from app.repositories.blob_store import InMemoryBlobStore, VersionedBlobStore
from app.repositories.github_store import GitHubContentStore
from app.repositories.schedule_repository import ScheduleRepository
from app.services.schedule_service import ScheduleService


def build_blob_store(config: Settings) -> VersionedBlobStore:
    if config.BLOB_STORE_BACKEND == "memory":
        return InMemoryBlobStore()
    if config.BLOB_STORE_BACKEND == "github":
        return GitHubContentStore(config.github_store_config())
    raise ValueError(f"Unknown BLOB_STORE_BACKEND '{config.BLOB_STORE_BACKEND}'")


# ── Singleton instances ──
_blob_store = build_blob_store(settings)
_schedule_repo = ScheduleRepository(_blob_store, settings.GITHUB_FILE_PATH)
_schedule_service = ScheduleService(_schedule_repo)


# ── FastAPI dependency functions ──
def get_schedule_service() -> ScheduleService:
    if not settings.store_configured:
        raise StoreConfigurationError(
            "Missing GitHub token. Set GITHUB_TOKEN environment variable.",
            status_code=500,
        )
    return _schedule_service
