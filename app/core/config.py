# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os

from pydantic import BaseModel, Field


class GitHubStoreConfig(BaseModel):
    """Connection parameters for the GitHub-hosted schedule file."""

    model_config = {"frozen": True}

    token: str = Field(default="", description="GitHub API token")
    repo: str = Field(..., min_length=1, description="owner/name of the repository")
    branch: str = Field(default="main", min_length=1)
    file_path: str = Field(default="jadwal.json", min_length=1)
    api_url: str = Field(default="https://api.github.com")
    timeout: float = Field(default=10.0, gt=0)
    user_agent: str = Field(default="jadwal-service")


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "jadwal-service")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8000"))

    BLOB_STORE_BACKEND: str = os.getenv("BLOB_STORE_BACKEND", "github").lower()

    GITHUB_TOKEN: str = os.getenv("GITHUB_TOKEN", "")
    GITHUB_REPO: str = os.getenv("GITHUB_REPO", "klandestin-s/api-school.man3")
    GITHUB_FILE_PATH: str = os.getenv("GITHUB_FILE_PATH", "jadwal.json")
    GITHUB_BRANCH: str = os.getenv("GITHUB_BRANCH", "main")
    GITHUB_API_URL: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
    GITHUB_TIMEOUT: float = float(os.getenv("GITHUB_TIMEOUT", "10.0"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def github_store_config(self) -> GitHubStoreConfig:
        return GitHubStoreConfig(
            token=self.GITHUB_TOKEN,
            repo=self.GITHUB_REPO,
            branch=self.GITHUB_BRANCH,
            file_path=self.GITHUB_FILE_PATH,
            api_url=self.GITHUB_API_URL,
            timeout=self.GITHUB_TIMEOUT,
            user_agent=f"{self.SERVICE_NAME}/{self.SERVICE_VERSION}",
        )

    @property
    def store_configured(self) -> bool:
        return self.BLOB_STORE_BACKEND == "memory" or bool(self.GITHUB_TOKEN)


settings = Settings()
