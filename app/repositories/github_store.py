# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: GitHub contents API as a versioned blob store.
Reads return the decoded file plus its blob sha; writes send that sha back
so GitHub refuses them if someone else committed in between.
"""

import base64
import binascii
import time
from typing import Any, Optional

import httpx

from app.core.config import GitHubStoreConfig
from app.core.exceptions import (
    AuthError,
    MalformedResponseError,
    StoreConfigurationError,
    TransportError,
    VersionConflictError,
)
from app.core.logging import get_logger
from app.metrics.prometheus import BLOB_STORE_LATENCY, BLOB_STORE_REQUESTS
from app.models.domain import Blob

logger = get_logger(__name__)


class GitHubContentStore:
    """Read and conditionally write files in one GitHub repository branch."""

    def __init__(
        self,
        config: GitHubStoreConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport

    @property
    def config(self) -> GitHubStoreConfig:
        return self._config

    # ── Read ──

    def read(self, path: str) -> Optional[Blob]:
        resp = self._request("GET", path, params={"ref": self._config.branch})
        if resp.status_code == 404:
            logger.info("Blob %s not found on branch %s", path, self._config.branch)
            return None
        self._raise_for_status(resp)

        data = self._json(resp)
        sha = data.get("sha") if isinstance(data, dict) else None
        if not sha:
            raise MalformedResponseError(
                "GitHub response is missing the blob sha",
                raw_body=resp.text,
                status_code=resp.status_code,
            )
        encoding = data.get("encoding", "base64")
        encoded = data.get("content") or ""
        size = data.get("size")
        # files over 1 MB come back with encoding "none" and no content
        if encoding != "base64" or (not encoded and size != 0):
            raise MalformedResponseError(
                f"GitHub returned no inline content for {path} (encoding={encoding}, size={size})",
                raw_body=resp.text,
                status_code=resp.status_code,
            )
        try:
            content = base64.b64decode(encoded)
        except (binascii.Error, ValueError) as exc:
            raise MalformedResponseError(
                f"Blob content is not valid base64: {exc}",
                raw_body=resp.text,
                status_code=resp.status_code,
            ) from exc
        if isinstance(size, int) and len(content) != size:
            raise MalformedResponseError(
                f"Blob content is {len(content)} bytes but GitHub reported {size}",
                raw_body=resp.text,
                status_code=resp.status_code,
            )
        return Blob(content=content, sha=sha)

    # ── Write ──

    def write(
        self,
        path: str,
        content: bytes,
        expected_sha: Optional[str],
        message: str,
    ) -> str:
        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self._config.branch,
        }
        if expected_sha:
            payload["sha"] = expected_sha

        resp = self._request("PUT", path, json=payload)
        if resp.status_code == 409 or self._is_sha_rejection(resp):
            raise VersionConflictError(
                "Jadwal telah diubah oleh permintaan lain, silakan coba lagi",
                status_code=409,
                details=self._error_message(resp),
            )
        self._raise_for_status(resp)

        data = self._json(resp)
        new_sha = (data.get("content") or {}).get("sha") if isinstance(data, dict) else None
        if not new_sha:
            raise MalformedResponseError(
                "GitHub write response is missing the new blob sha",
                raw_body=resp.text,
                status_code=resp.status_code,
            )
        logger.info("Committed %s at %s: %s", path, new_sha, message)
        return new_sha

    # ── HTTP helpers ──

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._config.user_agent,
            "Authorization": f"token {self._config.token}",
            "Accept": "application/vnd.github.v3+json",
            "Content-Type": "application/json",
        }

    def _url(self, path: str) -> str:
        return f"{self._config.api_url.rstrip('/')}/repos/{self._config.repo}/contents/{path}"

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        if not self._config.token:
            raise StoreConfigurationError(
                "Missing GitHub token. Set GITHUB_TOKEN environment variable.",
                status_code=500,
            )
        start = time.monotonic()
        try:
            with httpx.Client(
                timeout=self._config.timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                resp = client.request(method, self._url(path), **kwargs)
        except httpx.RequestError as exc:
            BLOB_STORE_REQUESTS.labels(method=method, status="error").inc()
            logger.error("GitHub %s %s failed: %s", method, path, exc)
            raise TransportError("Network error", details=str(exc)) from exc
        finally:
            BLOB_STORE_LATENCY.labels(method=method).observe(time.monotonic() - start)

        BLOB_STORE_REQUESTS.labels(method=method, status=str(resp.status_code)).inc()
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponseError(
                "JSON parse error",
                raw_body=resp.text,
                status_code=resp.status_code,
            ) from exc

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.text[:500]
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return resp.text[:500]

    def _is_sha_rejection(self, resp: httpx.Response) -> bool:
        # GitHub answers 422 when the file appeared after we saw it missing
        return resp.status_code == 422 and "sha" in self._error_message(resp).lower()

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if 200 <= resp.status_code < 300:
            return
        message = self._error_message(resp)
        if resp.status_code in (401, 403):
            logger.error("GitHub rejected credentials: %s", message)
            raise AuthError(
                message or "GitHub rejected the credentials",
                status_code=resp.status_code,
            )
        logger.error("GitHub API error %d: %s", resp.status_code, message)
        raise TransportError(
            message or f"GitHub API error: {resp.status_code}",
            status_code=resp.status_code,
            details=resp.text[:500],
        )
