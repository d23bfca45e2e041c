# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: versioned blob store contract and an in-memory implementation.

A store holds named blobs, each with an opaque version token (sha). Writes
are conditional: the caller passes the sha it read, and the store rejects
the write with VersionConflictError if the blob has moved on since.
"""

import hashlib
import threading
from typing import Optional, Protocol

from app.core.exceptions import VersionConflictError
from app.models.domain import Blob


def git_blob_sha(content: bytes) -> str:
    """SHA-1 of ``content`` the way git names blob objects."""
    header = f"blob {len(content)}\0".encode()
    return hashlib.sha1(header + content).hexdigest()


class VersionedBlobStore(Protocol):
    def read(self, path: str) -> Optional[Blob]:
        """Return the blob at ``path``, or None if it does not exist yet."""
        ...

    def write(
        self,
        path: str,
        content: bytes,
        expected_sha: Optional[str],
        message: str,
    ) -> str:
        """Conditionally replace the blob and return its new sha."""
        ...


class InMemoryBlobStore:
    """Process-local store with the same conflict semantics as GitHub."""

    def __init__(self) -> None:
        self._blobs: dict[str, Blob] = {}
        self._messages: list[str] = []
        self._lock = threading.Lock()

    # ── Read ──

    def read(self, path: str) -> Optional[Blob]:
        with self._lock:
            return self._blobs.get(path)

    # ── Write ──

    def write(
        self,
        path: str,
        content: bytes,
        expected_sha: Optional[str],
        message: str,
    ) -> str:
        with self._lock:
            current = self._blobs.get(path)
            current_sha = current.sha if current else None
            if current_sha != expected_sha:
                raise VersionConflictError(
                    f"{path} is at {current_sha} but expected {expected_sha}",
                    status_code=409,
                )
            blob = Blob(content=content, sha=git_blob_sha(content))
            self._blobs[path] = blob
            self._messages.append(message)
            return blob.sha

    # ── Bulk / internal ──

    def clear(self) -> None:
        with self._lock:
            self._blobs.clear()
            self._messages.clear()

    @property
    def commit_messages(self) -> list[str]:
        """Messages of every accepted write, oldest first."""
        return list(self._messages)
