# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the GitHub contents API client.
GitHub is faked with httpx.MockTransport; no network access.
"""

import base64
import json

import httpx
import pytest

from app.core.config import GitHubStoreConfig
from app.core.exceptions import (
    AuthError,
    MalformedResponseError,
    StoreConfigurationError,
    TransportError,
    VersionConflictError,
)
from app.repositories.github_store import GitHubContentStore
from app.repositories.schedule_repository import ScheduleRepository
from app.services.schedule_service import ScheduleService

CONFIG = GitHubStoreConfig(
    token="test-token",
    repo="sekolah/jadwal-data",
    branch="main",
    file_path="jadwal.json",
    api_url="https://api.github.test",
    user_agent="jadwal-service/test",
)
CONTENTS_URL = "https://api.github.test/repos/sekolah/jadwal-data/contents/jadwal.json"


def _b64(data) -> str:
    if not isinstance(data, bytes):
        data = json.dumps(data).encode()
    return base64.b64encode(data).decode()


def _store(handler, config=CONFIG):
    return GitHubContentStore(config, transport=httpx.MockTransport(handler))


class FakeGitHub:
    """Minimal stateful contents API: one file, sha-checked PUTs."""

    def __init__(self, content=None):
        self.content = content
        self.sha = "sha-0" if content is not None else None
        self.commits = 0
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            if self.content is None:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json={
                "content": base64.encodebytes(self.content).decode(),
                "sha": self.sha,
                "encoding": "base64",
                "size": len(self.content),
            })
        body = json.loads(request.content)
        if self.content is not None and "sha" not in body:
            return httpx.Response(422, json={"message": "Invalid request.\n\n\"sha\" wasn't supplied."})
        if self.content is not None and body["sha"] != self.sha:
            return httpx.Response(409, json={"message": f"jadwal.json does not match {body['sha']}"})
        self.commits += 1
        self.content = base64.b64decode(body["content"])
        self.sha = f"sha-{self.commits}"
        status = 200 if self.commits > 1 else 201
        return httpx.Response(status, json={"content": {"sha": self.sha}, "commit": {"message": body["message"]}})


# ============================================
# Read
# ============================================
class TestRead:
    def test_read_decodes_content_and_sha(self):
        fake = FakeGitHub(content=b'[{"id": "a"}]')
        blob = _store(fake).read("jadwal.json")
        assert blob.content == b'[{"id": "a"}]'
        assert blob.sha == "sha-0"

    def test_read_sends_branch_and_auth(self):
        fake = FakeGitHub(content=b"[]")
        _store(fake).read("jadwal.json")
        request = fake.requests[0]
        assert str(request.url) == CONTENTS_URL + "?ref=main"
        assert request.headers["Authorization"] == "token test-token"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        assert request.headers["User-Agent"] == "jadwal-service/test"

    def test_read_missing_file_returns_none(self):
        assert _store(FakeGitHub()).read("jadwal.json") is None

    def test_read_zero_byte_file_keeps_sha(self):
        store = _store(lambda r: httpx.Response(200, json={
            "content": "", "encoding": "base64", "size": 0, "sha": "abc",
        }))
        blob = store.read("jadwal.json")
        assert blob.content == b""
        assert blob.sha == "abc"

    def test_read_large_file_without_inline_content(self):
        store = _store(lambda r: httpx.Response(200, json={
            "content": "", "encoding": "none", "size": 2_000_000, "sha": "big",
        }))
        with pytest.raises(MalformedResponseError) as exc_info:
            store.read("jadwal.json")
        assert json.loads(exc_info.value.raw_body)["sha"] == "big"

    def test_read_empty_content_with_nonzero_size(self):
        store = _store(lambda r: httpx.Response(200, json={
            "content": "", "encoding": "base64", "size": 120, "sha": "abc",
        }))
        with pytest.raises(MalformedResponseError):
            store.read("jadwal.json")

    def test_read_truncated_content(self):
        store = _store(lambda r: httpx.Response(200, json={
            "content": _b64(b"[]"), "encoding": "base64", "size": 40, "sha": "abc",
        }))
        with pytest.raises(MalformedResponseError):
            store.read("jadwal.json")

    def test_read_unauthorized(self):
        store = _store(lambda r: httpx.Response(401, json={"message": "Bad credentials"}))
        with pytest.raises(AuthError) as exc_info:
            store.read("jadwal.json")
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Bad credentials"

    def test_read_forbidden(self):
        store = _store(lambda r: httpx.Response(403, json={"message": "Resource not accessible"}))
        with pytest.raises(AuthError):
            store.read("jadwal.json")

    def test_read_server_error(self):
        store = _store(lambda r: httpx.Response(503, text="unavailable"))
        with pytest.raises(TransportError) as exc_info:
            store.read("jadwal.json")
        assert exc_info.value.status_code == 503

    def test_read_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            _store(handler).read("jadwal.json")
        assert exc_info.value.message == "Network error"
        assert "connection refused" in exc_info.value.details

    def test_read_non_json_body(self):
        store = _store(lambda r: httpx.Response(200, text="<html>proxy</html>"))
        with pytest.raises(MalformedResponseError) as exc_info:
            store.read("jadwal.json")
        assert exc_info.value.raw_body == "<html>proxy</html>"

    def test_read_missing_sha(self):
        store = _store(lambda r: httpx.Response(200, json={"content": _b64([])}))
        with pytest.raises(MalformedResponseError):
            store.read("jadwal.json")

    def test_read_bad_base64(self):
        store = _store(lambda r: httpx.Response(200, json={"content": "abc", "sha": "x"}))
        with pytest.raises(MalformedResponseError):
            store.read("jadwal.json")

    def test_missing_token(self):
        fake = FakeGitHub()
        config = CONFIG.model_copy(update={"token": ""})
        with pytest.raises(StoreConfigurationError):
            _store(fake, config).read("jadwal.json")
        assert fake.requests == []


# ============================================
# Write
# ============================================
class TestWrite:
    def test_create_omits_sha(self):
        fake = FakeGitHub()
        new_sha = _store(fake).write("jadwal.json", b"[]", None, "Tambah jadwal")
        body = json.loads(fake.requests[0].content)
        assert "sha" not in body
        assert body["branch"] == "main"
        assert body["message"] == "Tambah jadwal"
        assert base64.b64decode(body["content"]) == b"[]"
        assert new_sha == "sha-1"

    def test_update_sends_expected_sha(self):
        fake = FakeGitHub(content=b"[]")
        new_sha = _store(fake).write("jadwal.json", b"[1]", "sha-0", "Update")
        assert json.loads(fake.requests[0].content)["sha"] == "sha-0"
        assert new_sha == "sha-1"
        assert fake.content == b"[1]"

    def test_stale_sha_is_conflict(self):
        fake = FakeGitHub(content=b"[]")
        with pytest.raises(VersionConflictError) as exc_info:
            _store(fake).write("jadwal.json", b"[1]", "sha-old", "Update")
        assert exc_info.value.status_code == 409
        assert fake.content == b"[]"

    def test_missing_sha_on_existing_file_is_conflict(self):
        fake = FakeGitHub(content=b"[]")
        with pytest.raises(VersionConflictError):
            _store(fake).write("jadwal.json", b"[1]", None, "Tambah")
        assert fake.content == b"[]"

    def test_other_422_is_transport_error(self):
        store = _store(lambda r: httpx.Response(422, json={"message": "Invalid branch"}))
        with pytest.raises(TransportError) as exc_info:
            store.write("jadwal.json", b"[]", None, "x")
        assert exc_info.value.status_code == 422

    def test_write_unauthorized(self):
        store = _store(lambda r: httpx.Response(401, json={"message": "Bad credentials"}))
        with pytest.raises(AuthError):
            store.write("jadwal.json", b"[]", "sha-0", "x")

    def test_write_response_without_sha(self):
        store = _store(lambda r: httpx.Response(200, json={"commit": {}}))
        with pytest.raises(MalformedResponseError) as exc_info:
            store.write("jadwal.json", b"[]", "sha-0", "x")
        assert json.loads(exc_info.value.raw_body) == {"commit": {}}

    def test_write_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            _store(handler).write("jadwal.json", b"[]", "sha-0", "x")


# ============================================
# Repository over the GitHub client
# ============================================
class TestRepositoryOverGitHub:
    def test_load_missing_then_save_creates(self):
        fake = FakeGitHub()
        repo = ScheduleRepository(_store(fake), "jadwal.json")
        snapshot = repo.load()
        assert snapshot.records == [] and snapshot.sha is None
        repo.save([], snapshot.sha, "init")
        assert json.loads(fake.content) == []

    def test_lost_race_leaves_file_untouched(self):
        fake = FakeGitHub(content=b"[]")
        repo = ScheduleRepository(_store(fake), "jadwal.json")
        snapshot = repo.load()
        repo.save([], snapshot.sha, "first writer")
        with pytest.raises(VersionConflictError):
            repo.save([], snapshot.sha, "second writer")
        assert fake.commits == 1

    def test_large_file_is_never_overwritten(self):
        requests = []

        def handler(request):
            requests.append(request)
            if request.method == "GET":
                return httpx.Response(200, json={
                    "content": "", "encoding": "none", "size": 2_000_000, "sha": "big",
                })
            return httpx.Response(200, json={"content": {"sha": "new"}})

        service = ScheduleService(ScheduleRepository(_store(handler), "jadwal.json"))
        with pytest.raises(MalformedResponseError) as exc_info:
            service.create_schedule(
                class_="XI A", day="Senin", subject="Matematika",
                teacher="Bu Sari", start_time="07:00", end_time="08:00",
            )
        assert exc_info.value.operation == "create"
        assert [r.method for r in requests] == ["GET"]
