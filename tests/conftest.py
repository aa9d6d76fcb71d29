"""
Pytest configuration and fixtures for bizdir-ingest tests

This module provides shared fixtures for unit, integration, and E2E tests.
The remote store is replaced by in-memory fakes of requests.Session, so no
test needs network access.
"""
import json as jsonlib
import uuid
from typing import Any, Callable, Generator
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from src.warehouse.connection import StoreClient

TEST_URL = "https://test.supabase.co"
TEST_KEY = "test-service-key"


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't touch the fake store"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run components against the fake store"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that drive the CLIs"
    )


# =======================
# HTTP FAKES
# =======================

class FakeResponse:
    """Minimal stand-in for requests.Response"""

    def __init__(self, status_code: int = 200, text: str = "", json: Any = None):
        self.status_code = status_code
        self._json = json
        self.text = text if json is None else jsonlib.dumps(json)
        self.encoding = None

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._json is not None:
            return self._json
        return jsonlib.loads(self.text)


class FakeSession:
    """
    Records every request and answers from a queue, then from a handler.

    Queued items may be FakeResponse instances or exceptions to raise.
    """

    def __init__(self, handler: Callable[..., FakeResponse] | None = None):
        self.handler = handler
        self.calls: list[dict[str, Any]] = []
        self._queue: list[Any] = []
        self.closed = False

    def queue(self, status_code: int = 200, text: str = "", json: Any = None) -> None:
        self._queue.append(FakeResponse(status_code, text, json))

    def queue_error(self, error: Exception) -> None:
        self._queue.append(error)

    def request(self, method, url, headers=None, json=None, data=None, timeout=None):
        call = {
            "method": method,
            "url": url,
            "headers": headers or {},
            "json": json,
            "data": data,
            "timeout": timeout,
        }
        self.calls.append(call)

        if self._queue:
            item = self._queue.pop(0)
            if isinstance(item, Exception):
                raise item
            return item
        if self.handler is not None:
            return self.handler(**call)
        return FakeResponse(201)

    def close(self) -> None:
        self.closed = True


class FakeSupabase:
    """
    In-memory imitation of the REST and storage endpoints used by the app.

    Attributes:
        files: uploaded_files rows keyed by id
        businesses: rows inserted into pre_release_businesses
        objects: stored objects keyed by "<bucket>/<path>"
        insert_batches: record count of every accepted insert
        fail_insert_on: 1-based insert call numbers to reject with 500
        fail_patch: reject every PATCH with 500
        fail_patch_statuses: reject PATCHes setting one of these statuses
    """

    def __init__(self):
        self.files: dict[str, dict[str, Any]] = {}
        self.businesses: list[dict[str, Any]] = []
        self.objects: dict[str, bytes] = {}
        self.insert_batches: list[int] = []
        self.insert_calls = 0
        self.fail_insert_on: set[int] = set()
        self.fail_patch = False
        self.fail_patch_statuses: set[str] = set()
        self.fail_storage_upload = False

    def add_file(self, status: str = "uploaded", csv_text: str | None = None, **fields) -> str:
        """Seed a file record (and its object when csv_text is given)."""
        file_id = fields.pop("id", str(uuid.uuid4()))
        storage_path = fields.pop("storage_path", None)
        if csv_text is not None:
            storage_path = storage_path or f"uploads/seed-{file_id}/data.csv"
            self.objects[f"csv_files/{storage_path}"] = csv_text.encode("utf-8")
        self.files[file_id] = {
            "id": file_id,
            "name": fields.pop("name", "data.csv"),
            "size": fields.pop("size", len(csv_text or "")),
            "uploaded_at": fields.pop("uploaded_at", "2025-03-02T14:11:09+00:00"),
            "status": status,
            "storage_path": storage_path,
            **fields,
        }
        return file_id

    def __call__(self, method, url, headers=None, json=None, data=None, timeout=None):
        parts = urlsplit(url)
        path = unquote(parts.path)
        query = parse_qs(parts.query)

        if path.startswith("/storage/v1/object/"):
            return self._storage(method, path[len("/storage/v1/object/"):], data)
        if path == "/rest/v1/pre_release_businesses" and method == "POST":
            return self._insert_businesses(json)
        if path == "/rest/v1/uploaded_files":
            return self._files(method, query, json)
        return FakeResponse(404, "Not found")

    def _storage(self, method, key, data):
        if method == "GET":
            if key not in self.objects:
                return FakeResponse(404, "Object not found")
            return FakeResponse(200, self.objects[key].decode("utf-8"))
        if method == "POST":
            if self.fail_storage_upload:
                return FakeResponse(500, "Storage unavailable")
            self.objects[key] = data
            return FakeResponse(200, json={"Key": key})
        if method == "DELETE":
            if self.objects.pop(key, None) is None:
                return FakeResponse(404, "Object not found")
            return FakeResponse(200, json={"message": "Successfully deleted"})
        return FakeResponse(405, "Method not allowed")

    def _insert_businesses(self, rows):
        self.insert_calls += 1
        if self.insert_calls in self.fail_insert_on:
            return FakeResponse(500, "duplicate key value violates unique constraint")
        self.businesses.extend(rows)
        self.insert_batches.append(len(rows))
        return FakeResponse(201)

    def _files(self, method, query, body):
        file_id = query.get("id", [""])[0].removeprefix("eq.") or None

        if method == "GET" and file_id is not None:
            row = self.files.get(file_id)
            if row is None:
                return FakeResponse(200, json=[])
            fields = query.get("select", ["*"])[0].split(",")
            if fields == ["*"]:
                return FakeResponse(200, json=[dict(row)])
            return FakeResponse(200, json=[{f: row.get(f) for f in fields}])

        if method == "GET":
            rows = sorted(self.files.values(), key=lambda r: r["uploaded_at"], reverse=True)
            return FakeResponse(200, json=[dict(r) for r in rows])

        if method == "POST":
            row = {"id": str(uuid.uuid4()), **body}
            self.files[row["id"]] = row
            return FakeResponse(201, json=[dict(row)])

        if method == "PATCH":
            if self.fail_patch or body.get("status") in self.fail_patch_statuses:
                return FakeResponse(500, "Internal error")
            if file_id in self.files:
                self.files[file_id].update(body)
            return FakeResponse(204)

        if method == "DELETE":
            self.files.pop(file_id, None)
            return FakeResponse(204)

        return FakeResponse(405, "Method not allowed")


# =======================
# CLIENT FIXTURES
# =======================

@pytest.fixture
def fake_session() -> FakeSession:
    """Session answering 201 unless responses are queued"""
    return FakeSession()


@pytest.fixture
def store_client(fake_session) -> Generator[StoreClient, None, None]:
    """Store client bound to the queue-driven fake session"""
    client = StoreClient(url=TEST_URL, api_key=TEST_KEY, session=fake_session)
    yield client
    client.close()


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Fresh in-memory store"""
    return FakeSupabase()


@pytest.fixture
def supabase_session(fake_supabase) -> FakeSession:
    """Session routed to the in-memory store"""
    return FakeSession(handler=fake_supabase)


@pytest.fixture
def supabase_client(supabase_session) -> Generator[StoreClient, None, None]:
    """Store client bound to the in-memory store"""
    client = StoreClient(url=TEST_URL, api_key=TEST_KEY, session=supabase_session)
    yield client
    client.close()


@pytest.fixture
def supabase_env(monkeypatch):
    """Point environment-configured clients at the test store"""
    monkeypatch.setenv("SUPABASE_URL", TEST_URL)
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", TEST_KEY)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    monkeypatch.delenv("SUPABASE_TIMEOUT", raising=False)


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def sample_csv() -> str:
    """Small business export with quoting and mixed-case headers"""
    return (
        "Name,Phone,City,US_State,Rating,Unused\n"
        '"Acme Plumbing, LLC",555-1111,Austin,TX,4.8,x\n'
        '"Beta ""The Best"" Bakery",555-2222,Dallas,TX,,y\n'
        "\n"
        "Gamma Garage,555-3333,Miami\n"
    )
