"""Shared fixtures: in-memory record stores and an app wired to them."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from banners.repository import get_banner_repository
from core.errors import DatabaseError
from core.storage import BlobStore
from main import create_app
from projects.repository import get_project_repository

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class StubDatabase:
    """Stands in for `core.db.Database` during app startup and shutdown."""

    def __init__(self) -> None:
        self.connected = False
        self.statements: list[str] = []

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False

    async def execute(self, sql: str, *args: Any) -> None:
        self.statements.append(sql)


class InMemoryRecordStore:
    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self.fail_insert = False
        self.fail_delete = False

    async def insert(self, *, file_url: str, **fields: Any) -> int:
        if self.fail_insert:
            raise DatabaseError()
        record_id = self._next_id
        self._next_id += 1
        self.rows[record_id] = {"id": record_id, **fields, "file_url": file_url}
        return record_id

    async def list_all(self) -> list[dict[str, Any]]:
        return [dict(row) for _, row in sorted(self.rows.items())]

    async def find_by_id(self, record_id: int) -> dict[str, Any] | None:
        row = self.rows.get(record_id)
        return dict(row) if row is not None else None

    async def delete_by_id(self, record_id: int) -> None:
        if self.fail_delete:
            raise DatabaseError()
        self.rows.pop(record_id, None)


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def blob_store(upload_dir: Path) -> BlobStore:
    return BlobStore(upload_dir, "http://testserver")


@pytest.fixture
def banner_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def project_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def client(
    blob_store: BlobStore,
    banner_store: InMemoryRecordStore,
    project_store: InMemoryRecordStore,
):
    app = create_app(database=StubDatabase(), blob_store=blob_store)
    app.dependency_overrides[get_banner_repository] = lambda: banner_store
    app.dependency_overrides[get_project_repository] = lambda: project_store
    with TestClient(app) as test_client:
        yield test_client
