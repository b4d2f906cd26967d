"""Tests for the asyncpg wrapper, table bootstrap and repository SQL."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from banners.repository import BannerRepository
from core import db
from core.errors import DatabaseError
from core.schema import ensure_schema
from projects.repository import ProjectRepository


class FakePool:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.closed = False

    async def fetchrow(self, sql: str, *args: Any):
        if self.error:
            raise self.error
        return {"id": 1}

    async def fetch(self, sql: str, *args: Any):
        if self.error:
            raise self.error
        return [{"id": 1}, {"id": 2}]

    async def execute(self, sql: str, *args: Any):
        if self.error:
            raise self.error
        return "OK"

    async def close(self) -> None:
        self.closed = True


class RecordingDatabase:
    def __init__(self, row: dict[str, Any] | None = None) -> None:
        self.row = row
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    async def fetch_one(self, sql: str, *args: Any):
        self.calls.append((" ".join(sql.split()), args))
        return self.row

    async def fetch_all(self, sql: str, *args: Any):
        self.calls.append((" ".join(sql.split()), args))
        return [self.row] if self.row else []

    async def execute(self, sql: str, *args: Any) -> None:
        self.calls.append((" ".join(sql.split()), args))


def connected(pool: FakePool) -> db.Database:
    database = db.Database("postgresql://u@h/d", min_size=1, max_size=2)
    database._pool = pool
    return database


def test_sslmode_is_stripped_from_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@h:5432/d?sslmode=require&application_name=x")

    assert db.database_url() == "postgresql://u:p@h:5432/d?application_name=x"


def test_missing_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(RuntimeError):
        db.database_url()


def test_queries_return_dicts() -> None:
    database = connected(FakePool())

    assert asyncio.run(database.fetch_one("SELECT 1")) == {"id": 1}
    assert asyncio.run(database.fetch_all("SELECT 1")) == [{"id": 1}, {"id": 2}]


def test_engine_errors_become_database_error() -> None:
    database = connected(FakePool(ConnectionRefusedError("refused")))

    with pytest.raises(DatabaseError) as excinfo:
        asyncio.run(database.fetch_all("SELECT 1"))
    assert excinfo.value.message == "Database error"

    with pytest.raises(DatabaseError):
        asyncio.run(database.execute("DELETE FROM banners"))


def test_unconnected_database_raises_database_error() -> None:
    with pytest.raises(DatabaseError):
        asyncio.run(db.Database("postgresql://u@h/d").fetch_one("SELECT 1"))


def test_close_releases_pool() -> None:
    pool = FakePool()
    database = connected(pool)

    asyncio.run(database.close())

    assert pool.closed is True
    with pytest.raises(DatabaseError):
        database.pool


def test_ensure_schema_creates_both_tables() -> None:
    database = RecordingDatabase()

    asyncio.run(ensure_schema(database))

    sql = [call[0] for call in database.calls]
    assert any("CREATE TABLE IF NOT EXISTS banners" in s for s in sql)
    assert any("CREATE TABLE IF NOT EXISTS projects" in s for s in sql)


def test_banner_repository_sql() -> None:
    database = RecordingDatabase(row={"id": 9, "file_url": "u"})
    repo = BannerRepository(database)

    assert asyncio.run(repo.insert(file_url="u")) == 9
    asyncio.run(repo.delete_by_id(9))

    assert database.calls[0] == ("INSERT INTO banners (file_url) VALUES ($1) RETURNING id", ("u",))
    assert database.calls[1] == ("DELETE FROM banners WHERE id = $1", (9,))


def test_project_repository_sql() -> None:
    database = RecordingDatabase(row={"id": 4})
    repo = ProjectRepository(database)

    assert asyncio.run(repo.insert(file_url="u", project="Atrium", year="2024")) == 4

    sql, args = database.calls[0]
    assert sql == "INSERT INTO projects (project, year, file_url) VALUES ($1, $2, $3) RETURNING id"
    assert args == ("Atrium", "2024", "u")


def test_insert_without_returned_row_is_database_error() -> None:
    repo = BannerRepository(RecordingDatabase(row=None))

    with pytest.raises(DatabaseError):
        asyncio.run(repo.insert(file_url="u"))


def test_out_of_range_ids_never_reach_the_database() -> None:
    database = RecordingDatabase(row={"id": 1, "file_url": "u"})
    banners = BannerRepository(database)
    projects = ProjectRepository(database)

    assert asyncio.run(banners.find_by_id(99999999999)) is None
    assert asyncio.run(projects.find_by_id(0)) is None
    assert database.calls == []
