"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. The app factory in `api/main.py` creates
one instance, connects it on startup and closes it on shutdown; repositories
receive it explicitly instead of reaching for module state.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Engine failures (server errors, dropped connections) are translated into
`core.errors.DatabaseError` so callers only deal with one error type.
"""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings
from .errors import DatabaseError

logger = logging.getLogger(__name__)

_ENGINE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

# Upper bound of a Postgres SERIAL (int4) column.
SERIAL_ID_MAX = 2_147_483_647


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def is_serial_id(value: int) -> bool:
    return 1 <= value <= SERIAL_ID_MAX


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(
        self,
        dsn: str | None = None,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: float = 30,
    ) -> None:
        self._dsn = dsn
        self._min_size = settings.db_pool_min_size() if min_size is None else min_size
        self._max_size = settings.db_pool_max_size() if max_size is None else max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        dsn = self._dsn or database_url()
        try:
            self._pool = await asyncpg.create_pool(
                dsn=dsn,
                min_size=self._min_size,
                max_size=max(self._max_size, self._min_size),
                command_timeout=self._command_timeout,
            )
        except _ENGINE_ERRORS as exc:
            logger.error("db_connect_failed error=%s", exc)
            raise DatabaseError() from exc
        logger.info("db_connected min_size=%s max_size=%s", self._min_size, self._max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_closed")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            logger.error("db_pool_missing hint=call connect() on startup")
            raise DatabaseError()
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool.fetchrow(sql, *args)
        except _ENGINE_ERRORS as exc:
            logger.error("db_query_failed error=%s", exc)
            raise DatabaseError() from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool.fetch(sql, *args)
        except _ENGINE_ERRORS as exc:
            logger.error("db_query_failed error=%s", exc)
            raise DatabaseError() from exc
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        try:
            await self.pool.execute(sql, *args)
        except _ENGINE_ERRORS as exc:
            logger.error("db_statement_failed error=%s", exc)
            raise DatabaseError() from exc
