"""
Table bootstrap.

Both tables are created on startup when `DB_AUTO_MIGRATE` is on. The DDL is
idempotent, so running it against an existing database is a no-op.
"""

from __future__ import annotations

import logging

from .db import Database

logger = logging.getLogger(__name__)

STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS banners (
      id SERIAL PRIMARY KEY,
      file_url TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
      id SERIAL PRIMARY KEY,
      project TEXT NOT NULL,
      year TEXT NOT NULL,
      file_url TEXT NOT NULL
    )
    """,
)


async def ensure_schema(database: Database) -> None:
    for statement in STATEMENTS:
        await database.execute(statement)
    logger.info("schema_ready tables=banners,projects")
