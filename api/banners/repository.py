"""
Banner persistence.
This module is where banner-related SQL lives.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends

from core.db import Database, is_serial_id
from core.dependencies import get_database
from core.errors import DatabaseError


class BannerRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def insert(self, *, file_url: str) -> int:
        row = await self._db.fetch_one(
            """
            INSERT INTO banners (file_url)
            VALUES ($1)
            RETURNING id
            """,
            file_url,
        )
        if row is None:
            raise DatabaseError()
        return int(row["id"])

    async def list_all(self) -> list[dict[str, Any]]:
        return await self._db.fetch_all(
            """
            SELECT id, file_url
            FROM banners
            ORDER BY id
            """
        )

    async def find_by_id(self, banner_id: int) -> dict[str, Any] | None:
        if not is_serial_id(banner_id):
            return None
        return await self._db.fetch_one(
            """
            SELECT id, file_url
            FROM banners
            WHERE id = $1
            """,
            banner_id,
        )

    async def delete_by_id(self, banner_id: int) -> None:
        await self._db.execute(
            """
            DELETE FROM banners
            WHERE id = $1
            """,
            banner_id,
        )


def get_banner_repository(database: Database = Depends(get_database)) -> BannerRepository:
    return BannerRepository(database)
