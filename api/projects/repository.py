"""
Project persistence.
This module is where project-related SQL lives.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends

from core.db import Database, is_serial_id
from core.dependencies import get_database
from core.errors import DatabaseError


class ProjectRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def insert(self, *, file_url: str, project: str, year: str) -> int:
        row = await self._db.fetch_one(
            """
            INSERT INTO projects (project, year, file_url)
            VALUES ($1, $2, $3)
            RETURNING id
            """,
            project,
            year,
            file_url,
        )
        if row is None:
            raise DatabaseError()
        return int(row["id"])

    async def list_all(self) -> list[dict[str, Any]]:
        return await self._db.fetch_all(
            """
            SELECT id, project, year, file_url
            FROM projects
            ORDER BY id
            """
        )

    async def find_by_id(self, project_id: int) -> dict[str, Any] | None:
        if not is_serial_id(project_id):
            return None
        return await self._db.fetch_one(
            """
            SELECT id, project, year, file_url
            FROM projects
            WHERE id = $1
            """,
            project_id,
        )

    async def delete_by_id(self, project_id: int) -> None:
        await self._db.execute(
            """
            DELETE FROM projects
            WHERE id = $1
            """,
            project_id,
        )


def get_project_repository(database: Database = Depends(get_database)) -> ProjectRepository:
    return ProjectRepository(database)
