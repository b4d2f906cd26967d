"""
FastAPI dependencies for objects owned by the application.

The app factory stores the database and blob store on `app.state`; routes
receive them through these functions so tests can swap them out with
`app.dependency_overrides`.
"""

from __future__ import annotations

from fastapi import Request

from .db import Database
from .storage import BlobStore


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store
