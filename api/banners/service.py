"""
Banner business logic.
"""

from __future__ import annotations

from fastapi import UploadFile

from core.storage import BlobStore
from media.workflows import DeleteWorkflow, UploadWorkflow

from . import schemas
from .repository import BannerRepository


async def upload_banner(
    file: UploadFile | None,
    *,
    blob_store: BlobStore,
    repository: BannerRepository,
) -> schemas.BannerCreatedResponse:
    workflow = UploadWorkflow(blob_store, repository, missing_message="No file uploaded")
    result = await workflow.upload(file)
    return schemas.BannerCreatedResponse(id=result.id, file_url=result.file_url)


async def list_banners(repository: BannerRepository) -> list[schemas.BannerResponse]:
    rows = await repository.list_all()
    return [schemas.BannerResponse(id=int(row["id"]), file_url=str(row["file_url"])) for row in rows]


async def delete_banner(
    banner_id: str,
    *,
    blob_store: BlobStore,
    repository: BannerRepository,
) -> schemas.MessageResponse:
    workflow = DeleteWorkflow(blob_store, repository, not_found_message="Banner not found")
    await workflow.delete(banner_id)
    return schemas.MessageResponse(message="Banner deleted successfully")
