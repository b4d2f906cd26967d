"""
FastAPI router for banner endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile, status

from core.dependencies import get_blob_store
from core.storage import BlobStore

from . import schemas, service
from .repository import BannerRepository, get_banner_repository

router = APIRouter()


@router.post(
    "/upload",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.BannerCreatedResponse,
)
async def upload_banner(
    file: UploadFile | None = File(default=None),
    blob_store: BlobStore = Depends(get_blob_store),
    repository: BannerRepository = Depends(get_banner_repository),
) -> schemas.BannerCreatedResponse:
    """
    Upload a banner image (JPG, PNG or WEBP) and record its URL.
    """
    return await service.upload_banner(file, blob_store=blob_store, repository=repository)


@router.get("/banners", response_model=list[schemas.BannerResponse])
async def list_banners(
    repository: BannerRepository = Depends(get_banner_repository),
) -> list[schemas.BannerResponse]:
    return await service.list_banners(repository)


@router.delete("/banners/{banner_id}", response_model=schemas.MessageResponse)
async def delete_banner(
    banner_id: str,
    blob_store: BlobStore = Depends(get_blob_store),
    repository: BannerRepository = Depends(get_banner_repository),
) -> schemas.MessageResponse:
    """
    Delete a banner and, best-effort, its image file.
    """
    return await service.delete_banner(banner_id, blob_store=blob_store, repository=repository)
