"""
FastAPI router for project endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from banners.schemas import MessageResponse
from core.dependencies import get_blob_store
from core.storage import BlobStore

from . import schemas, service
from .repository import ProjectRepository, get_project_repository

router = APIRouter()


@router.post(
    "/projects/upload",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.ProjectCreatedResponse,
)
async def upload_project(
    file: UploadFile | None = File(default=None),
    project: str | None = Form(default=None),
    year: str | None = Form(default=None),
    blob_store: BlobStore = Depends(get_blob_store),
    repository: ProjectRepository = Depends(get_project_repository),
) -> schemas.ProjectCreatedResponse:
    """
    Upload a project image together with its name and year.
    """
    return await service.upload_project(
        file,
        project=project,
        year=year,
        blob_store=blob_store,
        repository=repository,
    )


@router.get("/projects", response_model=list[schemas.ProjectResponse])
async def list_projects(
    repository: ProjectRepository = Depends(get_project_repository),
) -> list[schemas.ProjectResponse]:
    return await service.list_projects(repository)


@router.delete("/projects/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    blob_store: BlobStore = Depends(get_blob_store),
    repository: ProjectRepository = Depends(get_project_repository),
) -> MessageResponse:
    return await service.delete_project(project_id, blob_store=blob_store, repository=repository)
