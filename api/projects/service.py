"""
Project business logic.

Same flow as banners, plus two required text fields echoed back on upload.
"""

from __future__ import annotations

from fastapi import UploadFile

from banners.schemas import MessageResponse
from core.storage import BlobStore
from media.workflows import DeleteWorkflow, UploadWorkflow

from . import schemas
from .repository import ProjectRepository


def _to_project_response(row: dict) -> schemas.ProjectResponse:
    return schemas.ProjectResponse(
        id=int(row["id"]),
        project=str(row["project"]),
        year=row["year"],
        file_url=str(row["file_url"]),
    )


async def upload_project(
    file: UploadFile | None,
    *,
    project: str | None,
    year: str | None,
    blob_store: BlobStore,
    repository: ProjectRepository,
) -> schemas.ProjectCreatedResponse:
    workflow = UploadWorkflow(
        blob_store,
        repository,
        required_fields=("project", "year"),
        missing_message="Missing file, project name, or year",
    )
    result = await workflow.upload(file, project=project, year=year)
    return schemas.ProjectCreatedResponse(
        id=result.id,
        file_url=result.file_url,
        project=result.fields["project"],
        year=result.fields["year"],
    )


async def list_projects(repository: ProjectRepository) -> list[schemas.ProjectResponse]:
    rows = await repository.list_all()
    return [_to_project_response(row) for row in rows]


async def delete_project(
    project_id: str,
    *,
    blob_store: BlobStore,
    repository: ProjectRepository,
) -> MessageResponse:
    workflow = DeleteWorkflow(blob_store, repository, not_found_message="Project not found")
    await workflow.delete(project_id)
    return MessageResponse(message="Project deleted successfully")
