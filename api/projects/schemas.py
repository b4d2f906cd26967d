"""
Project API schemas (response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProjectCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    file_url: str = Field(..., alias="fileUrl")
    project: str
    year: str


class ProjectResponse(BaseModel):
    id: int
    project: str
    # Older rows may carry a numeric year.
    year: str | int
    file_url: str
