"""
Banner API schemas (response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BannerCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    file_url: str = Field(..., alias="fileUrl")


class BannerResponse(BaseModel):
    id: int
    file_url: str


class MessageResponse(BaseModel):
    message: str
