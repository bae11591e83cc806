"""Slide schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import Visibility
from .common import validate_description, validate_resource_name, validate_tags


class SlideUpdate(BaseModel):
    """Editable slide metadata. Unset fields are left unchanged."""
    file_name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    visibility: Optional[Visibility] = None

    @field_validator("file_name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_resource_name(v)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: Optional[str]) -> Optional[str]:
        return validate_description(v)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return validate_tags(v)


class DraftStageRequest(BaseModel):
    """Sent by the rendering bridge when an edited slide has been re-rendered."""
    draft_object_id: str = Field(..., min_length=1)


class SlideResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: str
    file_name: str
    object_id: str
    draft_object_id: Optional[str] = None
    has_draft: bool = False
    visibility: Visibility
    description: Optional[str] = None
    tags: List[str] = []
    has_chart: bool = False
    has_table: bool = False
    has_diagram: bool = False
    has_image: bool = False
    has_bullet: bool = False
    has_links: bool = False
    has_video: bool = False
    has_audio: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("visibility", mode="before")
    @classmethod
    def coerce_visibility(cls, v):
        return Visibility.coerce(v)

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v):
        return v or []


class DraftActionResponse(BaseModel):
    success: bool = True
    message: str
