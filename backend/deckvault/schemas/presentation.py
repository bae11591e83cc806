"""Presentation schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from ..models import PresentationRole
from .common import validate_resource_name, validate_tags


class PresentationSettings(BaseModel):
    """Minimum audience for each presentation action."""
    pptx_download_role: PresentationRole = PresentationRole.PUBLIC
    pdf_download_role: PresentationRole = PresentationRole.PUBLIC
    chat_role: PresentationRole = PresentationRole.PUBLIC


class SlideRef(BaseModel):
    slide_id: str = Field(..., min_length=1)
    object_id: str = Field(..., min_length=1)


class SlideOrderEntry(SlideRef):
    """One position in a presentation's slide sequence."""
    order: StrictInt


class ReorderRequest(BaseModel):
    """Body of ``PATCH /presentations/{id}/reorder``."""
    slides: List[SlideOrderEntry] = Field(..., min_length=1)


class PresentationCreate(BaseModel):
    """Slides are given in display order; order values 1..n are assigned."""
    presentation_name: str
    tags: List[str] = []
    slides: List[SlideRef] = []
    settings: Optional[PresentationSettings] = None

    @field_validator("presentation_name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_resource_name(v)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: List[str]) -> List[str]:
        return validate_tags(v)


class PresentationUpdate(BaseModel):
    presentation_name: Optional[str] = None
    tags: Optional[List[str]] = None
    settings: Optional[PresentationSettings] = None

    @field_validator("presentation_name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_resource_name(v)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return validate_tags(v)


class PresentationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: str
    presentation_name: str
    slides: List[SlideOrderEntry] = []
    settings: PresentationSettings = PresentationSettings()
    version: int
    tags: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("slides", "tags", mode="before")
    @classmethod
    def default_list(cls, v):
        return v or []

    @field_validator("settings", mode="before")
    @classmethod
    def default_settings(cls, v):
        return v or PresentationSettings()


class PresentationDetailResponse(PresentationResponse):
    """Presentation plus the actions the caller may perform on it."""
    allowed_actions: List[str] = []


class ActionCheckResponse(BaseModel):
    """Whether the caller may perform one gated action."""
    action: str
    allowed: bool
