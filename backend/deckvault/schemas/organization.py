"""Organization and content-resolution schemas."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .folder import Breadcrumb, FolderResponse
from .presentation import PresentationResponse
from .slide import SlideResponse


class OrganizationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    slug: str
    display_name: Optional[str] = None
    tags: List[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v):
        return v or []


class FolderContentsResponse(BaseModel):
    """Readable children of a folder."""
    folders: List[FolderResponse] = []
    presentations: List[PresentationResponse] = []
    slides: List[SlideResponse] = []


class ContentResponse(BaseModel):
    """Result of resolving a virtual path under an organization."""
    type: str
    organization: OrganizationResponse
    edit: bool = False
    folder: Optional[FolderResponse] = None
    slide: Optional[SlideResponse] = None
    presentation: Optional[PresentationResponse] = None
    projects: List[FolderResponse] = []
    contents: Optional[FolderContentsResponse] = None
    breadcrumbs: List[Breadcrumb] = []
