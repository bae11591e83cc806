"""Folder and project schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..models import Visibility
from .common import validate_description, validate_folder_name, validate_tags


class FolderCreate(BaseModel):
    """Create a folder (or, at the top level, a project).

    Omitted visibility inherits from the parent folder; projects default to
    internal.
    """
    folder_name: str
    description: Optional[str] = None
    visibility: Optional[Visibility] = None
    tags: List[str] = []

    @field_validator("folder_name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_folder_name(v)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: Optional[str]) -> Optional[str]:
        return validate_description(v)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: List[str]) -> List[str]:
        return validate_tags(v)


class FolderUpdate(BaseModel):
    """Rename or edit folder metadata. Unset fields are left unchanged."""
    folder_name: Optional[str] = None
    description: Optional[str] = None
    visibility: Optional[Visibility] = None
    tags: Optional[List[str]] = None

    @field_validator("folder_name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_folder_name(v)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: Optional[str]) -> Optional[str]:
        return validate_description(v)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return validate_tags(v)


class FolderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    organization_id: str
    parent_id: Optional[str] = None
    folder_name: str
    full_path: str
    visibility: Visibility
    tags: List[str] = []
    description: Optional[str] = None
    is_project: bool
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


class Breadcrumb(BaseModel):
    name: str
    path: str
