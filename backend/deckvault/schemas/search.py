"""Search schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class SearchHit(BaseModel):
    """A slide document as indexed, plus the parent folder's path."""
    model_config = ConfigDict(extra="allow")

    id: str
    organization_id: Optional[str] = None
    project_id: Optional[str] = None
    parent_id: Optional[str] = None
    parent_path: Optional[str] = None
    file_name: Optional[str] = None
    object_id: Optional[str] = None
    visibility: Optional[str] = None
    description: Optional[str] = None
    slide_text: Optional[str] = None
    tags: List[str] = []
    formatted: Optional[Dict[str, Any]] = None


class SearchResponse(BaseModel):
    results: List[SearchHit]
    total: int
    offset: int
    limit: int
    page: int
