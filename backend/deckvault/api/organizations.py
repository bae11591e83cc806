"""Organization API: lookup, projects, content-path resolution and search."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.auth import optional_user, require_user
from ..database import get_db
from ..repositories import FolderChildren
from ..schemas import (
    ContentResponse,
    FolderContentsResponse,
    FolderCreate,
    FolderResponse,
    OrganizationResponse,
    PresentationResponse,
    SearchResponse,
    SlideResponse,
)
from ..services import ContentService, FolderService, OrganizationService, SlideSearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/organizations", tags=["organizations"])


def contents_response(children: FolderChildren) -> FolderContentsResponse:
    return FolderContentsResponse(
        folders=[FolderResponse.model_validate(f) for f in children.folders],
        presentations=[PresentationResponse.model_validate(p) for p in children.presentations],
        slides=[SlideResponse.model_validate(s) for s in children.slides],
    )


@router.get("/{slug}", response_model=OrganizationResponse)
def get_organization(slug: str, db: Session = Depends(get_db)):
    return OrganizationService(db).get_by_slug(slug)


@router.get("/{slug}/projects", response_model=List[FolderResponse])
def list_projects(
    slug: str,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(optional_user),
):
    """Projects the caller can read, most recently updated first."""
    return OrganizationService(db).list_projects(slug, user_id)


@router.post("/{slug}/projects", response_model=FolderResponse, status_code=201)
def create_project(
    slug: str,
    data: FolderCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    """Create a top-level folder. Requires organization owner or admin."""
    organization = OrganizationService(db).get_by_slug(slug)
    return FolderService(db).create_project(organization.id, data, user_id)


@router.get("/{slug}/search", response_model=SearchResponse)
def search_slides(
    slug: str,
    q: str = Query("", description="Free-text query"),
    project: Optional[str] = Query(None, description="Project name or path"),
    folder: Optional[str] = Query(None, description="Folder path (below project when given)"),
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(optional_user),
):
    """Full-text slide search limited to what the caller may read."""
    return SlideSearchService(db).search(
        slug,
        q,
        user_id,
        project_path=project,
        folder_path=folder,
        offset=offset,
        limit=limit,
    )


@router.get("/{slug}/content", response_model=ContentResponse)
@router.get("/{slug}/content/{path:path}", response_model=ContentResponse)
def resolve_content(
    slug: str,
    path: str = "",
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(optional_user),
):
    """Resolve a virtual path (folder, ``name.slide``, ``name.presentation``, ``.../edit``)."""
    resolved = ContentService(db).resolve(slug, path, user_id)
    return ContentResponse(
        type=resolved.type.value,
        organization=OrganizationResponse.model_validate(resolved.organization),
        edit=resolved.edit,
        folder=FolderResponse.model_validate(resolved.folder) if resolved.folder else None,
        slide=SlideResponse.model_validate(resolved.slide) if resolved.slide else None,
        presentation=(
            PresentationResponse.model_validate(resolved.presentation)
            if resolved.presentation else None
        ),
        projects=[FolderResponse.model_validate(p) for p in resolved.projects],
        contents=contents_response(resolved.contents) if resolved.contents else None,
        breadcrumbs=resolved.breadcrumbs,
    )
