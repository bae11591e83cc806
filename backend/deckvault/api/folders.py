"""Folder API: read, children, breadcrumbs, create, update, delete."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..core.auth import optional_user, require_user
from ..database import get_db
from ..schemas import (
    Breadcrumb,
    FolderContentsResponse,
    FolderCreate,
    FolderResponse,
    FolderUpdate,
    PresentationCreate,
    PresentationResponse,
)
from ..services import FolderService, PresentationService
from .organizations import contents_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/folders", tags=["folders"])


@router.get("/{folder_id}", response_model=FolderResponse)
def get_folder(
    folder_id: str,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(optional_user),
):
    return FolderService(db).get_folder(folder_id, user_id)


@router.get("/{folder_id}/children", response_model=FolderContentsResponse)
def list_children(
    folder_id: str,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(optional_user),
):
    """Readable child folders, presentations and slides, name ordered."""
    return contents_response(FolderService(db).list_children(folder_id, user_id))


@router.get("/{folder_id}/breadcrumbs", response_model=List[Breadcrumb])
def get_breadcrumbs(
    folder_id: str,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(optional_user),
):
    return FolderService(db).breadcrumbs(folder_id, user_id)


@router.post("/{folder_id}/folders", response_model=FolderResponse, status_code=201)
def create_folder(
    folder_id: str,
    data: FolderCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    """Create a sub-folder. Visibility defaults to the parent's."""
    return FolderService(db).create_folder(folder_id, data, user_id)


@router.patch("/{folder_id}", response_model=FolderResponse)
def update_folder(
    folder_id: str,
    data: FolderUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    """Rename or edit a folder. A rename rewrites every descendant path."""
    return FolderService(db).update_folder(folder_id, data, user_id)


@router.delete("/{folder_id}", status_code=204)
def delete_folder(
    folder_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    """Soft-delete an empty folder or project."""
    FolderService(db).delete_folder(folder_id, user_id)
    return Response(status_code=204)


@router.post("/{folder_id}/presentations", response_model=PresentationResponse, status_code=201)
def create_presentation(
    folder_id: str,
    data: PresentationCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    return PresentationService(db).create_presentation(folder_id, data, user_id)
