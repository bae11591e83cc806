"""Slide API: read, metadata edits and the draft lifecycle."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.auth import optional_user, require_user
from ..database import get_db
from ..schemas import DraftActionResponse, DraftStageRequest, SlideResponse, SlideUpdate
from ..services import DraftLifecycle, SlideService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/slides", tags=["slides"])


@router.post("/publish/{slide_id}", response_model=DraftActionResponse)
def publish_draft(
    slide_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    """Make the pending draft the published asset."""
    DraftLifecycle(db).publish(slide_id, user_id)
    return DraftActionResponse(message="Draft published")


@router.post("/discard/{slide_id}", response_model=DraftActionResponse)
def discard_draft(
    slide_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    """Drop the pending draft; the published asset is unchanged."""
    DraftLifecycle(db).discard(slide_id, user_id)
    return DraftActionResponse(message="Draft discarded")


@router.get("/{slide_id}", response_model=SlideResponse)
def get_slide(
    slide_id: str,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(optional_user),
):
    return SlideService(db).get_slide(slide_id, user_id)


@router.patch("/{slide_id}", response_model=SlideResponse)
def update_slide(
    slide_id: str,
    data: SlideUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    return SlideService(db).update_slide(slide_id, data, user_id)


@router.post("/{slide_id}/draft", response_model=SlideResponse)
def stage_draft(
    slide_id: str,
    data: DraftStageRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    """Called by the co-editing bridge once an edited slide has been re-rendered."""
    return DraftLifecycle(db).stage(slide_id, data.draft_object_id, user_id)
