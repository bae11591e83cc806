"""Presentation API: read, edit, reorder and action checks."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.auth import optional_user, require_user
from ..database import get_db
from ..schemas import (
    ActionCheckResponse,
    PresentationDetailResponse,
    PresentationResponse,
    PresentationUpdate,
    ReorderRequest,
)
from ..services import PresentationAction, PresentationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/presentations", tags=["presentations"])


@router.get("/{presentation_id}", response_model=PresentationDetailResponse)
def get_presentation(
    presentation_id: str,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(optional_user),
):
    """Presentation with the download/chat actions open to the caller."""
    service = PresentationService(db)
    presentation = service.get_presentation(presentation_id, user_id)
    body = PresentationResponse.model_validate(presentation).model_dump()
    return PresentationDetailResponse(
        **body, allowed_actions=service.allowed_actions(presentation, user_id)
    )


@router.patch("/{presentation_id}", response_model=PresentationResponse)
def update_presentation(
    presentation_id: str,
    data: PresentationUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    return PresentationService(db).update_presentation(presentation_id, data, user_id)


@router.patch("/{presentation_id}/reorder", response_model=PresentationResponse)
def reorder_slides(
    presentation_id: str,
    data: ReorderRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user),
):
    """Replace the slide order. Repeated order values answer 400."""
    return PresentationService(db).reorder(presentation_id, data.slides, user_id)


@router.get("/{presentation_id}/actions/{action}", response_model=ActionCheckResponse)
def check_action(
    presentation_id: str,
    action: PresentationAction,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(optional_user),
):
    """Ask whether the caller may download or chat with a presentation.

    Answers ``allowed: false`` rather than 403 when the caller cannot read it.
    """
    allowed = PresentationService(db).can_perform(action, presentation_id, user_id)
    return ActionCheckResponse(action=action.value, allowed=allowed)
