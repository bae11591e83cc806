"""Publish / discard state machine for a slide's rendered asset.

    Published     draft_object_id is NULL, object_id is the live asset
    DraftPending  draft_object_id holds a newer rendering

    stage    Published|DraftPending -> DraftPending
    publish  DraftPending -> Published (object_id := draft_object_id)
    discard  DraftPending -> Published (object_id unchanged)

Publish and discard are single guarded UPDATE statements, so a concurrent
reader sees either the old row or the new one. Permission is checked before
the state is, which means an unauthorized caller never learns whether a
draft exists.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..exceptions import NoDraftError
from ..models import Slide
from ..repositories import SlideRepository
from .path_resolver import PathResolver
from .permission_policy import Mutation, authorize
from .role_service import RoleService

logger = logging.getLogger(__name__)


class DraftLifecycle:

    def __init__(self, db: Session):
        self.db = db
        self.slide_repo = SlideRepository(db)
        self.resolver = PathResolver(db)
        self.role_service = RoleService(db)

    def publish(self, slide_id: str, user_id: Optional[str]) -> Slide:
        """Promote the pending draft to the published asset.

        Raises:
            NotFoundError: slide missing or deleted.
            AuthenticationError / ForbiddenError: caller fails the update rule.
            NoDraftError: nothing pending.
        """
        self._authorize(slide_id, user_id)
        if not self.slide_repo.publish_draft(slide_id, user_id):
            raise NoDraftError(slide_id, "publish")
        self.db.commit()
        logger.info("Draft published", extra={"slide_id": slide_id, "user_id": user_id})
        return self.slide_repo.get_by_id(slide_id)

    def discard(self, slide_id: str, user_id: Optional[str]) -> Slide:
        """Drop the pending draft; the published asset stays as it was."""
        self._authorize(slide_id, user_id)
        if not self.slide_repo.discard_draft(slide_id, user_id):
            raise NoDraftError(slide_id, "discard")
        self.db.commit()
        logger.info("Draft discarded", extra={"slide_id": slide_id, "user_id": user_id})
        return self.slide_repo.get_by_id(slide_id)

    def stage(self, slide_id: str, draft_object_id: str, user_id: Optional[str]) -> Slide:
        """Record a new rendering as the pending draft, replacing any earlier one."""
        self._authorize(slide_id, user_id)
        self.slide_repo.stage_draft(slide_id, draft_object_id, user_id)
        self.db.commit()
        logger.info(
            "Draft staged",
            extra={"slide_id": slide_id, "draft_object_id": draft_object_id, "user_id": user_id},
        )
        return self.slide_repo.get_by_id(slide_id)

    def _authorize(self, slide_id: str, user_id: Optional[str]) -> None:
        slide = self.slide_repo.get_by_id(slide_id)
        scope = self.resolver.scope_of(slide.parent_id)
        roles = self.role_service.roles_for(user_id)
        authorize(Mutation.UPDATE, roles, scope.organization_id, scope.project_id)
