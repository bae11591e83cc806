"""Slide reads and metadata edits."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models import Slide
from ..repositories import SlideRepository
from ..schemas.slide import SlideUpdate
from .path_resolver import PathResolver
from .permission_policy import Mutation, authorize
from .role_service import RoleService, UserRoles
from .visibility_gate import ensure_can_read

logger = logging.getLogger(__name__)


class SlideService:

    def __init__(self, db: Session):
        self.db = db
        self.slide_repo = SlideRepository(db)
        self.resolver = PathResolver(db)
        self.role_service = RoleService(db)

    def get_slide(self, slide_id: str, user_id: Optional[str]) -> Slide:
        slide = self.slide_repo.get_by_id(slide_id)
        self.check_readable(slide, self.role_service.roles_for(user_id))
        return slide

    def check_readable(self, slide: Slide, roles: UserRoles) -> None:
        scope = self.resolver.scope_of(slide.parent_id)
        ensure_can_read(
            slide.visibility, scope.organization_id, scope.project_id, roles, resource="slide"
        )

    def update_slide(self, slide_id: str, data: SlideUpdate, user_id: Optional[str]) -> Slide:
        slide = self.slide_repo.get_by_id(slide_id)
        scope = self.resolver.scope_of(slide.parent_id)
        roles = self.role_service.roles_for(user_id)
        authorize(Mutation.UPDATE, roles, scope.organization_id, scope.project_id)

        if data.file_name is not None:
            slide.file_name = data.file_name
        if data.description is not None:
            slide.description = data.description
        if data.tags is not None:
            slide.tags = data.tags
        if data.visibility is not None:
            slide.visibility = data.visibility.value
        slide.updated_by = user_id

        slide = self.slide_repo.save(slide)
        self.db.commit()
        logger.info("Slide updated", extra={"slide_id": slide.id, "user_id": user_id})
        return slide
