"""Presentation operations: create, read, edit, reorder and action checks."""

import logging
import uuid
from enum import Enum
from typing import List, Optional

from sqlalchemy.orm import Session

from ..exceptions import DuplicateOrderError
from ..models import Presentation
from ..models.presentation import default_settings
from ..repositories import FolderRepository, PresentationRepository
from ..schemas.presentation import PresentationCreate, PresentationUpdate, SlideOrderEntry
from .path_resolver import PathResolver, Scope
from .permission_policy import Mutation, authorize, meets_presentation_role
from .role_service import RoleService, UserRoles
from .visibility_gate import can_read, ensure_can_read

logger = logging.getLogger(__name__)


class PresentationAction(str, Enum):
    """Actions gated by a presentation's settings thresholds."""
    PPTX_DOWNLOAD = "pptx_download"
    PDF_DOWNLOAD = "pdf_download"
    CHAT = "chat"

    @property
    def settings_key(self) -> str:
        return f"{self.value}_role"


class PresentationService:

    def __init__(self, db: Session):
        self.db = db
        self.presentation_repo = PresentationRepository(db)
        self.folder_repo = FolderRepository(db)
        self.resolver = PathResolver(db)
        self.role_service = RoleService(db)

    def create_presentation(
        self, folder_id: str, data: PresentationCreate, user_id: Optional[str]
    ) -> Presentation:
        """Create a presentation in *folder_id*; slides get order values 1..n."""
        folder = self.folder_repo.get_by_id(folder_id)
        scope = self.resolver.scope_of(folder.id)
        roles = self.role_service.roles_for(user_id)
        authorize(Mutation.CREATE, roles, scope.organization_id, scope.project_id)

        presentation = Presentation(
            id=str(uuid.uuid4()),
            parent_id=folder.id,
            presentation_name=data.presentation_name,
            slides=[
                {"order": position, "slide_id": ref.slide_id, "object_id": ref.object_id}
                for position, ref in enumerate(data.slides, start=1)
            ],
            settings=data.settings.model_dump(mode="json") if data.settings else default_settings(),
            version=1,
            tags=data.tags,
            created_by=user_id,
            updated_by=user_id,
        )
        presentation = self.presentation_repo.insert(presentation)
        self.db.commit()
        logger.info(
            "Presentation created",
            extra={"presentation_id": presentation.id, "folder_id": folder.id, "user_id": user_id},
        )
        return presentation

    def get_presentation(self, presentation_id: str, user_id: Optional[str]) -> Presentation:
        presentation = self.presentation_repo.get_by_id(presentation_id)
        self.check_readable(presentation, self.role_service.roles_for(user_id))
        return presentation

    def check_readable(self, presentation: Presentation, roles: UserRoles) -> Scope:
        """Presentations read with their parent folder's visibility."""
        folder = self.folder_repo.get_by_id(presentation.parent_id)
        scope = self.resolver.scope_of(folder.id)
        ensure_can_read(
            folder.visibility, scope.organization_id, scope.project_id, roles, resource="presentation"
        )
        return scope

    def update_presentation(
        self, presentation_id: str, data: PresentationUpdate, user_id: Optional[str]
    ) -> Presentation:
        presentation = self.presentation_repo.get_by_id(presentation_id)
        scope = self.resolver.scope_of(presentation.parent_id)
        roles = self.role_service.roles_for(user_id)
        authorize(Mutation.UPDATE, roles, scope.organization_id, scope.project_id)

        if data.presentation_name is not None:
            presentation.presentation_name = data.presentation_name
        if data.tags is not None:
            presentation.tags = data.tags
        if data.settings is not None:
            presentation.settings = data.settings.model_dump(mode="json")
        presentation.updated_by = user_id

        presentation = self.presentation_repo.save(presentation)
        self.db.commit()
        return presentation

    def reorder(
        self, presentation_id: str, entries: List[SlideOrderEntry], user_id: Optional[str]
    ) -> Presentation:
        """Replace the slide sequence and bump ``version``.

        Repeated order values are rejected before the permission check and
        before anything is written.
        """
        presentation = self.presentation_repo.get_by_id(presentation_id)

        seen = set()
        for entry in entries:
            if entry.order in seen:
                logger.info(
                    "Reorder rejected: duplicate order",
                    extra={"presentation_id": presentation_id, "order": entry.order},
                )
                raise DuplicateOrderError(entry.order)
            seen.add(entry.order)

        scope = self.resolver.scope_of(presentation.parent_id)
        roles = self.role_service.roles_for(user_id)
        authorize(Mutation.REORDER, roles, scope.organization_id, scope.project_id)

        presentation.slides = [
            {"order": e.order, "slide_id": e.slide_id, "object_id": e.object_id}
            for e in sorted(entries, key=lambda e: e.order)
        ]
        presentation.version = (presentation.version or 1) + 1
        presentation.updated_by = user_id

        presentation = self.presentation_repo.save(presentation)
        self.db.commit()
        logger.info(
            "Presentation reordered",
            extra={
                "presentation_id": presentation.id,
                "version": presentation.version,
                "slides": len(entries),
                "user_id": user_id,
            },
        )
        return presentation

    def can_perform(
        self, action: PresentationAction, presentation_id: str, user_id: Optional[str]
    ) -> bool:
        presentation = self.presentation_repo.get_by_id(presentation_id)
        roles = self.role_service.roles_for(user_id)
        folder = self.folder_repo.get_by_id(presentation.parent_id)
        scope = self.resolver.scope_of(folder.id)
        if not can_read(folder.visibility, scope.organization_id, scope.project_id, roles):
            return False
        return self._meets(action, presentation, scope, roles)

    def allowed_actions(self, presentation: Presentation, user_id: Optional[str]) -> List[str]:
        """Actions the caller may perform on an already read-checked presentation."""
        roles = self.role_service.roles_for(user_id)
        scope = self.resolver.scope_of(presentation.parent_id)
        return [
            action.value
            for action in PresentationAction
            if self._meets(action, presentation, scope, roles)
        ]

    @staticmethod
    def _meets(
        action: PresentationAction, presentation: Presentation, scope: Scope, roles: UserRoles
    ) -> bool:
        settings = {**default_settings(), **(presentation.settings or {})}
        threshold = settings[action.settings_key]
        return meets_presentation_role(threshold, roles, scope.organization_id, scope.project_id)
