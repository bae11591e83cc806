"""Organization lookups and the project listing."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..exceptions import NotFoundError
from ..models import Folder, Organization
from ..repositories import FolderRepository, OrganizationRepository
from .role_service import RoleService
from .visibility_gate import can_read

logger = logging.getLogger(__name__)


class OrganizationService:

    def __init__(self, db: Session):
        self.db = db
        self.org_repo = OrganizationRepository(db)
        self.folder_repo = FolderRepository(db)
        self.role_service = RoleService(db)

    def get_by_slug(self, slug: str) -> Organization:
        organization = self.org_repo.get_by_slug_optional(slug)
        if organization is None:
            raise NotFoundError("organization", slug)
        return organization

    def list_projects(self, slug: str, user_id: Optional[str]) -> List[Folder]:
        """Projects of the organization the caller may read, most recently updated first."""
        organization = self.get_by_slug(slug)
        roles = self.role_service.roles_for(user_id)
        return [
            project
            for project in self.folder_repo.list_projects(organization.id)
            if can_read(project.visibility, organization.id, project.id, roles)
        ]
