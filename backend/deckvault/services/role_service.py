"""Role aggregation: the caller's effective grants, loaded once per request.

``UserRoles`` is the value every policy function consumes. It holds the
organization tier and the project tier side by side; nothing here derives
one tier from the other (an organization owner does not appear in
``folder_roles``).
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import OrganizationRole, ProjectRole
from ..repositories import RoleRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrganizationGrant:
    organization_id: str
    role: OrganizationRole


@dataclass(frozen=True)
class ProjectGrant:
    project_id: str
    role: ProjectRole


@dataclass(frozen=True)
class UserRoles:
    """Both role tiers of one caller. Empty for anonymous callers."""

    user_id: Optional[str] = None
    organization_roles: List[OrganizationGrant] = field(default_factory=list)
    folder_roles: List[ProjectGrant] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def organization_ids(self) -> List[str]:
        return [g.organization_id for g in self.organization_roles]

    @property
    def project_ids(self) -> List[str]:
        return [g.project_id for g in self.folder_roles]

    def organization_role(self, organization_id: Optional[str]) -> Optional[OrganizationRole]:
        """Highest stored role in *organization_id*, or None without membership."""
        roles = [g.role for g in self.organization_roles if g.organization_id == organization_id]
        return max(roles, key=lambda r: r.rank) if roles else None

    def project_role(self, project_id: Optional[str]) -> Optional[ProjectRole]:
        """Highest stored role on *project_id*, or None without a grant."""
        roles = [g.role for g in self.folder_roles if g.project_id == project_id]
        return max(roles, key=lambda r: r.rank) if roles else None


ANONYMOUS = UserRoles()


class RoleService:
    """Builds ``UserRoles`` from the stored grants."""

    def __init__(self, db: Session):
        self.db = db
        self.role_repo = RoleRepository(db)

    def roles_for(self, user_id: Optional[str]) -> UserRoles:
        """Return the caller's role set.

        Unauthenticated callers (``None``) get empty tiers. Stored role
        values that are not part of the vocabulary are dropped with a
        warning rather than guessed at.
        """
        if user_id is None:
            return ANONYMOUS

        organization_grants = []
        for organization_id, value in self.role_repo.organization_roles(user_id):
            role = OrganizationRole.parse(value)
            if role is None:
                logger.warning(
                    "Ignoring unknown organization role",
                    extra={"user_id": user_id, "organization_id": organization_id, "role": value},
                )
                continue
            organization_grants.append(OrganizationGrant(organization_id, role))

        project_grants = []
        for project_id, value in self.role_repo.folder_roles(user_id):
            role = ProjectRole.parse(value)
            if role is None:
                logger.warning(
                    "Ignoring unknown project role",
                    extra={"user_id": user_id, "project_id": project_id, "role": value},
                )
                continue
            project_grants.append(ProjectGrant(project_id, role))

        return UserRoles(
            user_id=user_id,
            organization_roles=organization_grants,
            folder_roles=project_grants,
        )
