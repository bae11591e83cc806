"""Mutation permissions as a single table.

Each mutation names a minimum organization role and a minimum project role.
A caller is authorized when EITHER tier meets its threshold; ``None`` means
that tier can never authorize the mutation on its own.

    mutation        organization role     project role
    create          member or higher      contributor or higher
    update          admin or higher       contributor or higher
    reorder         admin or higher       contributor or higher
    delete_folder   admin or higher       -
    create_project  admin or higher       -
    delete_project  admin or higher       -

``create_project`` has no project column because no project grant can exist
before the project does.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from ..exceptions import AuthenticationError, ForbiddenError
from ..models import OrganizationRole, PresentationRole, ProjectRole

if TYPE_CHECKING:
    from .role_service import UserRoles

logger = logging.getLogger(__name__)


class Mutation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    REORDER = "reorder"
    DELETE_FOLDER = "delete_folder"
    CREATE_PROJECT = "create_project"
    DELETE_PROJECT = "delete_project"


_POLICY: Dict[Mutation, Tuple[Optional[OrganizationRole], Optional[ProjectRole]]] = {
    Mutation.CREATE: (OrganizationRole.MEMBER, ProjectRole.CONTRIBUTOR),
    Mutation.UPDATE: (OrganizationRole.ADMIN, ProjectRole.CONTRIBUTOR),
    Mutation.REORDER: (OrganizationRole.ADMIN, ProjectRole.CONTRIBUTOR),
    Mutation.DELETE_FOLDER: (OrganizationRole.ADMIN, None),
    Mutation.CREATE_PROJECT: (OrganizationRole.ADMIN, None),
    Mutation.DELETE_PROJECT: (OrganizationRole.ADMIN, None),
}


def is_allowed(
    mutation: Mutation,
    organization_role: Optional[OrganizationRole],
    project_role: Optional[ProjectRole],
) -> bool:
    """Table lookup: does either role meet the mutation's threshold?"""
    org_threshold, project_threshold = _POLICY[mutation]

    if org_threshold is not None and organization_role is not None:
        if organization_role.at_least(org_threshold):
            return True
    if project_threshold is not None and project_role is not None:
        if project_role.at_least(project_threshold):
            return True
    return False


def authorize(
    mutation: Mutation,
    roles: UserRoles,
    organization_id: str,
    project_id: Optional[str],
) -> None:
    """Raise unless *roles* may perform *mutation* on a resource.

    Raises:
        AuthenticationError: the caller is anonymous.
        ForbiddenError: the caller is known but neither tier qualifies.
    """
    if not roles.is_authenticated:
        raise AuthenticationError()

    organization_role = roles.organization_role(organization_id)
    project_role = roles.project_role(project_id) if project_id else None

    if not is_allowed(mutation, organization_role, project_role):
        logger.info(
            "Mutation denied",
            extra={
                "user_id": roles.user_id,
                "mutation": mutation.value,
                "organization_id": organization_id,
                "project_id": project_id,
                "organization_role": organization_role.value if organization_role else None,
                "project_role": project_role.value if project_role else None,
            },
        )
        raise ForbiddenError(f"Insufficient permissions to {mutation.value.replace('_', ' ')}")


def meets_presentation_role(
    threshold: Optional[str],
    roles: UserRoles,
    organization_id: str,
    project_id: str,
) -> bool:
    """Check a presentation action threshold (download, chat) for a caller.

    Unknown thresholds are treated as the strictest level.
    """
    level = PresentationRole.parse(threshold) or PresentationRole.PROJECT_ADMIN

    if level is PresentationRole.PUBLIC:
        return True
    if level is PresentationRole.ORGANIZATION_MEMBER:
        return roles.organization_role(organization_id) is not None

    required = {
        PresentationRole.PROJECT_MEMBER: ProjectRole.MEMBER,
        PresentationRole.PROJECT_CONTRIBUTOR: ProjectRole.CONTRIBUTOR,
        PresentationRole.PROJECT_ADMIN: ProjectRole.ADMIN,
    }[level]
    project_role = roles.project_role(project_id)
    return project_role is not None and project_role.at_least(required)
