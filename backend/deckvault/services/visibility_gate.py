"""Read access: one pure rule, two renderings.

This is the ONE place the visibility model is defined. ``can_read`` answers
for a single resource; ``visibility_fragments`` restates the same rule as
search-engine predicates so that search can never show what a direct read
would refuse.

Rules:
    public     -> everyone, including anonymous callers
    internal   -> any role (member/admin/owner) in the resource's organization
    restricted -> any role on the resource's project; organization roles
                  do not substitute for a missing project grant
    anything else (including NULL) is treated as internal
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from ..exceptions import AuthenticationError, ForbiddenError
from ..models import Visibility

if TYPE_CHECKING:
    from .role_service import UserRoles


def can_read(
    visibility: Optional[str],
    organization_id: Optional[str],
    project_id: Optional[str],
    roles: UserRoles,
) -> bool:
    """Decide whether *roles* may read a resource with the given placement.

    Args:
        visibility: The resource's stored visibility value (may be None).
        organization_id: Organization the resource belongs to.
        project_id: Project (root folder) the resource sits under.
        roles: The caller's aggregated roles.
    """
    tier = Visibility.coerce(visibility)

    if tier is Visibility.PUBLIC:
        return True
    if tier is Visibility.RESTRICTED:
        return project_id is not None and project_id in roles.project_ids
    return organization_id is not None and organization_id in roles.organization_ids


def ensure_can_read(
    visibility: Optional[str],
    organization_id: Optional[str],
    project_id: Optional[str],
    roles: UserRoles,
    resource: str = "resource",
) -> None:
    """Raise unless ``can_read`` allows the caller.

    Anonymous callers get AuthenticationError so they can be asked to sign
    in; known callers get ForbiddenError.
    """
    if can_read(visibility, organization_id, project_id, roles):
        return
    if not roles.is_authenticated:
        raise AuthenticationError()
    raise ForbiddenError(f"You do not have access to this {resource}")


def quote(value: str) -> str:
    """Render a string literal for the filter grammar."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def quote_list(values: List[str]) -> str:
    """Render ``[..]`` for ``IN`` clauses; input order is kept, duplicates dropped."""
    unique = list(dict.fromkeys(values))
    return "[" + ", ".join(quote(v) for v in unique) + "]"


def visibility_fragments(roles: UserRoles, organization_id: str) -> List[str]:
    """Predicate fragments a caller's search results must satisfy (ORed).

    ``public`` is always present. The internal fragment is added only when
    the caller holds a role in *organization_id* and is scoped to it; the
    restricted fragment is added only when the caller holds any project
    role and is scoped to those project ids.
    """
    fragments = [f"visibility = {quote(Visibility.PUBLIC.value)}"]

    if organization_id in roles.organization_ids:
        fragments.append(
            f"(visibility = {quote(Visibility.INTERNAL.value)} "
            f"AND organization_id = {quote(organization_id)})"
        )

    if roles.project_ids:
        fragments.append(
            f"(visibility = {quote(Visibility.RESTRICTED.value)} "
            f"AND project_id IN {quote_list(roles.project_ids)})"
        )

    return fragments
