"""Search filter construction and pagination mapping.

The filter string is the one wire format shared with the search engine
(Meilisearch grammar): ``field = "literal"`` and ``field IN [..]`` joined
with AND/OR, parenthesised so the visibility OR-group never mixes with the
scope constraints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Tuple

from .visibility_gate import quote, quote_list, visibility_fragments

if TYPE_CHECKING:
    from .role_service import UserRoles

DEFAULT_LIMIT = 20


def build_search_filter(
    organization_id: str,
    roles: UserRoles,
    project_id: Optional[str] = None,
    sub_folder_ids: Optional[Iterable[str]] = None,
) -> str:
    """AND together scope constraints and the caller's visibility clause.

    Args:
        organization_id: Always applied.
        roles: Caller roles; decide which visibility fragments are included.
        project_id: Restrict to one project.
        sub_folder_ids: Restrict to slides whose parent is one of these
            folders (a subtree scope). Sorted so the output is deterministic.
    """
    clauses = [f"organization_id = {quote(organization_id)}"]

    if project_id:
        clauses.append(f"project_id = {quote(project_id)}")

    if sub_folder_ids:
        clauses.append(f"parent_id IN {quote_list(sorted(sub_folder_ids))}")

    fragments = visibility_fragments(roles, organization_id)
    if len(fragments) == 1:
        clauses.append(fragments[0])
    else:
        clauses.append("(" + " OR ".join(fragments) + ")")

    return " AND ".join(clauses)


def page_for(offset: int = 0, limit: Optional[int] = None) -> Tuple[int, int]:
    """Map zero-based ``(offset, limit)`` to the engine's one-based ``(page, per_page)``."""
    per_page = DEFAULT_LIMIT if limit is None else limit
    if per_page < 1:
        raise ValueError("limit must be positive")
    if offset < 0:
        raise ValueError("offset must not be negative")
    return offset // per_page + 1, per_page
