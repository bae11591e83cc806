"""Slide search: scope resolution, filter construction, engine call, hit decoration."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..exceptions import NotFoundError, ValidationError
from ..repositories import FolderRepository
from .organization_service import OrganizationService
from .path_resolver import PathResolver, join_path, normalize_path
from .role_service import RoleService
from .search_client import SearchClient
from .search_filter import build_search_filter, page_for
from .visibility_gate import can_read

logger = logging.getLogger(__name__)

MAX_LIMIT = 100


class SlideSearchService:
    """Full-text slide search bounded by the caller's read access.

    The engine only ever sees a filter built from the same rule as direct
    reads, so a hit can never be a slide the caller could not open.
    """

    def __init__(self, db: Session, client: Optional[SearchClient] = None):
        self.db = db
        self.organizations = OrganizationService(db)
        self.resolver = PathResolver(db)
        self.role_service = RoleService(db)
        self.folder_repo = FolderRepository(db)
        self._client = client

    @property
    def client(self) -> SearchClient:
        if self._client is None:
            self._client = SearchClient.from_settings()
        return self._client

    def search(
        self,
        org_slug: str,
        query: str,
        user_id: Optional[str],
        project_path: Optional[str] = None,
        folder_path: Optional[str] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Search slides of one organization.

        Args:
            project_path: Project name or "/project"; limits hits to that project.
            folder_path: Path below the project (or a full path when no
                project is given); limits hits to that folder's subtree.
        """
        try:
            page, per_page = page_for(offset, limit)
        except ValueError as e:
            raise ValidationError(str(e), field="offset" if offset < 0 else "limit") from e
        if per_page > MAX_LIMIT:
            raise ValidationError(f"limit must not exceed {MAX_LIMIT}", field="limit")

        organization = self.organizations.get_by_slug(org_slug)
        roles = self.role_service.roles_for(user_id)

        project_id = None
        sub_folder_ids = None
        scope_path = self._scope_path(project_path, folder_path)
        if scope_path is not None:
            folder = self.resolver.resolve_folder(organization.id, scope_path)
            scope = self.resolver.scope_of(folder.id)
            # An unreadable scope answers exactly like a missing one.
            if not can_read(folder.visibility, scope.organization_id, scope.project_id, roles):
                logger.info(
                    "Search scope not readable",
                    extra={"folder_id": folder.id, "user_id": user_id},
                )
                raise NotFoundError("folder", scope_path)
            project_id = scope.project_id
            if not folder.is_project:
                sub_folder_ids = self.resolver.descendant_ids(folder.id)

        search_filter = build_search_filter(
            organization.id,
            roles,
            project_id=project_id,
            sub_folder_ids=sub_folder_ids,
        )
        logger.debug("Search filter built", extra={"filter": search_filter, "user_id": user_id})

        result = self.client.search(query, search_filter, page, per_page)
        hits = self._decorate(result.hits)

        return {
            "results": hits,
            "total": result.total,
            "offset": offset,
            "limit": per_page,
            "page": page,
        }

    @staticmethod
    def _scope_path(project_path: Optional[str], folder_path: Optional[str]) -> Optional[str]:
        if project_path and folder_path:
            return join_path(normalize_path(project_path), normalize_path(folder_path).lstrip("/"))
        if folder_path:
            return normalize_path(folder_path)
        if project_path:
            return normalize_path(project_path)
        return None

    def _decorate(self, hits: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Attach each hit's parent folder path; rename the engine's ``_formatted``."""
        paths = self.folder_repo.paths_for(h.get("parent_id") for h in hits if h.get("parent_id"))
        decorated = []
        for hit in hits:
            item = {k: v for k, v in hit.items() if k != "_formatted"}
            if "_formatted" in hit:
                item["formatted"] = hit["_formatted"]
            item["parent_path"] = paths.get(hit.get("parent_id"))
            decorated.append(item)
        return decorated
