"""Path resolution over the folder tree.

Three lookups, all iterative:

    resolve_folder_id  -- organization + virtual path -> folder id (exact match)
    root_ancestor_id   -- folder -> owning project (walk parent_id upward)
    descendant_ids     -- folder -> itself plus every live sub-folder id

``scope_of`` packages the root-ancestor walk as the (organization, project)
pair that visibility and permission checks take.

The tree is a parent-pointer graph of unbounded depth. Walks keep a
visited set; meeting a node twice means the stored graph is cyclic, which
is reported as a DataIntegrityError instead of looping.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from sqlalchemy.orm import Session

from ..exceptions import DataIntegrityError, NotFoundError
from ..models import Folder
from ..repositories import FolderRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scope:
    """Where a node sits: its organization and the project that owns it."""

    organization_id: str
    project_id: str


def normalize_path(path: Optional[str]) -> str:
    """Canonical leading-slash form: ``"a//b/"`` -> ``"/a/b"``, ``""`` -> ``"/"``."""
    segments = [s for s in (path or "").strip().split("/") if s]
    return "/" + "/".join(segments)


def join_path(parent_path: Optional[str], folder_name: str) -> str:
    """Child full_path from the parent's full_path (None/"/" for projects)."""
    if not parent_path or parent_path == "/":
        return f"/{folder_name}"
    return f"{parent_path}/{folder_name}"


def breadcrumbs(full_path: str) -> List[Dict[str, str]]:
    """Split a full_path into ``[{"name", "path"}]`` steps from the project down."""
    crumbs = []
    current = ""
    for segment in normalize_path(full_path).split("/"):
        if not segment:
            continue
        current += f"/{segment}"
        crumbs.append({"name": segment, "path": current})
    return crumbs


class PathResolver:
    """Maps virtual paths and parent pointers to folder identities."""

    def __init__(self, db: Session):
        self.db = db
        self.folder_repo = FolderRepository(db)

    def resolve_folder_id(self, organization_id: str, path: str) -> str:
        return self.resolve_folder(organization_id, path).id

    def resolve_folder(self, organization_id: str, path: str) -> Folder:
        """Exact match of *path* against live folders of the organization.

        Raises NotFoundError when nothing matches; no prefix matching.
        """
        normalized = normalize_path(path)
        folder = None
        if normalized != "/":
            folder = self.folder_repo.find_by_path(organization_id, normalized)
        if folder is None:
            raise NotFoundError("folder", normalized)
        return folder

    def root_ancestor_id(self, folder_id: str) -> str:
        return self.root_ancestor(folder_id).id

    def root_ancestor(self, folder_id: str) -> Folder:
        """Walk parent pointers up to the project owning *folder_id*.

        A parent reference that does not resolve to a live folder is a
        NotFoundError; revisiting a folder is a DataIntegrityError.
        """
        visited: Set[str] = set()
        current_id = folder_id
        while True:
            if current_id in visited:
                logger.error(
                    "Cycle detected in folder parent chain",
                    extra={"folder_id": folder_id, "revisited": current_id},
                )
                raise DataIntegrityError(
                    f"Folder parent chain of {folder_id} is cyclic", folder_id=current_id
                )
            visited.add(current_id)

            folder = self.folder_repo.get_by_id_optional(current_id)
            if folder is None:
                raise NotFoundError("folder", current_id)
            if folder.parent_id is None:
                return folder
            current_id = folder.parent_id

    def scope_of(self, folder_id: str) -> Scope:
        """Organization and owning project of *folder_id* (a project owns itself)."""
        project = self.root_ancestor(folder_id)
        return Scope(organization_id=project.organization_id, project_id=project.id)

    def descendant_ids(self, folder_id: str) -> Set[str]:
        """*folder_id* plus the ids of every live folder beneath it.

        Breadth-first over child folders only. Presentations and slides are
        not part of the result.
        """
        if self.folder_repo.get_by_id_optional(folder_id) is None:
            raise NotFoundError("folder", folder_id)

        seen: Set[str] = {folder_id}
        queue = deque([folder_id])
        while queue:
            current = queue.popleft()
            for child in self.folder_repo.list_child_folders(current):
                if child.id in seen:
                    logger.error(
                        "Cycle detected below folder",
                        extra={"folder_id": folder_id, "revisited": child.id},
                    )
                    raise DataIntegrityError(
                        f"Folder tree below {folder_id} is cyclic", folder_id=child.id
                    )
                seen.add(child.id)
                queue.append(child.id)
        return seen
