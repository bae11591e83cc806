"""Repository for folder (tree node) operations.

All reads exclude soft-deleted folders. Path lookups are exact matches on
the materialized ``full_path`` within one organization.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func

from ..models import Folder, Presentation, Slide
from .base import SoftDeleteRepository


@dataclass
class FolderChildren:
    """Non-deleted direct children of a folder, each list name-ordered."""

    folders: List[Folder] = field(default_factory=list)
    presentations: List[Presentation] = field(default_factory=list)
    slides: List[Slide] = field(default_factory=list)


class FolderRepository(SoftDeleteRepository[Folder]):
    """Data access layer for folders and projects."""

    model_class = Folder
    resource_name = "folder"

    def find_by_path(self, organization_id: str, full_path: str) -> Optional[Folder]:
        return self._base_query().filter(
            Folder.organization_id == organization_id,
            Folder.full_path == full_path,
        ).first()

    def list_child_folders(self, parent_id: str) -> List[Folder]:
        return self._base_query().filter(
            Folder.parent_id == parent_id
        ).order_by(Folder.folder_name).all()

    def list_children(self, folder_id: str) -> FolderChildren:
        presentations = self.db.query(Presentation).filter(
            Presentation.parent_id == folder_id,
            Presentation.deleted_at.is_(None),
        ).order_by(Presentation.presentation_name).all()

        slides = self.db.query(Slide).filter(
            Slide.parent_id == folder_id,
            Slide.deleted_at.is_(None),
        ).order_by(Slide.file_name).all()

        return FolderChildren(
            folders=self.list_child_folders(folder_id),
            presentations=presentations,
            slides=slides,
        )

    def list_projects(self, organization_id: str) -> List[Folder]:
        """Top-level folders of an organization, most recently updated first."""
        return self._base_query().filter(
            Folder.organization_id == organization_id,
            Folder.parent_id.is_(None),
        ).order_by(Folder.updated_at.desc(), Folder.folder_name).all()

    def find_sibling_by_name(
        self,
        organization_id: str,
        parent_id: Optional[str],
        folder_name: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Folder]:
        """Case-insensitive lookup of a live sibling with the given name."""
        query = self._base_query().filter(
            Folder.organization_id == organization_id,
            func.lower(Folder.folder_name) == folder_name.lower(),
        )
        if parent_id is None:
            query = query.filter(Folder.parent_id.is_(None))
        else:
            query = query.filter(Folder.parent_id == parent_id)
        if exclude_id is not None:
            query = query.filter(Folder.id != exclude_id)
        return query.first()

    def has_children(self, folder_id: str) -> bool:
        """True if any live folder, presentation or slide sits directly in the folder."""
        for model in (Folder, Presentation, Slide):
            exists = self.db.query(model.id).filter(
                model.parent_id == folder_id,
                model.deleted_at.is_(None),
            ).first()
            if exists is not None:
                return True
        return False

    def paths_for(self, folder_ids: Iterable[str]) -> Dict[str, str]:
        """Map folder ids to their full_path (missing/deleted ids are omitted)."""
        ids = list(set(folder_ids))
        if not ids:
            return {}
        rows = self._base_query().with_entities(Folder.id, Folder.full_path).filter(
            Folder.id.in_(ids)
        ).all()
        return {row.id: row.full_path for row in rows}

    def insert(self, folder: Folder) -> Folder:
        """Persist a new folder.

        The sibling-name unique index is the authoritative duplicate check;
        a violation surfaces as ConflictError.
        """
        self.db.add(folder)
        self._flush("A folder with this name already exists in this location")
        self.db.refresh(folder)
        return folder

    def save(self, folder: Folder) -> Folder:
        self._flush("A folder with this name already exists in this location")
        self.db.refresh(folder)
        return folder

    def rewrite_descendant_paths(self, organization_id: str, old_prefix: str, new_prefix: str) -> int:
        """Replace *old_prefix* with *new_prefix* in every live descendant's full_path.

        Returns the number of folders rewritten. Changes are flushed but not
        committed so they share the caller's transaction.
        """
        descendants = self._base_query().filter(
            Folder.organization_id == organization_id,
            Folder.full_path.like(f"{old_prefix}/%"),
        ).all()
        for folder in descendants:
            folder.full_path = new_prefix + folder.full_path[len(old_prefix):]
        if descendants:
            self._flush("Renaming would collide with an existing folder path")
        return len(descendants)

    def soft_delete(self, folder: Folder, user_id: Optional[str]) -> None:
        now = datetime.now(timezone.utc)
        folder.deleted_at = now
        folder.deleted_by = user_id
        folder.updated_at = now
        folder.updated_by = user_id
        self.db.flush()
