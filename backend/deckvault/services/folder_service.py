"""Folder and project operations.

Every public method takes the caller's ``user_id`` (None when anonymous),
loads the caller's roles once, and runs the visibility or permission check
before touching the tree. Writes commit on success; a failed flush is rolled
back by the repository.
"""

import logging
import uuid
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..exceptions import ConflictError
from ..models import Folder, Visibility
from ..repositories import FolderChildren, FolderRepository
from ..schemas.folder import FolderCreate, FolderUpdate
from .path_resolver import PathResolver, breadcrumbs, join_path
from .permission_policy import Mutation, authorize
from .role_service import RoleService, UserRoles
from .visibility_gate import can_read, ensure_can_read

logger = logging.getLogger(__name__)


class FolderService:
    """Folder and project operations behind one interface.

    Public methods:
        create_project  -- top-level folder; organization owner/admin only
        create_folder   -- child folder; inherits the parent's visibility
        get_folder      -- read-checked lookup by id
        list_children   -- readable folders, presentations and slides
        breadcrumbs     -- name/path steps from the project down
        update_folder   -- rename (cascades full_path), visibility, tags, description
        delete_folder   -- soft delete of an empty folder or project
    """

    def __init__(self, db: Session):
        self.db = db
        self.folder_repo = FolderRepository(db)
        self.resolver = PathResolver(db)
        self.role_service = RoleService(db)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_project(self, organization_id: str, data: FolderCreate, user_id: Optional[str]) -> Folder:
        roles = self.role_service.roles_for(user_id)
        authorize(Mutation.CREATE_PROJECT, roles, organization_id, None)

        self._ensure_unique_name(organization_id, None, data.folder_name)
        project = Folder(
            id=str(uuid.uuid4()),
            organization_id=organization_id,
            parent_id=None,
            folder_name=data.folder_name,
            full_path=join_path(None, data.folder_name),
            visibility=(data.visibility or Visibility.INTERNAL).value,
            tags=data.tags,
            metadata_=self._metadata(data.description),
            created_by=user_id,
            updated_by=user_id,
        )
        project = self.folder_repo.insert(project)
        self.db.commit()
        logger.info(
            "Project created",
            extra={"folder_id": project.id, "organization_id": organization_id, "user_id": user_id},
        )
        return project

    def create_folder(self, parent_id: str, data: FolderCreate, user_id: Optional[str]) -> Folder:
        parent = self.folder_repo.get_by_id(parent_id)
        scope = self.resolver.scope_of(parent.id)
        roles = self.role_service.roles_for(user_id)
        authorize(Mutation.CREATE, roles, scope.organization_id, scope.project_id)

        self._ensure_unique_name(parent.organization_id, parent.id, data.folder_name)
        visibility = data.visibility or Visibility.coerce(parent.visibility)
        folder = Folder(
            id=str(uuid.uuid4()),
            organization_id=parent.organization_id,
            parent_id=parent.id,
            folder_name=data.folder_name,
            full_path=join_path(parent.full_path, data.folder_name),
            visibility=visibility.value,
            tags=data.tags,
            metadata_=self._metadata(data.description),
            created_by=user_id,
            updated_by=user_id,
        )
        folder = self.folder_repo.insert(folder)
        self.db.commit()
        logger.info(
            "Folder created",
            extra={"folder_id": folder.id, "full_path": folder.full_path, "user_id": user_id},
        )
        return folder

    def get_folder(self, folder_id: str, user_id: Optional[str]) -> Folder:
        folder = self.folder_repo.get_by_id(folder_id)
        self._check_readable(folder, self.role_service.roles_for(user_id))
        return folder

    def list_children(self, folder_id: str, user_id: Optional[str]) -> FolderChildren:
        """Direct children of a readable folder, minus those the caller cannot read.

        Presentations read with the folder's visibility, so they are kept
        whenever the folder itself is readable.
        """
        folder = self.folder_repo.get_by_id(folder_id)
        roles = self.role_service.roles_for(user_id)
        scope = self._check_readable(folder, roles)

        children = self.folder_repo.list_children(folder.id)
        return FolderChildren(
            folders=[
                f for f in children.folders
                if can_read(f.visibility, scope.organization_id, scope.project_id, roles)
            ],
            presentations=children.presentations,
            slides=[
                s for s in children.slides
                if can_read(s.visibility, scope.organization_id, scope.project_id, roles)
            ],
        )

    def breadcrumbs(self, folder_id: str, user_id: Optional[str]) -> List[Dict[str, str]]:
        return breadcrumbs(self.get_folder(folder_id, user_id).full_path)

    def update_folder(self, folder_id: str, data: FolderUpdate, user_id: Optional[str]) -> Folder:
        """Apply the fields set on *data*.

        A rename rewrites the folder's own full_path and every live
        descendant's in the same transaction.
        """
        folder = self.folder_repo.get_by_id(folder_id)
        scope = self.resolver.scope_of(folder.id)
        roles = self.role_service.roles_for(user_id)
        authorize(Mutation.UPDATE, roles, scope.organization_id, scope.project_id)

        renamed_from = None
        if data.folder_name is not None and data.folder_name != folder.folder_name:
            self._ensure_unique_name(
                folder.organization_id, folder.parent_id, data.folder_name, exclude_id=folder.id
            )
            renamed_from = folder.full_path
            parent_path = folder.full_path.rsplit("/", 1)[0]
            folder.folder_name = data.folder_name
            folder.full_path = join_path(parent_path, data.folder_name)

        if data.visibility is not None:
            folder.visibility = data.visibility.value
        if data.tags is not None:
            folder.tags = data.tags
        if data.description is not None:
            folder.metadata_ = {**(folder.metadata_ or {}), "description": data.description}
        folder.updated_by = user_id

        folder = self.folder_repo.save(folder)
        if renamed_from is not None:
            moved = self.folder_repo.rewrite_descendant_paths(
                folder.organization_id, renamed_from, folder.full_path
            )
            logger.info(
                "Folder renamed",
                extra={
                    "folder_id": folder.id,
                    "old_path": renamed_from,
                    "new_path": folder.full_path,
                    "descendants_rewritten": moved,
                },
            )
        self.db.commit()
        self.db.refresh(folder)
        return folder

    def delete_folder(self, folder_id: str, user_id: Optional[str]) -> None:
        """Soft-delete an empty folder. Projects need the delete-project rule."""
        folder = self.folder_repo.get_by_id(folder_id)
        scope = self.resolver.scope_of(folder.id)
        roles = self.role_service.roles_for(user_id)
        mutation = Mutation.DELETE_PROJECT if folder.is_project else Mutation.DELETE_FOLDER
        authorize(mutation, roles, scope.organization_id, scope.project_id)

        if self.folder_repo.has_children(folder.id):
            raise ConflictError(
                "Folder is not empty. Delete its contents first",
                details={"folder_id": folder.id},
            )

        self.folder_repo.soft_delete(folder, user_id)
        self.db.commit()
        logger.info(
            "Folder deleted",
            extra={"folder_id": folder.id, "full_path": folder.full_path, "user_id": user_id},
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_readable(self, folder: Folder, roles: UserRoles):
        scope = self.resolver.scope_of(folder.id)
        ensure_can_read(
            folder.visibility, scope.organization_id, scope.project_id, roles, resource="folder"
        )
        return scope

    def _ensure_unique_name(
        self,
        organization_id: str,
        parent_id: Optional[str],
        folder_name: str,
        exclude_id: Optional[str] = None,
    ) -> None:
        """Pre-check for a clearer message; the unique index still has the last word."""
        existing = self.folder_repo.find_sibling_by_name(
            organization_id, parent_id, folder_name, exclude_id=exclude_id
        )
        if existing is not None:
            kind = "project" if parent_id is None else "folder"
            logger.info(
                "Duplicate sibling name rejected",
                extra={"organization_id": organization_id, "parent_id": parent_id, "folder_name": folder_name},
            )
            raise ConflictError(
                f"A {kind} named '{existing.folder_name}' already exists in this location",
                details={"existing_id": existing.id},
            )

    @staticmethod
    def _metadata(description: Optional[str]) -> dict:
        return {"description": description} if description else {}
