"""Repository for users and their role grants."""

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..models import User, UserOrganizationRole, UserFolderRole


class RoleRepository:
    """Reads the two role tiers for a user. Never derives one from the other."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def organization_roles(self, user_id: str) -> List[Tuple[str, str]]:
        """``[(organization_id, role)]`` for the user."""
        rows = self.db.query(
            UserOrganizationRole.organization_id, UserOrganizationRole.user_role
        ).filter(UserOrganizationRole.user_id == user_id).all()
        return [(row.organization_id, row.user_role) for row in rows]

    def folder_roles(self, user_id: str) -> List[Tuple[str, str]]:
        """``[(project_id, role)]`` for the user."""
        rows = self.db.query(
            UserFolderRole.folder_id, UserFolderRole.user_role
        ).filter(UserFolderRole.user_id == user_id).all()
        return [(row.folder_id, row.user_role) for row in rows]
