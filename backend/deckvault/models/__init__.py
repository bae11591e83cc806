"""Database models."""

from .enums import OrganizationRole, ProjectRole, Visibility, PresentationRole
from .organization import Organization
from .folder import Folder
from .presentation import Presentation
from .slide import Slide
from .user import User, UserOrganizationRole, UserFolderRole

__all__ = [
    "OrganizationRole", "ProjectRole", "Visibility", "PresentationRole",
    "Organization", "Folder", "Presentation", "Slide",
    "User", "UserOrganizationRole", "UserFolderRole",
]
