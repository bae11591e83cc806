"""Data access repositories."""

from .base import BaseRepository, SoftDeleteRepository
from .folder_repository import FolderRepository, FolderChildren
from .organization_repository import OrganizationRepository
from .presentation_repository import PresentationRepository
from .role_repository import RoleRepository
from .slide_repository import SlideRepository

__all__ = [
    "BaseRepository",
    "SoftDeleteRepository",
    "FolderRepository",
    "FolderChildren",
    "OrganizationRepository",
    "PresentationRepository",
    "RoleRepository",
    "SlideRepository",
]
