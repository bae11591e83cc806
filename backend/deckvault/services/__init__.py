"""Business logic services."""

from .content_service import ContentService, ResolvedContent
from .draft_lifecycle import DraftLifecycle
from .folder_service import FolderService
from .organization_service import OrganizationService
from .path_resolver import PathResolver, Scope
from .presentation_service import PresentationAction, PresentationService
from .role_service import RoleService, UserRoles, ANONYMOUS
from .search_service import SlideSearchService
from .slide_service import SlideService

__all__ = [
    "ContentService",
    "ResolvedContent",
    "DraftLifecycle",
    "FolderService",
    "OrganizationService",
    "PathResolver",
    "Scope",
    "PresentationAction",
    "PresentationService",
    "RoleService",
    "UserRoles",
    "ANONYMOUS",
    "SlideSearchService",
    "SlideService",
]
