"""Request and response schemas."""

from .folder import FolderCreate, FolderUpdate, FolderResponse, Breadcrumb
from .organization import OrganizationResponse, FolderContentsResponse, ContentResponse
from .presentation import (
    PresentationCreate,
    PresentationUpdate,
    PresentationResponse,
    ActionCheckResponse,
    PresentationDetailResponse,
    PresentationSettings,
    ReorderRequest,
    SlideOrderEntry,
    SlideRef,
)
from .search import SearchHit, SearchResponse
from .slide import SlideUpdate, SlideResponse, DraftActionResponse, DraftStageRequest

__all__ = [
    "FolderCreate", "FolderUpdate", "FolderResponse", "Breadcrumb",
    "OrganizationResponse", "FolderContentsResponse", "ContentResponse",
    "PresentationCreate", "PresentationUpdate", "PresentationResponse",
    "PresentationDetailResponse", "PresentationSettings", "ActionCheckResponse", "ReorderRequest",
    "SlideOrderEntry", "SlideRef",
    "SearchHit", "SearchResponse",
    "SlideUpdate", "SlideResponse", "DraftActionResponse", "DraftStageRequest",
]
