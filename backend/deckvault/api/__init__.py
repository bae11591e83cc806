"""API routes."""

from .folders import router as folders_router
from .organizations import router as organizations_router
from .presentations import router as presentations_router
from .slides import router as slides_router

__all__ = [
    "folders_router",
    "organizations_router",
    "presentations_router",
    "slides_router",
]
