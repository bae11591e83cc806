"""Resolve a virtual content path under an organization to what it addresses.

The path is classified by ``route_parser``; the folder part goes through
PathResolver and the named slide or presentation is looked up among that
folder's live children. Read checks use the same visibility gate as direct
reads. Edit routes additionally require the update rule.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..exceptions import NotFoundError
from ..models import Folder, Organization, Presentation, Slide
from ..repositories import FolderChildren, PresentationRepository, SlideRepository
from .folder_service import FolderService
from .organization_service import OrganizationService
from .path_resolver import PathResolver, breadcrumbs
from .permission_policy import Mutation, authorize
from .presentation_service import PresentationService
from .role_service import RoleService
from .route_parser import RouteType, parse_content_path
from .slide_service import SlideService

logger = logging.getLogger(__name__)


@dataclass
class ResolvedContent:
    type: RouteType
    organization: Organization
    edit: bool = False
    folder: Optional[Folder] = None
    slide: Optional[Slide] = None
    presentation: Optional[Presentation] = None
    projects: List[Folder] = field(default_factory=list)
    contents: Optional[FolderChildren] = None
    breadcrumbs: List[Dict[str, str]] = field(default_factory=list)


class ContentService:

    def __init__(self, db: Session):
        self.db = db
        self.resolver = PathResolver(db)
        self.role_service = RoleService(db)
        self.organizations = OrganizationService(db)
        self.folders = FolderService(db)
        self.slides = SlideService(db)
        self.presentations = PresentationService(db)
        self.slide_repo = SlideRepository(db)
        self.presentation_repo = PresentationRepository(db)

    def resolve(self, org_slug: str, path: Optional[str], user_id: Optional[str]) -> ResolvedContent:
        organization = self.organizations.get_by_slug(org_slug)
        route = parse_content_path(path)

        if route.type is RouteType.ORGANIZATION_ROOT:
            return ResolvedContent(
                type=route.type,
                organization=organization,
                projects=self.organizations.list_projects(org_slug, user_id),
            )

        folder = self.resolver.resolve_folder(organization.id, route.folder_path)
        result = ResolvedContent(
            type=route.type,
            organization=organization,
            edit=route.is_edit,
            folder=folder,
            breadcrumbs=breadcrumbs(folder.full_path),
        )

        if route.type is RouteType.FOLDER:
            result.contents = self.folders.list_children(folder.id, user_id)
            return result

        roles = self.role_service.roles_for(user_id)

        if route.type in (RouteType.SLIDE, RouteType.EDIT_SLIDE):
            slide = self.slide_repo.find_by_name(folder.id, route.resource_name)
            if slide is None:
                raise NotFoundError("slide", f"{folder.full_path}/{route.resource_name}")
            self.slides.check_readable(slide, roles)
            result.slide = slide
        else:
            presentation = self.presentation_repo.find_by_name(folder.id, route.resource_name)
            if presentation is None:
                raise NotFoundError("presentation", f"{folder.full_path}/{route.resource_name}")
            self.presentations.check_readable(presentation, roles)
            result.presentation = presentation

        if route.is_edit:
            scope = self.resolver.scope_of(folder.id)
            authorize(Mutation.UPDATE, roles, scope.organization_id, scope.project_id)

        return result
