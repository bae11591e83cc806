"""Repository for organizations."""

from typing import Optional

from ..models import Organization
from .base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    model_class = Organization
    resource_name = "organization"

    def get_by_slug_optional(self, slug: str) -> Optional[Organization]:
        return self._base_query().filter(Organization.slug == slug).first()
