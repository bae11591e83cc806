"""Repository for presentations."""

from typing import Optional

from ..models import Presentation
from .base import SoftDeleteRepository


class PresentationRepository(SoftDeleteRepository[Presentation]):
    """Data access layer for presentations."""

    model_class = Presentation
    resource_name = "presentation"

    def find_by_name(self, parent_id: str, presentation_name: str) -> Optional[Presentation]:
        return self._base_query().filter(
            Presentation.parent_id == parent_id,
            Presentation.presentation_name == presentation_name,
        ).first()

    def insert(self, presentation: Presentation) -> Presentation:
        self.db.add(presentation)
        self._flush("Presentation could not be created")
        self.db.refresh(presentation)
        return presentation

    def save(self, presentation: Presentation) -> Presentation:
        self._flush("Presentation could not be updated")
        self.db.refresh(presentation)
        return presentation

