"""Repository for slides, including the atomic draft asset swap."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import update

from ..models import Slide
from .base import SoftDeleteRepository


class SlideRepository(SoftDeleteRepository[Slide]):
    """Data access layer for slides."""

    model_class = Slide
    resource_name = "slide"

    def find_by_name(self, parent_id: str, file_name: str) -> Optional[Slide]:
        return self._base_query().filter(
            Slide.parent_id == parent_id,
            Slide.file_name == file_name,
        ).first()

    def save(self, slide: Slide) -> Slide:
        self.db.flush()
        self.db.refresh(slide)
        return slide

    def publish_draft(self, slide_id: str, user_id: Optional[str]) -> bool:
        """Promote the pending asset in one UPDATE statement.

        ``object_id`` takes the old ``draft_object_id`` and the draft is
        cleared in the same row write, guarded on a draft still being
        present. Returns False when there was nothing to publish.
        """
        return self._update_asset(
            slide_id,
            user_id,
            object_id=Slide.draft_object_id,
            draft_object_id=None,
        )

    def discard_draft(self, slide_id: str, user_id: Optional[str]) -> bool:
        """Clear the pending asset, leaving ``object_id`` untouched."""
        return self._update_asset(slide_id, user_id, draft_object_id=None)

    def stage_draft(self, slide_id: str, draft_object_id: str, user_id: Optional[str]) -> None:
        """Record a freshly rendered asset as the slide's pending draft."""
        stmt = (
            update(Slide)
            .where(Slide.id == slide_id, Slide.deleted_at.is_(None))
            .values(
                draft_object_id=draft_object_id,
                updated_at=datetime.now(timezone.utc),
                updated_by=user_id,
            )
            .execution_options(synchronize_session=False)
        )
        self.db.execute(stmt)
        self.db.expire_all()

    def _update_asset(self, slide_id: str, user_id: Optional[str], **values) -> bool:
        stmt = (
            update(Slide)
            .where(
                Slide.id == slide_id,
                Slide.deleted_at.is_(None),
                Slide.draft_object_id.isnot(None),
            )
            .values(
                updated_at=datetime.now(timezone.utc),
                updated_by=user_id,
                **values,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        # Loaded Slide instances still hold pre-update values.
        self.db.expire_all()
        return result.rowcount == 1
