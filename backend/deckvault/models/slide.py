"""Slide model."""

from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON, ForeignKey, Index
from sqlalchemy.sql import func

from ..database import Base


class Slide(Base):
    """A single rendered slide.

    ``object_id`` always points at the published asset. ``draft_object_id``
    is set while an edited rendering waits to be published or discarded.
    """

    __tablename__ = "slides"
    __table_args__ = (
        Index("ix_slides_parent", "parent_id"),
    )

    id = Column(String(50), primary_key=True)
    parent_id = Column(String(50), ForeignKey("folders.id"), nullable=False)

    file_name = Column(String(255), nullable=False)
    object_id = Column(String(255), nullable=False)
    draft_object_id = Column(String(255), nullable=True, default=None)

    # NULL reads as internal
    visibility = Column(String(20), nullable=True)

    # Searchable text
    description = Column(Text, nullable=True)
    slide_text = Column(Text, nullable=True)

    # Content features extracted at upload
    has_chart = Column(Boolean, nullable=False, default=False)
    has_table = Column(Boolean, nullable=False, default=False)
    has_diagram = Column(Boolean, nullable=False, default=False)
    has_image = Column(Boolean, nullable=False, default=False)
    has_bullet = Column(Boolean, nullable=False, default=False)
    has_links = Column(Boolean, nullable=False, default=False)
    has_video = Column(Boolean, nullable=False, default=False)
    has_audio = Column(Boolean, nullable=False, default=False)

    tags = Column(JSON, default=list)
    metadata_ = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(50), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    updated_by = Column(String(50), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True, default=None)
    deleted_by = Column(String(50), nullable=True)

    @property
    def has_draft(self) -> bool:
        return self.draft_object_id is not None
