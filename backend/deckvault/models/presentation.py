"""Presentation model."""

from sqlalchemy import Column, String, Integer, DateTime, JSON, ForeignKey, Index
from sqlalchemy.sql import func

from ..database import Base


def default_settings() -> dict:
    """Every action open to the public until an editor narrows it."""
    return {
        "pptx_download_role": "public",
        "pdf_download_role": "public",
        "chat_role": "public",
    }


class Presentation(Base):
    """An ordered selection of slides living in a folder.

    ``slides`` holds ``[{"order", "slide_id", "object_id"}]`` entries whose
    order values are unique. Presentations have no visibility of their own;
    they read with the visibility of their parent folder.
    """

    __tablename__ = "presentations"
    __table_args__ = (
        Index("ix_presentations_parent", "parent_id"),
    )

    id = Column(String(50), primary_key=True)
    parent_id = Column(String(50), ForeignKey("folders.id"), nullable=False)

    presentation_name = Column(String(255), nullable=False)
    slides = Column(JSON, default=list)
    settings = Column(JSON, default=default_settings)

    # Bumped on every change to the slide sequence
    version = Column(Integer, default=1, nullable=False)

    tags = Column(JSON, default=list)
    metadata_ = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(50), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    updated_by = Column(String(50), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True, default=None)
    deleted_by = Column(String(50), nullable=True)
