"""Folder model: one node of an organization's content tree."""

from sqlalchemy import Column, String, Text, DateTime, JSON, ForeignKey, Index
from sqlalchemy.sql import func

from ..database import Base
from .enums import Visibility


class Folder(Base):
    """Tree node. A folder without a parent is a project.

    ``full_path`` is materialized ("/project/folder/sub") and always equals
    the parent's full_path plus "/" plus ``folder_name``. Rows are never
    hard-deleted; ``deleted_at`` marks them as gone.
    """

    __tablename__ = "folders"
    __table_args__ = (
        Index("ix_folders_org_path", "organization_id", "full_path"),
        Index("ix_folders_parent", "parent_id"),
    )

    id = Column(String(50), primary_key=True)
    organization_id = Column(
        String(50), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    parent_id = Column(String(50), ForeignKey("folders.id"), nullable=True)

    folder_name = Column(String(100), nullable=False)
    full_path = Column(Text, nullable=False)

    visibility = Column(String(20), nullable=False, default=Visibility.INTERNAL.value)
    tags = Column(JSON, default=list)
    metadata_ = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(String(50), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    updated_by = Column(String(50), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True, default=None)
    deleted_by = Column(String(50), nullable=True)

    @property
    def is_project(self) -> bool:
        return self.parent_id is None

    @property
    def description(self):
        return (self.metadata_ or {}).get("description")


# Sibling names are unique per (organization, parent) regardless of case,
# ignoring soft-deleted rows. Projects share the '' parent bucket.
_live = Folder.deleted_at.is_(None)
Index(
    "uq_folders_sibling_name",
    Folder.organization_id,
    func.coalesce(Folder.parent_id, ""),
    func.lower(Folder.folder_name),
    unique=True,
    sqlite_where=_live,
    postgresql_where=_live,
)
