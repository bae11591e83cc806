"""Organization model."""

from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func

from ..database import Base


class Organization(Base):
    """Tenant. Every folder, presentation and slide belongs to exactly one."""

    __tablename__ = "organizations"

    id = Column(String(50), primary_key=True)

    # URL-safe identifier used as the first segment of every content path
    slug = Column(String(100), nullable=False, unique=True)
    display_name = Column(String(255), nullable=True)

    tags = Column(JSON, default=list)
    metadata_ = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
