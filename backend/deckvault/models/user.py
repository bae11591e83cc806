"""User and role-grant models.

Two independent grant tiers:
    UserOrganizationRole -- owner / admin / member of a whole organization
    UserFolderRole       -- admin / contributor / member of one project
                            (always a top-level folder, never a nested one)

Neither tier implies the other.
"""

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class User(Base):
    """Account known to the library. Credentials live with the identity provider."""

    __tablename__ = "users"

    user_id = Column(String(50), primary_key=True)
    display_name = Column(String(255), nullable=False, default="")
    email = Column(String(255), unique=True, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    organization_roles = relationship(
        "UserOrganizationRole", back_populates="user", cascade="all, delete-orphan"
    )
    folder_roles = relationship(
        "UserFolderRole", back_populates="user", cascade="all, delete-orphan"
    )


class UserOrganizationRole(Base):
    __tablename__ = "user_organization_roles"

    user_id = Column(
        String(50), ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True
    )
    organization_id = Column(
        String(50), ForeignKey("organizations.id", ondelete="CASCADE"), primary_key=True
    )
    user_role = Column(String(20), nullable=False, default="member")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="organization_roles")


class UserFolderRole(Base):
    __tablename__ = "user_folder_roles"

    user_id = Column(
        String(50), ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True
    )
    # Must reference a project (folder with parent_id NULL)
    folder_id = Column(
        String(50), ForeignKey("folders.id", ondelete="CASCADE"), primary_key=True
    )
    user_role = Column(String(20), nullable=False, default="member")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="folder_roles")
