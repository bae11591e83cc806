"""Role and visibility vocabularies.

Roles are stored as plain strings in the database; these enums are the
only place that gives them an order. Declaration order is privilege order,
lowest first, so ``role.at_least(threshold)`` is a rank comparison rather
than membership in an ad-hoc list.
"""

from enum import Enum
from typing import Optional


class _RankedRole(str, Enum):
    """String enum ordered by declaration (first member = least privileged)."""

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def at_least(self, threshold: "_RankedRole") -> bool:
        return self.rank >= threshold.rank

    @classmethod
    def parse(cls, value: Optional[str]):
        """Return the member for *value*, or None for unknown/empty values."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class OrganizationRole(_RankedRole):
    MEMBER = "member"
    ADMIN = "admin"
    OWNER = "owner"


class ProjectRole(_RankedRole):
    MEMBER = "member"
    CONTRIBUTOR = "contributor"
    ADMIN = "admin"


class Visibility(str, Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    RESTRICTED = "restricted"

    @classmethod
    def coerce(cls, value) -> "Visibility":
        """Map stored values to a tier; anything unrecognised reads as INTERNAL."""
        if isinstance(value, Visibility):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.INTERNAL


class PresentationRole(_RankedRole):
    """Minimum audience for a presentation action (download, chat)."""

    PUBLIC = "public"
    ORGANIZATION_MEMBER = "organization-member"
    PROJECT_MEMBER = "project-member"
    PROJECT_CONTRIBUTOR = "project-contributor"
    PROJECT_ADMIN = "project-admin"
