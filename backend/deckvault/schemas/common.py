"""Validators shared by the folder, presentation and slide schemas."""

import re
from typing import List, Optional

MAX_TAGS = 5
MAX_DESCRIPTION_LENGTH = 500
FOLDER_NAME_MIN = 2
FOLDER_NAME_MAX = 50

_FOLDER_NAME_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")


def validate_folder_name(v: str) -> str:
    """Folder/project names: 2-50 letters, digits or hyphens, no edge hyphens."""
    v = (v or "").strip()
    if not v:
        raise ValueError("Folder name is required")
    if not _FOLDER_NAME_PATTERN.match(v):
        raise ValueError("Folder name can only contain letters, numbers, and hyphens")
    if len(v) < FOLDER_NAME_MIN:
        raise ValueError(f"Folder name must be at least {FOLDER_NAME_MIN} characters long")
    if len(v) > FOLDER_NAME_MAX:
        raise ValueError(f"Folder name must be at most {FOLDER_NAME_MAX} characters long")
    if v.startswith("-") or v.endswith("-"):
        raise ValueError("Folder name cannot start or end with a hyphen")
    return v


def validate_resource_name(v: str) -> str:
    """Slide and presentation names: non-empty, no path separators."""
    v = (v or "").strip()
    if not v:
        raise ValueError("Name is required")
    if "/" in v:
        raise ValueError("Name cannot contain '/'")
    return v


def validate_tags(v: Optional[List[str]]) -> Optional[List[str]]:
    """Trim tags, drop empties and duplicates, and cap the count."""
    if v is None:
        return None
    tags = list(dict.fromkeys(t.strip() for t in v if t and t.strip()))
    if len(tags) > MAX_TAGS:
        raise ValueError(f"Maximum {MAX_TAGS} tags allowed")
    return tags


def validate_description(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    if len(v) > MAX_DESCRIPTION_LENGTH:
        raise ValueError(f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters")
    return v
