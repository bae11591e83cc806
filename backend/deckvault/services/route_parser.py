"""Classification of virtual content paths.

A path below an organization addresses a folder, a slide
(``name.slide``), a presentation (``name.presentation``) or the edit view of
one of those (``.../name.slide/edit``). Parsing is pure; resolution against
the tree happens in ContentService.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

SLIDE_SUFFIX = ".slide"
PRESENTATION_SUFFIX = ".presentation"
EDIT_SEGMENT = "edit"


class RouteType(str, Enum):
    ORGANIZATION_ROOT = "organization_root"
    FOLDER = "folder"
    SLIDE = "slide"
    PRESENTATION = "presentation"
    EDIT_SLIDE = "edit_slide"
    EDIT_PRESENTATION = "edit_presentation"


@dataclass(frozen=True)
class ParsedRoute:
    type: RouteType
    folder_path: str
    resource_name: Optional[str] = None

    @property
    def is_edit(self) -> bool:
        return self.type in (RouteType.EDIT_SLIDE, RouteType.EDIT_PRESENTATION)


def _clean(segment: str) -> str:
    """Drop query string / fragment residue and trailing slashes."""
    return segment.split("?", 1)[0].split("#", 1)[0].rstrip("/")


def _strip_suffix(name: str, suffix: str) -> str:
    return name[: -len(suffix)]


def parse_content_path(path: Optional[str]) -> ParsedRoute:
    """Classify *path* (segments separated by '/').

    >>> parse_content_path("launch/q3/intro.slide").resource_name
    'intro'
    """
    segments: List[str] = [_clean(s) for s in (path or "").split("/")]
    segments = [s for s in segments if s]

    if not segments:
        return ParsedRoute(RouteType.ORGANIZATION_ROOT, "")

    last = segments[-1]

    if last == EDIT_SEGMENT and len(segments) >= 2:
        resource = segments[-2]
        folder_path = "/".join(segments[:-2])
        if resource.endswith(SLIDE_SUFFIX):
            return ParsedRoute(
                RouteType.EDIT_SLIDE, folder_path, _strip_suffix(resource, SLIDE_SUFFIX)
            )
        if resource.endswith(PRESENTATION_SUFFIX):
            return ParsedRoute(
                RouteType.EDIT_PRESENTATION,
                folder_path,
                _strip_suffix(resource, PRESENTATION_SUFFIX),
            )

    if last.endswith(SLIDE_SUFFIX):
        return ParsedRoute(
            RouteType.SLIDE, "/".join(segments[:-1]), _strip_suffix(last, SLIDE_SUFFIX)
        )

    if last.endswith(PRESENTATION_SUFFIX):
        return ParsedRoute(
            RouteType.PRESENTATION,
            "/".join(segments[:-1]),
            _strip_suffix(last, PRESENTATION_SUFFIX),
        )

    # A folder literally named "edit" is still a folder.
    return ParsedRoute(RouteType.FOLDER, "/".join(segments))
