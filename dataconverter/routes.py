"""
URL scheme for conversion and tool pages.

    /{locale}                         home
    /{locale}/{source}-to-{target}    conversion page
    /{locale}/tools/{tool-slug}       document tool
"""

from dataclasses import dataclass
from typing import Optional

from .formats import get_all_conversions, get_conversion_slug, parse_conversion_slug
from .i18n import is_valid_locale
from .tools.registry import get_tool_by_slug


@dataclass(frozen=True)
class Route:
    """A resolved page route."""
    kind: str  # "home", "conversion" or "tool"
    locale: str
    source: Optional[str] = None
    target: Optional[str] = None
    tool: Optional[str] = None


def conversion_path(locale: str, source: str, target: str) -> str:
    return f"/{locale}/{get_conversion_slug(source, target)}"


def tool_path(locale: str, slug: str) -> str:
    return f"/{locale}/tools/{slug}"


def all_conversion_paths(locale: str) -> list[str]:
    return [conversion_path(locale, s, t) for s, t in get_all_conversions()]


def resolve_route(path: str) -> Optional[Route]:
    """
    Resolve a localized path to a route.

    Returns:
        The matching Route, or None for unknown locales, invalid
        conversion slugs, unknown tools and any other path shape.
    """
    parts = [p for p in path.split("?", 1)[0].split("/") if p]
    if not parts or not is_valid_locale(parts[0]):
        return None

    locale = parts[0]

    if len(parts) == 1:
        return Route(kind="home", locale=locale)

    if len(parts) == 2:
        pair = parse_conversion_slug(parts[1])
        if pair is None:
            return None
        return Route(kind="conversion", locale=locale, source=pair[0], target=pair[1])

    if len(parts) == 3 and parts[1] == "tools":
        tool = get_tool_by_slug(parts[2])
        if tool is None:
            return None
        return Route(kind="tool", locale=locale, tool=tool.slug)

    return None
