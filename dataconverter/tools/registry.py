"""
Document tool registry.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Tool:
    """A document tool exposed at /{locale}/tools/{slug}."""
    id: str
    slug: str
    label: str
    category: str  # "pdf", "image" or "video"
    color: str
    features: tuple[str, ...] = field(default_factory=tuple)


TOOLS: dict[str, Tool] = {
    "pdf-dark-mode": Tool(
        id="pdf-dark-mode",
        slug="pdf-dark-mode",
        label="PDF Dark Mode",
        category="pdf",
        color="#8b5cf6",
        features=("darkMode", "intensity", "preview"),
    ),
    "pdf-flatten": Tool(
        id="pdf-flatten",
        slug="pdf-flatten",
        label="PDF Flatten",
        category="pdf",
        color="#3b82f6",
        features=("flatten", "removeMetadata", "secure"),
    ),
    "image-watermark": Tool(
        id="image-watermark",
        slug="image-watermark",
        label="Image Watermark",
        category="image",
        color="#10b981",
        features=("customText", "opacity", "tiled"),
    ),
    "video-to-audio": Tool(
        id="video-to-audio",
        slug="video-to-audio",
        label="Video to Audio",
        category="video",
        color="#ec4899",
        features=("mp3", "aac", "highQuality"),
    ),
    "video-mute": Tool(
        id="video-mute",
        slug="video-mute",
        label="Video Mute",
        category="video",
        color="#f97316",
        features=("removeAudio", "noReencode", "fast"),
    ),
    "gif-maker": Tool(
        id="gif-maker",
        slug="gif-maker",
        label="GIF Maker",
        category="video",
        color="#6366f1",
        features=("fps", "width", "trim"),
    ),
}


def get_tool_by_slug(slug: str) -> Optional[Tool]:
    return TOOLS.get(slug)


def get_all_tools() -> list[Tool]:
    return list(TOOLS.values())


def get_tools_by_category(category: str) -> list[Tool]:
    return [tool for tool in TOOLS.values() if tool.category == category]
