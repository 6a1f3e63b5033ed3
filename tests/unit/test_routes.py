"""
Tests for page routes and the tool registry.
"""

import pytest

from dataconverter.routes import (
    Route,
    all_conversion_paths,
    conversion_path,
    resolve_route,
    tool_path,
)
from dataconverter.tools import TOOLS, get_all_tools, get_tool_by_slug, get_tools_by_category


class TestPaths:
    """Tests for path building."""

    def test_conversion_path(self):
        """Test the conversion page path."""
        assert conversion_path("en", "json", "csv") == "/en/json-to-csv"

    def test_tool_path(self):
        """Test the tool page path."""
        assert tool_path("fr", "pdf-flatten") == "/fr/tools/pdf-flatten"

    def test_all_conversion_paths(self):
        """Test one path per conversion pair."""
        paths = all_conversion_paths("de")
        assert len(paths) == 42
        assert "/de/sql-to-markdown" in paths
        assert all(resolve_route(p) is not None for p in paths)


class TestResolveRoute:
    """Tests for route resolution."""

    def test_home(self):
        """Test the locale home page."""
        assert resolve_route("/fr") == Route(kind="home", locale="fr")
        assert resolve_route("/fr/") == Route(kind="home", locale="fr")

    def test_conversion(self):
        """Test a conversion page."""
        assert resolve_route("/es/xml-to-yaml?ref=nav") == Route(
            kind="conversion", locale="es", source="xml", target="yaml"
        )

    def test_tool(self):
        """Test a tool page."""
        assert resolve_route("/en/tools/image-watermark") == Route(
            kind="tool", locale="en", tool="image-watermark"
        )

    def test_video_tool(self):
        """Test a video tool page."""
        assert resolve_route("/de/tools/gif-maker") == Route(kind="tool", locale="de", tool="gif-maker")

    @pytest.mark.parametrize(
        "path",
        [
            "/",
            "/xx/json-to-csv",
            "/en/json-to-json",
            "/en/json-to-toml",
            "/en/tools/unknown",
            "/en/tools",
            "/en/a/b/c",
        ],
    )
    def test_unresolved(self, path):
        """Test paths that resolve to nothing."""
        assert resolve_route(path) is None


class TestToolRegistry:
    """Tests for the document tool registry."""

    def test_six_tools(self):
        """Test the registered tools."""
        assert [t.slug for t in get_all_tools()] == [
            "pdf-dark-mode", "pdf-flatten", "image-watermark",
            "video-to-audio", "video-mute", "gif-maker",
        ]
        assert all(slug == tool.id for slug, tool in TOOLS.items())

    def test_lookup_by_slug(self):
        """Test slug lookup."""
        assert get_tool_by_slug("pdf-flatten").label == "PDF Flatten"
        assert get_tool_by_slug("pdf-merge") is None

    def test_by_category(self):
        """Test category filtering."""
        assert [t.id for t in get_tools_by_category("pdf")] == ["pdf-dark-mode", "pdf-flatten"]
        assert [t.id for t in get_tools_by_category("image")] == ["image-watermark"]
        assert [t.id for t in get_tools_by_category("video")] == ["video-to-audio", "video-mute", "gif-maker"]
        assert get_tools_by_category("audio") == []
