"""
Tests for the PDF tools.
"""

import pytest

fitz = pytest.importorskip("fitz")

from dataconverter.tools import convert_pdf_to_dark_mode, flatten_pdf, get_pdf_info
from dataconverter.tools.pdf_tools import dark_overlay_color
from dataconverter.tools.progress import ProcessingProgress, report


def open_pdf(data):
    return fitz.open(stream=data, filetype="pdf")


class TestProgress:
    """Tests for progress reporting."""

    def test_report_without_callback(self):
        """Test reporting with no callback is a no-op."""
        report(None, 50, "Halfway")

    def test_percent(self):
        """Test the percentage property."""
        assert ProcessingProgress(current=30, total=60, status="x").percent == 50.0


class TestDarkMode:
    """Tests for the dark-mode overlay."""

    def test_page_count_preserved(self, make_pdf):
        """Test the output has the same pages."""
        result = convert_pdf_to_dark_mode(make_pdf(pages=3))
        with open_pdf(result) as doc:
            assert doc.page_count == 3

    def test_overlay_drawn_on_every_page(self, make_pdf):
        """Test each page gets a filled rectangle."""
        result = convert_pdf_to_dark_mode(make_pdf(pages=2), intensity=0.5)
        with open_pdf(result) as doc:
            for page in doc:
                fills = [d for d in page.get_drawings() if d.get("fill") is not None]
                assert fills

    def test_text_is_kept(self, make_pdf):
        """Test the page text survives the overlay."""
        result = convert_pdf_to_dark_mode(make_pdf(pages=1))
        with open_pdf(result) as doc:
            assert "Page 1" in doc[0].get_text()

    def test_progress_sequence(self, make_pdf, progress_log):
        """Test progress rises from 0 to 100 with a step per page."""
        convert_pdf_to_dark_mode(make_pdf(pages=2), on_progress=progress_log)
        percents = [p for p, _ in progress_log.events]

        assert percents == [0, 10, 50, 90, 95, 100]
        assert ("Processing page 2 of 2...") in [s for _, s in progress_log.events]
        assert progress_log.events[-1] == (100, "Complete!")

    @pytest.mark.parametrize("intensity", [-0.1, 1.5])
    def test_intensity_out_of_range(self, make_pdf, intensity):
        """Test intensity must be within [0, 1]."""
        with pytest.raises(ValueError, match="Intensity must be between 0 and 1"):
            convert_pdf_to_dark_mode(make_pdf(), intensity=intensity)

    def test_invalid_pdf_raises(self):
        """Test bytes that are not a PDF."""
        with pytest.raises(Exception):
            convert_pdf_to_dark_mode(b"definitely not a pdf")

    def test_overlay_color_darkens_with_intensity(self):
        """Test higher intensity gives a darker overlay."""
        light = dark_overlay_color(0.0)
        dark = dark_overlay_color(1.0)
        assert light[0] == pytest.approx(0.12)
        assert dark[0] == pytest.approx(0.05)
        assert dark[2] > dark[0]


class TestFlatten:
    """Tests for flattening and metadata removal."""

    def test_metadata_cleared(self, make_pdf):
        """Test title and author are removed."""
        result = flatten_pdf(make_pdf())
        with open_pdf(result) as doc:
            assert not doc.metadata.get("title")
            assert not doc.metadata.get("author")

    def test_metadata_kept_on_request(self, make_pdf):
        """Test metadata survives when removal is disabled."""
        result = flatten_pdf(make_pdf(title="Keep Me"), remove_metadata=False)
        with open_pdf(result) as doc:
            assert doc.metadata["title"] == "Keep Me"

    def test_form_widgets_removed(self, make_pdf):
        """Test form fields are baked into the page."""
        source = make_pdf(with_form=True)
        with open_pdf(source) as doc:
            assert len(list(doc[0].widgets())) == 1

        result = flatten_pdf(source)
        with open_pdf(result) as doc:
            assert list(doc[0].widgets()) == []

    def test_forms_kept_on_request(self, make_pdf):
        """Test widgets survive when flattening is disabled."""
        result = flatten_pdf(make_pdf(with_form=True), flatten_forms=False)
        with open_pdf(result) as doc:
            assert len(list(doc[0].widgets())) == 1

    def test_pdf_without_form(self, make_pdf):
        """Test a plain PDF flattens without changes to its pages."""
        result = flatten_pdf(make_pdf(pages=2))
        with open_pdf(result) as doc:
            assert doc.page_count == 2
            assert "Page 2" in doc[1].get_text()

    def test_progress_sequence(self, make_pdf, progress_log):
        """Test the fixed progress steps."""
        flatten_pdf(make_pdf(), on_progress=progress_log)
        assert [p for p, _ in progress_log.events] == [0, 30, 60, 90, 100]


class TestPdfInfo:
    """Tests for PDF inspection."""

    def test_info(self, make_pdf):
        """Test page count and metadata."""
        info = get_pdf_info(make_pdf(pages=2, title="Report", author="Ada"))
        assert info == {"page_count": 2, "title": "Report", "author": "Ada", "has_form": False}

    def test_info_with_form(self, make_pdf):
        """Test form detection."""
        assert get_pdf_info(make_pdf(with_form=True))["has_form"] is True

    def test_info_after_flatten(self, make_pdf):
        """Test a flattened PDF reports no title."""
        info = get_pdf_info(flatten_pdf(make_pdf()))
        assert info["title"] is None
        assert info["author"] is None
