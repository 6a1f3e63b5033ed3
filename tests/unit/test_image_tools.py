"""
Tests for the image watermark tool.
"""

import io

import pytest

Image = pytest.importorskip("PIL.Image")

from dataconverter.tools import WatermarkOptions, add_watermark

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def load(data):
    with Image.open(io.BytesIO(data)) as image:
        return image.convert("RGB")


def darkest(image):
    return image.convert("L").getextrema()[0]


class TestWatermarkOptions:
    """Tests for option validation."""

    def test_defaults(self):
        """Test the default settings."""
        options = WatermarkOptions(text="DRAFT")
        assert options.opacity == 0.3
        assert options.font_size == 48
        assert options.rotation == -30
        assert options.tiled is True
        assert options.color == "#000000"

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_text(self, text):
        """Test the text is required."""
        with pytest.raises(ValueError, match="Watermark text cannot be empty"):
            WatermarkOptions(text=text)

    @pytest.mark.parametrize("opacity", [-0.5, 1.01])
    def test_opacity_range(self, opacity):
        """Test opacity must be within [0, 1]."""
        with pytest.raises(ValueError, match="Opacity must be between 0 and 1"):
            WatermarkOptions(text="x", opacity=opacity)

    def test_font_size_positive(self):
        """Test the font size must be positive."""
        with pytest.raises(ValueError, match="Font size must be positive"):
            WatermarkOptions(text="x", font_size=0)


class TestAddWatermark:
    """Tests for stamping images."""

    def test_output_is_png_of_same_size(self, make_image):
        """Test the output format and dimensions."""
        result = add_watermark(make_image(size=(320, 200)), WatermarkOptions(text="CONFIDENTIAL"))
        assert result.startswith(PNG_SIGNATURE)
        assert load(result).size == (320, 200)

    def test_tiled_watermark_changes_pixels(self, make_image):
        """Test the tiled pattern darkens a white image."""
        result = add_watermark(make_image(), WatermarkOptions(text="DRAFT", opacity=0.8))
        assert darkest(load(result)) < 255

    def test_single_watermark_is_centred(self, make_image):
        """Test a single label lands in the middle of the image."""
        options = WatermarkOptions(text="DRAFT", opacity=1.0, rotation=0, tiled=False)
        image = load(add_watermark(make_image(size=(400, 300)), options))

        assert darkest(image.crop((100, 100, 300, 200))) < 255
        assert darkest(image.crop((0, 0, 60, 60))) == 255

    def test_zero_opacity_leaves_image_unchanged(self, make_image):
        """Test a fully transparent watermark."""
        result = add_watermark(make_image(), WatermarkOptions(text="DRAFT", opacity=0))
        assert load(result).convert("L").getextrema() == (255, 255)

    def test_color_is_applied(self, make_image):
        """Test the watermark uses the requested color."""
        options = WatermarkOptions(text="RED", opacity=1.0, rotation=0, tiled=False, color="#ff0000")
        image = load(add_watermark(make_image(), options))
        red_pixels = [
            p for p in image.getdata() if p[0] > 200 and p[1] < 80 and p[2] < 80
        ]
        assert red_pixels

    def test_jpeg_input(self, make_image):
        """Test non-PNG sources are accepted."""
        result = add_watermark(make_image(fmt="JPEG"), WatermarkOptions(text="x"))
        assert result.startswith(PNG_SIGNATURE)

    def test_label_larger_than_image(self, make_image):
        """Test a label wider than the image is clipped."""
        options = WatermarkOptions(text="A VERY LONG WATERMARK", font_size=120)
        result = add_watermark(make_image(size=(50, 40)), options)
        assert load(result).size == (50, 40)

    def test_progress_sequence(self, make_image, progress_log):
        """Test the fixed progress steps."""
        add_watermark(make_image(), WatermarkOptions(text="x"), progress_log)
        assert [p for p, _ in progress_log.events] == [0, 20, 40, 60, 90, 100]
        assert progress_log.events[-1][1] == "Complete!"
