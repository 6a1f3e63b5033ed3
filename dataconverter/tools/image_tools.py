"""
Image Tools

Text watermarking with Pillow. Output is always PNG so the watermark's
transparency blends cleanly regardless of the source format.
"""

import io
from dataclasses import dataclass
from typing import Optional

from .progress import ProgressCallback, report

TILE_GAP = 100  # px between tiled labels


@dataclass
class WatermarkOptions:
    text: str
    opacity: float = 0.3
    font_size: int = 48
    rotation: float = -30  # degrees, negative is clockwise
    tiled: bool = True
    color: str = "#000000"

    def __post_init__(self):
        if not self.text.strip():
            raise ValueError("Watermark text cannot be empty")
        if not 0 <= self.opacity <= 1:
            raise ValueError(f"Opacity must be between 0 and 1, got {self.opacity}")
        if self.font_size <= 0:
            raise ValueError(f"Font size must be positive, got {self.font_size}")


def add_watermark(
    image_bytes: bytes,
    options: WatermarkOptions,
    on_progress: Optional[ProgressCallback] = None,
) -> bytes:
    """
    Stamp a text watermark onto an image.

    Args:
        image_bytes: Source image in any format Pillow can open.
        options: Watermark settings.
        on_progress: Optional progress callback.

    Returns:
        PNG bytes of the watermarked image.
    """
    try:
        from PIL import Image, ImageColor, ImageDraw, ImageFont
    except ImportError:
        raise RuntimeError("Pillow is not installed. Run: pip install Pillow")

    report(on_progress, 0, "Loading image...")
    with Image.open(io.BytesIO(image_bytes)) as source:
        base = source.convert("RGBA")

    report(on_progress, 20, "Creating canvas...")
    font = ImageFont.load_default(size=options.font_size)
    red, green, blue = ImageColor.getrgb(options.color)[:3]
    fill = (red, green, blue, round(255 * options.opacity))

    left, top, right, bottom = font.getbbox(options.text)
    text_width, text_height = right - left, bottom - top

    report(on_progress, 40, "Drawing image...")
    label = Image.new("RGBA", (text_width + 2, text_height + 2), (0, 0, 0, 0))
    ImageDraw.Draw(label).text((1 - left, 1 - top), options.text, font=font, fill=fill)
    # Pillow rotates counter-clockwise for positive angles
    label = label.rotate(-options.rotation, expand=True, resample=Image.Resampling.BICUBIC)

    report(on_progress, 60, "Adding watermark...")
    overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
    width, height = base.size

    if options.tiled:
        spacing_x = text_width + TILE_GAP
        spacing_y = int(options.font_size * 1.5) + TILE_GAP
        for y in range(-label.height // 2, height, spacing_y):
            for x in range(-label.width // 2, width, spacing_x):
                _composite(overlay, label, x, y)
    else:
        _composite(
            overlay,
            label,
            (width - label.width) // 2,
            (height - label.height) // 2,
        )

    result = Image.alpha_composite(base, overlay)

    report(on_progress, 90, "Generating output...")
    buffer = io.BytesIO()
    result.save(buffer, format="PNG")

    report(on_progress, 100, "Complete!")
    return buffer.getvalue()


def _composite(overlay, label, x: int, y: int) -> None:
    """alpha_composite clipped to the overlay; Pillow rejects negative offsets."""
    src_x, src_y = max(-x, 0), max(-y, 0)
    if src_x >= label.width or src_y >= label.height:
        return
    if x >= overlay.width or y >= overlay.height:
        return
    overlay.alpha_composite(label, dest=(max(x, 0), max(y, 0)), source=(src_x, src_y))
