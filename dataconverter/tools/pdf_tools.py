"""
PDF Tools

Dark-mode overlay and form flattening on top of PyMuPDF. Each operation
takes the PDF as bytes and returns new bytes; the input is not modified.
Errors raised by PyMuPDF (corrupt or empty input) propagate unchanged.
"""

from typing import Optional

from .progress import ProgressCallback, report

METADATA_FIELDS = ("title", "author", "subject", "keywords", "producer", "creator")


def _open_pdf(pdf_bytes: bytes):
    try:
        import fitz  # pymupdf
    except ImportError:
        raise RuntimeError("pymupdf is not installed. Run: pip install pymupdf")

    return fitz.open(stream=pdf_bytes, filetype="pdf")


def dark_overlay_color(intensity: float) -> tuple[float, float, float]:
    """Overlay fill for a given intensity, with a slight blue tint."""
    value = 0.12 * (1 - intensity) + 0.05 * intensity
    return (value, value, value + 0.02)


def convert_pdf_to_dark_mode(
    pdf_bytes: bytes,
    intensity: float = 0.9,
    on_progress: Optional[ProgressCallback] = None,
) -> bytes:
    """
    Give a PDF a dark-mode look.

    Draws a semi-transparent dark rectangle over every page. The overlay
    does not invert colors, so dark text stays dark; higher intensity
    means a darker and more opaque overlay.

    Args:
        pdf_bytes: The source PDF.
        intensity: Overlay opacity between 0 and 1.
        on_progress: Optional progress callback.

    Returns:
        The modified PDF as bytes.
    """
    if not 0 <= intensity <= 1:
        raise ValueError(f"Intensity must be between 0 and 1, got {intensity}")

    report(on_progress, 0, "Loading PDF...")
    doc = _open_pdf(pdf_bytes)

    try:
        total_pages = doc.page_count
        report(on_progress, 10, "Processing pages...")

        color = dark_overlay_color(intensity)
        for i, page in enumerate(doc):
            page.draw_rect(
                page.rect,
                color=None,
                fill=color,
                fill_opacity=intensity,
                overlay=True,
            )
            report(
                on_progress,
                10 + round((i + 1) / total_pages * 80),
                f"Processing page {i + 1} of {total_pages}...",
            )

        report(on_progress, 95, "Finalizing PDF...")
        result = doc.tobytes(garbage=1, deflate=True)
    finally:
        doc.close()

    report(on_progress, 100, "Complete!")
    return result


def flatten_pdf(
    pdf_bytes: bytes,
    flatten_forms: bool = True,
    remove_metadata: bool = True,
    on_progress: Optional[ProgressCallback] = None,
) -> bytes:
    """
    Flatten form fields into page content and strip document metadata.

    A PDF without a form is flattened as a no-op.
    """
    report(on_progress, 0, "Loading PDF...")
    doc = _open_pdf(pdf_bytes)

    try:
        report(on_progress, 30, "Processing document...")

        if flatten_forms and doc.is_form_pdf:
            doc.bake(annots=False, widgets=True)

        report(on_progress, 60, "Cleaning metadata...")

        if remove_metadata:
            doc.set_metadata({name: "" for name in METADATA_FIELDS})
            doc.del_xml_metadata()

        report(on_progress, 90, "Finalizing PDF...")
        result = doc.tobytes(garbage=1, deflate=True)
    finally:
        doc.close()

    report(on_progress, 100, "Complete!")
    return result


def get_pdf_info(pdf_bytes: bytes) -> dict:
    """Page count, title, author and whether the PDF carries a form."""
    doc = _open_pdf(pdf_bytes)
    try:
        metadata = doc.metadata or {}
        return {
            "page_count": doc.page_count,
            "title": metadata.get("title") or None,
            "author": metadata.get("author") or None,
            "has_form": bool(doc.is_form_pdf),
        }
    finally:
        doc.close()
