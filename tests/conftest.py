"""
Pytest configuration and shared fixtures.
"""

import io
import shutil
import sys
from pathlib import Path
import pytest

# Add the repository root to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dataconverter.core import DataConverter
from dataconverter.recent_files import JSONFileStorage, MemoryStorage, RecentFilesStore
from tests.fixtures.sample_documents import SAMPLE_FILES


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark as integration test")


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def engine(tmp_path):
    """Create a converter that writes into a temporary directory."""
    return DataConverter(output_dir=str(tmp_path / "out"))


@pytest.fixture
def history():
    """Create an in-memory recent files store."""
    return RecentFilesStore(MemoryStorage())


@pytest.fixture
def history_path(tmp_path):
    """Path for a file-backed history."""
    return tmp_path / "history" / "recent_files.json"


@pytest.fixture
def file_history(history_path):
    """Create a recent files store backed by a JSON file."""
    return RecentFilesStore(JSONFileStorage(history_path))


# ============================================================================
# Sample File Fixtures
# ============================================================================


@pytest.fixture
def sample_dir(tmp_path):
    """Directory holding one sample document per format."""
    directory = tmp_path / "samples"
    directory.mkdir()
    for name, content in SAMPLE_FILES.items():
        (directory / name).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def json_file(sample_dir):
    """Path to the sample JSON document."""
    return sample_dir / "users.json"


# ============================================================================
# Document Tool Fixtures
# ============================================================================


@pytest.fixture
def make_pdf():
    """Factory building small PDFs in memory with PyMuPDF."""
    fitz = pytest.importorskip("fitz")

    def _make(pages=2, with_form=False, title="Quarterly Report", author="Tester"):
        doc = fitz.open()
        for i in range(pages):
            page = doc.new_page()
            page.insert_text((72, 72), f"Page {i + 1}")

        if with_form:
            widget = fitz.Widget()
            widget.field_name = "full_name"
            widget.field_type = fitz.PDF_WIDGET_TYPE_TEXT
            widget.rect = fitz.Rect(72, 100, 272, 130)
            widget.field_value = "Alice"
            doc[0].add_widget(widget)

        doc.set_metadata({"title": title, "author": author})
        data = doc.tobytes()
        doc.close()
        return data

    return _make


@pytest.fixture
def make_image():
    """Factory building plain single-color images with Pillow."""
    Image = pytest.importorskip("PIL.Image")

    def _make(size=(400, 300), color=(255, 255, 255), fmt="PNG"):
        image = Image.new("RGB", size, color)
        buffer = io.BytesIO()
        image.save(buffer, format=fmt)
        return buffer.getvalue()

    return _make


@pytest.fixture
def progress_log():
    """Collects progress callbacks as (percent, status) pairs."""
    events = []

    def _record(progress):
        events.append((progress.current, progress.status))

    _record.events = events
    return _record


@pytest.fixture
def ffmpeg_calls(monkeypatch):
    """
    Replace ffmpeg.run with a recorder.

    Each run stores the command-line arguments ffmpeg-python built and
    writes placeholder bytes to the output file.
    """
    ffmpeg = pytest.importorskip("ffmpeg")
    calls = []

    def _run(stream, **kwargs):
        args = ffmpeg.get_args(stream)
        calls.append(args)
        with open(args[-1], "wb") as f:
            f.write(b"encoded")

    monkeypatch.setattr(ffmpeg, "run", _run)
    return calls


@pytest.fixture
def make_video(tmp_path):
    """Factory rendering a short test clip with FFmpeg's lavfi sources."""
    ffmpeg = pytest.importorskip("ffmpeg")
    if shutil.which("ffmpeg") is None:
        pytest.skip("ffmpeg binary not available")

    def _make(seconds=1, size="160x120"):
        path = tmp_path / "clip.mp4"
        video = ffmpeg.input(f"testsrc=duration={seconds}:size={size}:rate=10", f="lavfi")
        audio = ffmpeg.input(f"sine=frequency=440:duration={seconds}", f="lavfi")
        ffmpeg.run(
            ffmpeg.output(video, audio, str(path), vcodec="mpeg4", acodec="aac", shortest=None),
            quiet=True,
            overwrite_output=True,
        )
        return path.read_bytes()

    return _make
