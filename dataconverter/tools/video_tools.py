"""
Video Tools

Audio extraction, audio removal and GIF creation with FFmpeg, driven
through ffmpeg-python. FFmpeg reads and writes files, so every operation
runs inside its own temporary directory and hands back the output bytes.
"""

import os
import tempfile
from dataclasses import dataclass
from typing import Optional

from .progress import ProgressCallback, report

AUDIO_CODECS = {"mp3": "libmp3lame", "aac": "aac"}
AUDIO_BITRATE = "192k"

VIDEO_EXTENSIONS = {".mp4", ".mov", ".avi", ".webm", ".mkv"}
DEFAULT_VIDEO_EXTENSION = ".mp4"


@dataclass
class GifOptions:
    fps: int = 10
    width: int = 480  # px, height follows the aspect ratio
    start_time: float = 0  # seconds into the video
    duration: float = 5  # seconds

    def __post_init__(self):
        if self.fps <= 0:
            raise ValueError(f"FPS must be positive, got {self.fps}")
        if self.width <= 0:
            raise ValueError(f"Width must be positive, got {self.width}")
        if self.start_time < 0:
            raise ValueError(f"Start time cannot be negative, got {self.start_time}")
        if self.duration <= 0:
            raise ValueError(f"Duration must be positive, got {self.duration}")


def video_extension(filename: str) -> str:
    """Container extension of a video file, ".mp4" when unrecognised."""
    _, ext = os.path.splitext(filename.lower())
    return ext if ext in VIDEO_EXTENSIONS else DEFAULT_VIDEO_EXTENSION


def _write_source(workdir: str, video_bytes: bytes, filename: str) -> str:
    path = os.path.join(workdir, f"input{video_extension(filename)}")
    with open(path, "wb") as f:
        f.write(video_bytes)
    return path


def _read_output(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def extract_audio(
    video_bytes: bytes,
    filename: str = "video.mp4",
    audio_format: str = "mp3",
    on_progress: Optional[ProgressCallback] = None,
) -> bytes:
    """
    Pull the audio track out of a video at 192 kbit/s.

    Args:
        video_bytes: Source video.
        filename: Source file name, used for its container extension.
        audio_format: "mp3" or "aac".
        on_progress: Optional progress callback.

    Returns:
        The encoded audio file.
    """
    codec = AUDIO_CODECS.get(audio_format)
    if codec is None:
        raise ValueError(f"Unsupported audio format: {audio_format}. Use mp3 or aac")

    try:
        import ffmpeg
    except ImportError:
        raise RuntimeError("ffmpeg-python is not installed. Run: pip install ffmpeg-python")

    report(on_progress, 0, "Loading video...")
    with tempfile.TemporaryDirectory() as workdir:
        source = _write_source(workdir, video_bytes, filename)
        target = os.path.join(workdir, f"output.{audio_format}")

        report(on_progress, 10, "Extracting audio...")
        stream = ffmpeg.input(source).output(
            target, vn=None, acodec=codec, audio_bitrate=AUDIO_BITRATE
        )
        ffmpeg.run(stream, quiet=True, overwrite_output=True)

        report(on_progress, 90, "Finalizing...")
        result = _read_output(target)

    report(on_progress, 100, "Complete!")
    return result


def remove_audio(
    video_bytes: bytes,
    filename: str = "video.mp4",
    on_progress: Optional[ProgressCallback] = None,
) -> bytes:
    """Drop every audio stream, copying the video stream without re-encoding."""
    try:
        import ffmpeg
    except ImportError:
        raise RuntimeError("ffmpeg-python is not installed. Run: pip install ffmpeg-python")

    report(on_progress, 0, "Loading video...")
    with tempfile.TemporaryDirectory() as workdir:
        source = _write_source(workdir, video_bytes, filename)
        target = os.path.join(workdir, f"output{video_extension(filename)}")

        report(on_progress, 10, "Removing audio...")
        stream = ffmpeg.input(source).output(target, an=None, vcodec="copy")
        ffmpeg.run(stream, quiet=True, overwrite_output=True)

        report(on_progress, 90, "Finalizing...")
        result = _read_output(target)

    report(on_progress, 100, "Complete!")
    return result


def create_gif(
    video_bytes: bytes,
    options: Optional[GifOptions] = None,
    filename: str = "video.mp4",
    on_progress: Optional[ProgressCallback] = None,
) -> bytes:
    """
    Turn a clip of a video into an animated GIF.

    Two passes: the first builds a colour palette for the clip, the
    second maps the frames onto it with Bayer dithering.

    Args:
        video_bytes: Source video.
        options: Clip window, frame rate and width.
        filename: Source file name, used for its container extension.
        on_progress: Optional progress callback.

    Returns:
        GIF bytes.
    """
    options = options or GifOptions()

    try:
        import ffmpeg
    except ImportError:
        raise RuntimeError("ffmpeg-python is not installed. Run: pip install ffmpeg-python")

    report(on_progress, 0, "Loading video...")
    with tempfile.TemporaryDirectory() as workdir:
        source = _write_source(workdir, video_bytes, filename)
        palette = os.path.join(workdir, "palette.png")
        target = os.path.join(workdir, "output.gif")

        clip = ffmpeg.input(source, ss=options.start_time, t=options.duration)
        frames = (
            clip.video
            .filter("fps", fps=options.fps)
            .filter("scale", options.width, -1, flags="lanczos")
        )

        report(on_progress, 10, "Generating palette...")
        ffmpeg.run(
            frames.filter("palettegen").output(palette),
            quiet=True,
            overwrite_output=True,
        )

        report(on_progress, 50, "Creating GIF...")
        gif = ffmpeg.filter(
            [frames, ffmpeg.input(palette)],
            "paletteuse",
            dither="bayer",
            bayer_scale=5,
            diff_mode="rectangle",
        ).output(target)
        ffmpeg.run(gif, quiet=True, overwrite_output=True)

        report(on_progress, 90, "Finalizing...")
        result = _read_output(target)

    report(on_progress, 100, "Complete!")
    return result
