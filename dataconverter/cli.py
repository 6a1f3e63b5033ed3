#!/usr/bin/env python3
"""
Data Converter CLI

Command-line interface for format conversion and the document tools.

Usage:
    python -m dataconverter convert data.json --to csv
    python -m dataconverter convert export.sql --to yaml --stdout
    python -m dataconverter convert ./exports/ --to json     # whole directory
    python -m dataconverter formats
    python -m dataconverter pdf-dark-mode report.pdf --intensity 0.8
    python -m dataconverter pdf-flatten form.pdf
    python -m dataconverter watermark photo.jpg --text "CONFIDENTIAL"
    python -m dataconverter video-to-audio clip.mp4 --format aac
    python -m dataconverter gif-maker clip.mp4 --start 2 --duration 3
    python -m dataconverter recent
"""

import argparse
import contextlib
import os
import sys

from .core import DataConverter
from .formats import FORMAT_IDS, FORMATS, get_all_conversions, get_format_label
from .i18n import DEFAULT_LOCALE, LOCALES
from .recent_files import JSONFileStorage, RecentFilesStore, format_relative_time
from .routes import conversion_path
from .tools import (
    GifOptions,
    WatermarkOptions,
    add_watermark,
    convert_pdf_to_dark_mode,
    create_gif,
    extract_audio,
    flatten_pdf,
    get_tool_by_slug,
    remove_audio,
)
from .tools.video_tools import AUDIO_CODECS, video_extension


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dataconverter",
        description=(
            "Structured Data Format Converter\n\n"
            "Converts between JSON, CSV, XML, YAML, SQL, Markdown tables and\n"
            "HTML tables, plus PDF dark mode, PDF flattening, image\n"
            "watermarking and FFmpeg video tools."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m dataconverter convert users.json --to csv\n"
            "  python -m dataconverter convert dump.sql --to json --stdout\n"
            "  python -m dataconverter convert ./exports/ --to yaml -o ./out\n"
            "  python -m dataconverter pdf-dark-mode paper.pdf --intensity 0.7\n"
        ),
    )
    parser.add_argument(
        "--history",
        default=None,
        help=f"Recent files history file (default: {RecentFilesStore.DEFAULT_HISTORY_PATH})",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not read or record the recent files history",
    )

    sub = parser.add_subparsers(dest="command")

    convert = sub.add_parser("convert", help="Convert files or directories")
    convert.add_argument("sources", nargs="+", help="Files or directories to convert")
    convert.add_argument("--to", dest="target", required=True, choices=FORMAT_IDS,
                         help="Target format")
    convert.add_argument("--from", dest="source", default=None, choices=FORMAT_IDS,
                         help="Source format (default: detect from extension)")
    convert.add_argument("-o", "--output", default=None,
                         help="Output directory (default: ./dataconverter_output)")
    convert.add_argument("--stdout", action="store_true",
                         help="Print the result instead of saving files")
    convert.add_argument("--table-name", default=DataConverter.DEFAULT_TABLE_NAME,
                         help="Table name for SQL output")
    convert.add_argument("--xml-root", default=DataConverter.DEFAULT_XML_ROOT,
                         help="Root element name for XML output")

    sub.add_parser("formats", help="Show all supported formats and exit")

    conversions = sub.add_parser("conversions", help="List every conversion page")
    conversions.add_argument("--locale", default=DEFAULT_LOCALE, choices=LOCALES)

    dark = sub.add_parser("pdf-dark-mode", help="Give a PDF a dark-mode overlay")
    dark.add_argument("file", help="PDF file")
    dark.add_argument("--intensity", type=float, default=0.9,
                      help="Overlay strength between 0 and 1 (default: 0.9)")
    dark.add_argument("-o", "--output", default=None, help="Output file")

    flatten = sub.add_parser("pdf-flatten", help="Flatten PDF forms and strip metadata")
    flatten.add_argument("file", help="PDF file")
    flatten.add_argument("--keep-forms", action="store_true", help="Do not flatten form fields")
    flatten.add_argument("--keep-metadata", action="store_true", help="Do not clear metadata")
    flatten.add_argument("-o", "--output", default=None, help="Output file")

    watermark = sub.add_parser("watermark", help="Add a text watermark to an image")
    watermark.add_argument("file", help="Image file")
    watermark.add_argument("--text", required=True, help="Watermark text")
    watermark.add_argument("--opacity", type=float, default=0.3)
    watermark.add_argument("--font-size", type=int, default=48)
    watermark.add_argument("--rotation", type=float, default=-30)
    watermark.add_argument("--color", default="#000000")
    watermark.add_argument("--single", action="store_true",
                           help="One centred label instead of a tiled pattern")
    watermark.add_argument("-o", "--output", default=None, help="Output PNG file")

    to_audio = sub.add_parser("video-to-audio", help="Extract the audio track of a video")
    to_audio.add_argument("file", help="Video file")
    to_audio.add_argument("--format", default="mp3", choices=sorted(AUDIO_CODECS),
                          help="Audio format (default: mp3)")
    to_audio.add_argument("-o", "--output", default=None, help="Output file")

    mute = sub.add_parser("video-mute", help="Remove the audio from a video")
    mute.add_argument("file", help="Video file")
    mute.add_argument("-o", "--output", default=None, help="Output file")

    gif = sub.add_parser("gif-maker", help="Turn a clip of a video into a GIF")
    gif.add_argument("file", help="Video file")
    gif.add_argument("--fps", type=int, default=10)
    gif.add_argument("--width", type=int, default=480, help="GIF width in px (default: 480)")
    gif.add_argument("--start", type=float, default=0, help="Clip start in seconds")
    gif.add_argument("--duration", type=float, default=5, help="Clip length in seconds")
    gif.add_argument("-o", "--output", default=None, help="Output GIF file")

    recent = sub.add_parser("recent", help="Show recent file operations")
    recent.add_argument("--clear", action="store_true", help="Clear the history")
    recent.add_argument("--lang", default="en", help="Language for relative times")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        print("\nError: No command given.")
        sys.exit(1)

    history = None
    if not args.no_history:
        history = RecentFilesStore(
            JSONFileStorage(args.history or RecentFilesStore.DEFAULT_HISTORY_PATH)
        )

    handlers = {
        "convert": _run_convert,
        "formats": lambda a, h: _show_formats(),
        "conversions": lambda a, h: _show_conversions(a.locale),
        "pdf-dark-mode": _run_dark_mode,
        "pdf-flatten": _run_flatten,
        "watermark": _run_watermark,
        "video-to-audio": _run_video_to_audio,
        "video-mute": _run_video_mute,
        "gif-maker": _run_gif_maker,
        "recent": _run_recent,
    }
    code = handlers[args.command](args, history)
    if code:
        sys.exit(code)


def _run_convert(args, history) -> int:
    engine = DataConverter(
        output_dir=args.output,
        table_name=args.table_name,
        xml_root=args.xml_root,
        history=history,
    )
    save = not args.stdout
    log = _log_stream(args)

    print("=" * 60, file=log)
    print("  DATA CONVERTER", file=log)
    print("=" * 60, file=log)

    success_count = 0
    error_count = 0

    for source in args.sources:
        # Engine prints go to the log stream
        with contextlib.redirect_stdout(log):
            outcomes = _convert_source(engine, source, args.target, args.source, save)
        if outcomes is None:
            error_count += 1
            continue

        for name, result in outcomes:
            if result.success:
                success_count += 1
                if args.stdout:
                    print(result.data)
            else:
                error_count += 1
                if os.path.isdir(source):
                    continue  # convert_directory already reported it
                message = result.error
                if result.details:
                    message += f" ({result.details})"
                print(f"[ERROR] {name}: {message}", file=sys.stderr)

    print("-" * 60, file=log)
    print(f"  Done: {success_count} converted, {error_count} errors", file=log)
    if save:
        print(f"  Output: {engine.output_dir}", file=log)
    print("-" * 60, file=log)

    return 1 if error_count else 0


def _convert_source(engine, source: str, target: str, source_format, save: bool):
    if os.path.isdir(source):
        return engine.convert_directory(source, target, save=save)

    if not os.path.isfile(source):
        print(f"[ERROR] {source}: no such file or directory", file=sys.stderr)
        return None

    try:
        return [(source, engine.convert_file(source, target, source=source_format, save=save))]
    except ValueError as e:
        print(f"[ERROR] {source}: {e}", file=sys.stderr)
        return None


def _log_stream(args):
    # Keep stdout clean for piping when results go there
    return sys.stderr if getattr(args, "stdout", False) else sys.stdout


def _print_progress(progress) -> None:
    print(f"  {progress.current:3d}%  {progress.status}")


def _run_tool(args, history, tool_slug: str, tag: str, out_path: str, output_format: str, transform) -> int:
    if not os.path.isfile(args.file):
        print(f"[ERROR] {args.file}: file not found", file=sys.stderr)
        return 1

    with open(args.file, "rb") as f:
        data = f.read()

    print(f"[{tag}] {tool_slug}: {args.file}")
    try:
        result = transform(data)
    except Exception as e:
        print(f"[ERROR] {args.file}: {e}", file=sys.stderr)
        return 1

    with open(out_path, "wb") as f:
        f.write(result)
    print(f"[SAVED] {out_path}")

    _record(history, args.file, tool_slug, output_format, out_path)
    return 0


def _run_dark_mode(args, history) -> int:
    return _run_tool(
        args, history, "pdf-dark-mode", "PDF",
        args.output or _sibling_path(args.file, "_dark", ".pdf"), "pdf",
        lambda data: convert_pdf_to_dark_mode(data, args.intensity, _print_progress),
    )


def _run_flatten(args, history) -> int:
    return _run_tool(
        args, history, "pdf-flatten", "PDF",
        args.output or _sibling_path(args.file, "_flat", ".pdf"), "pdf",
        lambda data: flatten_pdf(
            data,
            flatten_forms=not args.keep_forms,
            remove_metadata=not args.keep_metadata,
            on_progress=_print_progress,
        ),
    )


def _run_watermark(args, history) -> int:
    try:
        options = WatermarkOptions(
            text=args.text,
            opacity=args.opacity,
            font_size=args.font_size,
            rotation=args.rotation,
            tiled=not args.single,
            color=args.color,
        )
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    return _run_tool(
        args, history, "image-watermark", "IMG",
        args.output or _sibling_path(args.file, "_watermarked", ".png"), "png",
        lambda data: add_watermark(data, options, _print_progress),
    )


def _run_video_to_audio(args, history) -> int:
    return _run_tool(
        args, history, "video-to-audio", "VIDEO",
        args.output or _sibling_path(args.file, "", f".{args.format}"), args.format,
        lambda data: extract_audio(data, args.file, args.format, _print_progress),
    )


def _run_video_mute(args, history) -> int:
    extension = video_extension(args.file)
    return _run_tool(
        args, history, "video-mute", "VIDEO",
        args.output or _sibling_path(args.file, "_muted", extension), extension[1:],
        lambda data: remove_audio(data, args.file, _print_progress),
    )


def _run_gif_maker(args, history) -> int:
    try:
        options = GifOptions(
            fps=args.fps,
            width=args.width,
            start_time=args.start,
            duration=args.duration,
        )
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    return _run_tool(
        args, history, "gif-maker", "VIDEO",
        args.output or _sibling_path(args.file, "", ".gif"), "gif",
        lambda data: create_gif(data, options, args.file, _print_progress),
    )


def _run_recent(args, history) -> int:
    if history is None:
        print("History is disabled.")
        return 0

    if args.clear:
        history.clear()
        print("History cleared.")
        return 0

    if not history.has_history:
        print("No recent files.")
        return 0

    print("\nRecent files:")
    print("-" * 40)
    for entry in history.files:
        age = format_relative_time(entry.timestamp, args.lang)
        print(f"  {entry.file_name:<30} {entry.operation_label:<20} {age}")
    print()
    return 0


def _record(history, file_path: str, tool_slug: str, output_format: str, out_path: str) -> None:
    if history is None:
        return
    tool = get_tool_by_slug(tool_slug)
    label = tool.label if tool else tool_slug
    entry_id = history.add(
        file_name=os.path.basename(file_path),
        operation=tool_slug,
        operation_label=label,
        output_format=output_format,
    )
    history.update_output_path(entry_id, out_path)


def _sibling_path(file_path: str, suffix: str, extension: str) -> str:
    stem, _ = os.path.splitext(file_path)
    return f"{stem}{suffix}{extension}"


def _show_formats() -> int:
    """Display all supported formats."""
    formats = DataConverter.supported_formats()
    print("\nSupported Formats:")
    print("-" * 40)
    for label, extensions in formats.items():
        print(f"\n  {label}:")
        for ext in extensions:
            print(f"    {ext}")
    print()
    return 0


def _show_conversions(locale: str) -> int:
    for source, target in get_all_conversions():
        label = f"{get_format_label(source, locale)} -> {get_format_label(target, locale)}"
        print(f"  {label:<36} {conversion_path(locale, source, target)}")
    print(f"\n  {len(get_all_conversions())} conversions across {len(FORMATS)} formats")
    return 0


if __name__ == "__main__":
    main()
