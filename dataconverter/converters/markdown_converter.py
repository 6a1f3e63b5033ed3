"""
Markdown Table Converter

Reads and writes GitHub-style pipe tables. Only the first table in the
input is considered; other Markdown content is not a data format.
"""

import os
import re
from typing import Any

from .common import (
    ConversionError,
    collect_all_keys,
    normalize_to_array,
    sanitize,
    validate_input,
)

SEPARATOR_PATTERN = re.compile(r"^[\s|:-]+$")
UNESCAPED_PIPE = re.compile(r"(?<!\\)\|")


class MarkdownConverter:
    """Reads and writes Markdown pipe tables."""

    FORMAT_ID = "markdown"
    SUPPORTED_EXTENSIONS = {".md", ".markdown"}

    @staticmethod
    def can_handle(file_path: str) -> bool:
        _, ext = os.path.splitext(file_path.lower())
        return ext in MarkdownConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def parse(text: str) -> list[dict]:
        validate_input(text, "Markdown")

        lines = [line for line in text.strip().split("\n") if line.strip()]

        if len(lines) < 2:
            raise ConversionError(
                "Invalid Markdown table",
                "Table must have at least a header row and separator row",
            )

        if "|" not in lines[0]:
            raise ConversionError(
                "Invalid Markdown table format", "Missing pipe separators"
            )

        headers = _split_row(lines[0])

        if not SEPARATOR_PATTERN.match(lines[1]):
            raise ConversionError(
                "Invalid Markdown table", "Missing or invalid separator row"
            )

        rows = []
        for line in lines[2:]:
            cells = _split_row(line)
            rows.append({
                header: cells[i] if i < len(cells) else ""
                for i, header in enumerate(headers)
            })

        if not rows:
            raise ConversionError("Markdown table has no data rows")

        return rows

    @staticmethod
    def serialize(data: Any) -> str:
        rows = normalize_to_array(data)
        keys = collect_all_keys(rows)

        if not keys:
            return ""

        cells = [
            [sanitize(row.get(key)).replace("|", "\\|") for key in keys]
            for row in rows
        ]
        widths = [
            max([len(key), 3] + [len(row[i]) for row in cells])
            for i, key in enumerate(keys)
        ]

        lines = [
            "| " + " | ".join(key.ljust(widths[i]) for i, key in enumerate(keys)) + " |",
            "| " + " | ".join("-" * w for w in widths) + " |",
        ]
        for row in cells:
            lines.append(
                "| " + " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) + " |"
            )

        return "\n".join(lines)


def _split_row(line: str) -> list[str]:
    """Split a table row on unescaped pipes, dropping the outer borders."""
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]
    return [cell.strip().replace("\\|", "|") for cell in UNESCAPED_PIPE.split(stripped)]
