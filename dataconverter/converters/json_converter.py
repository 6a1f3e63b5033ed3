"""
JSON Converter

Parses JSON text into the intermediate tree and writes it back out
with two-space indentation.
"""

import json
import os
from typing import Any

from .common import ConversionError, validate_input


class JSONConverter:
    """Reads and writes JSON documents."""

    FORMAT_ID = "json"
    SUPPORTED_EXTENSIONS = {".json"}

    @staticmethod
    def can_handle(file_path: str) -> bool:
        _, ext = os.path.splitext(file_path.lower())
        return ext in JSONConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def parse(text: str) -> Any:
        validate_input(text, "JSON")
        stripped = text.strip()
        try:
            return json.loads(stripped, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            # Show the text around the failure so the user can find it
            start = max(0, e.pos - 20)
            context = stripped[start:e.pos + 20]
            raise ConversionError(
                "Invalid JSON syntax",
                f'Error near: "...{context}..."',
            ) from e

    @staticmethod
    def serialize(data: Any) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False)


def _reject_constant(name: str):
    # NaN and Infinity are not JSON, though the json module accepts them
    raise ConversionError("Invalid JSON syntax", f"Unsupported value: {name}")
