"""
YAML Converter

Uses PyYAML's safe loader and dumper. Values YAML can express but JSON
cannot (dates, non-string keys) are normalised on the way in.
"""

import os
from typing import Any

import yaml

from .common import ConversionError, to_plain, validate_input


class YAMLConverter:
    """Reads and writes YAML documents."""

    FORMAT_ID = "yaml"
    SUPPORTED_EXTENSIONS = {".yaml", ".yml"}

    @staticmethod
    def can_handle(file_path: str) -> bool:
        _, ext = os.path.splitext(file_path.lower())
        return ext in YAMLConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def parse(text: str) -> Any:
        validate_input(text, "YAML")
        try:
            result = yaml.safe_load(text.strip())
        except yaml.YAMLError as e:
            raise ConversionError("Invalid YAML syntax", str(e)) from e

        if result is None:
            raise ConversionError("YAML file is empty or invalid")

        return to_plain(result)

    @staticmethod
    def serialize(data: Any) -> str:
        return yaml.safe_dump(
            data,
            indent=2,
            width=120,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
