"""
Shared helpers for the format converters.

Holds the conversion error type and the tabular view used by every
row-oriented serializer (CSV, SQL, Markdown, HTML). The tabular view is
where nested documents get flattened, so the lossy rules live here.
"""

import json
from datetime import date, datetime
from typing import Any, Optional


class ConversionError(Exception):
    """Raised when a document cannot be parsed or serialized."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


def validate_input(text: str, format_name: str) -> None:
    """Reject empty or whitespace-only input."""
    if not text or not text.strip():
        raise ConversionError(
            f"Empty input. Please provide valid {format_name.upper()} data."
        )


def to_plain(value: Any) -> Any:
    """
    Normalise a parsed value to plain JSON-compatible types.

    Dates become ISO-8601 strings, mapping keys become strings and
    tuples/sets become lists.
    """
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_plain(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def scalar_text(value: Any) -> str:
    """Render a scalar the way it reads in JSON (true/false, not True/False)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def sanitize(value: Any) -> str:
    """Turn a cell value into display text."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return scalar_text(value)


def flatten_object(obj: dict, prefix: str = "") -> dict:
    """
    Flatten nested mappings into dot-notation keys.

    Lists of scalars are joined with ", ". Lists holding mappings or
    other lists are kept as a JSON string.
    """
    result = {}
    for key, value in obj.items():
        new_key = f"{prefix}.{key}" if prefix else str(key)

        if isinstance(value, dict):
            if value:
                result.update(flatten_object(value, new_key))
            else:
                result[new_key] = value
        elif isinstance(value, list):
            if all(not isinstance(v, (dict, list)) for v in value):
                result[new_key] = ", ".join(sanitize(v) for v in value)
            else:
                result[new_key] = json.dumps(value, ensure_ascii=False)
        else:
            result[new_key] = value

    return result


def normalize_to_array(data: Any) -> list[dict]:
    """Project any parsed document onto a list of flat rows."""
    if isinstance(data, list):
        rows = []
        for item in data:
            if isinstance(item, dict):
                rows.append(flatten_object(item))
            else:
                rows.append({"value": item})
        return rows

    if isinstance(data, dict):
        # A wrapper object like {"users": [...]} is treated as its first list
        for value in data.values():
            if isinstance(value, list):
                return normalize_to_array(value)
        return [flatten_object(data)]

    return [{"value": data}]


def collect_all_keys(rows: list[dict]) -> list[str]:
    """Union of row keys in first-seen order."""
    keys = {}
    for row in rows:
        for key in row:
            keys.setdefault(key, None)
    return list(keys)
