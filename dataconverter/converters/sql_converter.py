"""
SQL Converter

Reads rows out of INSERT INTO statements and writes a CREATE TABLE
plus a multi-row INSERT. Column types are inferred from the first
non-null value in each column.
"""

import os
import re
from typing import Any, Optional

from .common import (
    ConversionError,
    collect_all_keys,
    normalize_to_array,
    validate_input,
)

INSERT_PATTERN = re.compile(
    r"INSERT\s+INTO\s+[\w.`\"\[\]]+\s*\(([^)]+)\)\s*VALUES", re.IGNORECASE
)
INTEGER_PATTERN = re.compile(r"^-?\d+$")
DECIMAL_PATTERN = re.compile(r"^-?\d*\.\d+$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")
UNSAFE_COLUMN_CHARS = re.compile(r"[^a-zA-Z0-9_]")


class SQLConverter:
    """Reads and writes SQL INSERT statements."""

    FORMAT_ID = "sql"
    SUPPORTED_EXTENSIONS = {".sql"}
    DEFAULT_TABLE = "data_table"

    @staticmethod
    def can_handle(file_path: str) -> bool:
        _, ext = os.path.splitext(file_path.lower())
        return ext in SQLConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def parse(text: str) -> list[dict]:
        validate_input(text, "SQL")

        matches = _find_statements(text)
        if not matches:
            raise ConversionError(
                "Invalid SQL format",
                "Expected INSERT INTO table (columns) VALUES (...) statement",
            )

        rows = []
        for idx, match in enumerate(matches):
            columns = [
                re.sub(r"[\"`\[\]]", "", c.strip())
                for c in match.group(1).split(",")
            ]
            end = matches[idx + 1].start() if idx + 1 < len(matches) else len(text)

            for values in _scan_tuples(text[match.end():end]):
                rows.append({
                    column: values[i] if i < len(values) else None
                    for i, column in enumerate(columns)
                })

        if not rows:
            raise ConversionError("No data found in SQL statement")

        return rows

    @staticmethod
    def serialize(data: Any, table_name: str = DEFAULT_TABLE) -> str:
        rows = normalize_to_array(data)
        keys = collect_all_keys(rows)

        if not keys or not rows:
            return "-- No data to convert"

        safe_keys = [UNSAFE_COLUMN_CHARS.sub("_", key) for key in keys]

        lines = [
            f"-- Generated SQL for {len(rows)} row(s)",
            "-- Table structure",
            f"CREATE TABLE IF NOT EXISTS {table_name} (",
        ]

        for idx, (key, safe_key) in enumerate(zip(keys, safe_keys)):
            sample = next(
                (row[key] for row in rows if row.get(key) is not None), None
            )
            comma = "," if idx < len(keys) - 1 else ""
            lines.append(f"  {safe_key} {infer_sql_type(sample)}{comma}")

        lines.append(");")
        lines.append("")
        lines.append("-- Data insertion")
        lines.append(f"INSERT INTO {table_name} ({', '.join(safe_keys)}) VALUES")

        for idx, row in enumerate(rows):
            values = ", ".join(format_sql_value(row.get(key)) for key in keys)
            terminator = ";" if idx == len(rows) - 1 else ","
            lines.append(f"  ({values}){terminator}")

        return "\n".join(lines)


def infer_sql_type(value: Any) -> str:
    """Pick a column type from a sample value."""
    if value is None:
        return "TEXT"
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return "BOOLEAN"
    if isinstance(value, int):
        return "INTEGER"
    if isinstance(value, float):
        return "INTEGER" if value.is_integer() else "DECIMAL(10,2)"
    if isinstance(value, str):
        if len(value) > 255:
            return "TEXT"
        if DATE_PATTERN.match(value):
            return "DATE"
        return "VARCHAR(255)"
    return "TEXT"


def format_sql_value(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


def parse_sql_value(raw: str, quoted: bool = False) -> Any:
    if quoted:
        return raw
    upper = raw.upper()
    if upper == "NULL":
        return None
    if upper == "TRUE":
        return True
    if upper == "FALSE":
        return False
    if INTEGER_PATTERN.match(raw):
        return int(raw)
    if DECIMAL_PATTERN.match(raw):
        return float(raw)
    return raw


def _find_statements(text: str) -> list[re.Match]:
    """
    Locate INSERT INTO headers that sit outside string literals and
    `--` line comments.
    """
    matches = []
    quote_char = ""
    i = 0

    while i < len(text):
        char = text[i]

        if quote_char:
            if char == quote_char:
                if i + 1 < len(text) and text[i + 1] == quote_char:
                    i += 1
                else:
                    quote_char = ""
        elif char in ("'", '"'):
            quote_char = char
        elif text.startswith("--", i):
            newline = text.find("\n", i)
            i = len(text) if newline == -1 else newline
            continue
        elif char in "iI" and (i == 0 or not (text[i - 1].isalnum() or text[i - 1] == "_")):
            match = INSERT_PATTERN.match(text, i)
            if match:
                matches.append(match)
                i = match.end()
                continue
        i += 1

    return matches


def _scan_tuples(text: str) -> list[list]:
    """
    Split the VALUES section into tuples of parsed values.

    Quote-aware: commas and parentheses inside string literals are data.
    Doubled quote characters inside a literal are an escaped quote.
    """
    tuples = []
    values: Optional[list] = None
    current = ""
    quoted = False
    quote_char = ""
    in_string = False
    i = 0

    while i < len(text):
        char = text[i]

        if in_string:
            if char == quote_char:
                if i + 1 < len(text) and text[i + 1] == quote_char:
                    current += char
                    i += 1
                else:
                    in_string = False
            else:
                current += char
        elif values is None:
            if char == "(":
                values = []
                current = ""
                quoted = False
            elif char == ";":
                break
        elif char in ("'", '"'):
            in_string = True
            quoted = True
            quote_char = char
            current = ""
        elif char == ",":
            values.append(parse_sql_value(current if quoted else current.strip(), quoted))
            current = ""
            quoted = False
        elif char == ")":
            if current.strip() or quoted:
                values.append(parse_sql_value(current if quoted else current.strip(), quoted))
            tuples.append(values)
            values = None
        else:
            if not quoted:
                current += char

        i += 1

    return tuples
