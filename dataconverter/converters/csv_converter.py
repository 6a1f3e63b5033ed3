"""
CSV Converter

Reads CSV with a header row into a list of string-valued rows, and
writes any document as fully quoted CSV via the tabular view.
"""

import csv
import io
import os
from typing import Any

from .common import (
    ConversionError,
    collect_all_keys,
    normalize_to_array,
    sanitize,
    validate_input,
)


class CSVConverter:
    """Reads and writes comma-separated tables."""

    FORMAT_ID = "csv"
    SUPPORTED_EXTENSIONS = {".csv"}

    @staticmethod
    def can_handle(file_path: str) -> bool:
        _, ext = os.path.splitext(file_path.lower())
        return ext in CSVConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def parse(text: str) -> list[dict]:
        validate_input(text, "CSV")

        text = text.strip()
        # A single cell can be as long as the whole input
        csv.field_size_limit(max(csv.field_size_limit(), len(text)))

        reader = csv.reader(io.StringIO(text))
        try:
            records = [r for r in reader if r]
        except csv.Error as e:
            raise ConversionError(
                f"CSV parsing error at row {reader.line_num}", str(e)
            ) from e

        if not records:
            raise ConversionError("CSV file is empty or contains only headers")

        headers = [h.strip() for h in records[0]]
        rows = []

        for row_number, record in enumerate(records[1:], start=1):
            if len(record) != len(headers):
                kind = "Too many" if len(record) > len(headers) else "Too few"
                raise ConversionError(
                    f"CSV parsing error at row {row_number}",
                    f"{kind} fields: expected {len(headers)} fields "
                    f"but parsed {len(record)}",
                )
            rows.append({h: cell.strip() for h, cell in zip(headers, record)})

        if not rows:
            raise ConversionError("CSV file is empty or contains only headers")

        return rows

    @staticmethod
    def serialize(data: Any) -> str:
        rows = normalize_to_array(data)
        keys = collect_all_keys(rows)

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(keys)
        for row in rows:
            writer.writerow([sanitize(row.get(key)) for key in keys])

        return buffer.getvalue().rstrip("\n")
