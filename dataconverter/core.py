"""
Data Converter Core Engine

Parses a document in one format into a plain Python tree and serializes
that tree into another format. Works on raw text, single files, or whole
directories.

Failures are returned as ConversionResult values rather than raised, so
callers can show the message to the user directly.
"""

import os
from dataclasses import dataclass
from typing import Any, Optional

from .converters import CONVERTERS, ConversionError
from .converters.common import normalize_to_array
from .formats import FORMATS, FORMAT_IDS, detect_format, get_conversion_slug
from .recent_files import RecentFilesStore


@dataclass
class ConversionResult:
    """Outcome of one conversion: output text on success, a message on failure."""
    success: bool
    data: Optional[str] = None
    row_count: Optional[int] = None
    error: Optional[str] = None
    details: Optional[str] = None

    @classmethod
    def ok(cls, data: str, row_count: Optional[int] = None) -> "ConversionResult":
        return cls(success=True, data=data, row_count=row_count)

    @classmethod
    def fail(cls, error: str, details: Optional[str] = None) -> "ConversionResult":
        return cls(success=False, error=error, details=details)


class DataConverter:
    """
    Main conversion engine.

    Holds the output options (SQL table name, XML root element, output
    directory) and an optional recent-files history.
    """

    DEFAULT_TABLE_NAME = "data_table"
    DEFAULT_XML_ROOT = "data"

    def __init__(
        self,
        output_dir: Optional[str] = None,
        table_name: str = DEFAULT_TABLE_NAME,
        xml_root: str = DEFAULT_XML_ROOT,
        history: Optional[RecentFilesStore] = None,
    ):
        """
        Initialize the engine.

        Args:
            output_dir: Where convert_file() writes results
                (default: ./dataconverter_output).
            table_name: Table name used in generated SQL.
            xml_root: Root element name used in generated XML.
            history: Optional store that records successful file conversions.
        """
        self.output_dir = output_dir or os.path.join(os.getcwd(), "dataconverter_output")
        self.table_name = table_name
        self.xml_root = xml_root
        self.history = history

    def convert(self, source: str, target: str, text: str) -> ConversionResult:
        """
        Convert text from one format to another.

        Args:
            source: Source format id, e.g. "json".
            target: Target format id, e.g. "csv".
            text: Raw input document.

        Returns:
            A successful result with the output text and row count, or a
            failed result with a human-readable error.
        """
        if source not in CONVERTERS:
            return ConversionResult.fail(f"Unsupported source format: {source}")
        if target not in CONVERTERS:
            return ConversionResult.fail(f"Unsupported target format: {target}")

        try:
            parsed = CONVERTERS[source].parse(text)
            output = self._serialize(target, parsed)
            row_count = len(normalize_to_array(parsed))
        except ConversionError as e:
            return ConversionResult.fail(e.message, e.details)
        except Exception as e:
            return ConversionResult.fail("Conversion failed", str(e))

        return ConversionResult.ok(output, row_count)

    def _serialize(self, target: str, data: Any) -> str:
        if target == "sql":
            return CONVERTERS["sql"].serialize(data, table_name=self.table_name)
        if target == "xml":
            return CONVERTERS["xml"].serialize(data, root_name=self.xml_root)
        return CONVERTERS[target].serialize(data)

    def convert_file(
        self,
        file_path: str,
        target: str,
        source: Optional[str] = None,
        save: bool = True,
    ) -> ConversionResult:
        """
        Convert a file, optionally writing the result next to the others
        in the output directory.

        Args:
            file_path: Input file.
            target: Target format id.
            source: Source format id; detected from the extension if omitted.
            save: If True, write <name><target extension> on success.

        Returns:
            The conversion result.
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        source = source or detect_format(file_path)
        if source is None:
            raise ValueError(
                f"Cannot detect the format of {file_path}\n"
                f"Pass the source format explicitly."
            )

        print(f"[{source.upper()}] Converting: {file_path} -> {target}")

        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()

        result = self.convert(source, target, text)
        if not result.success:
            return result

        out_path = None
        if save:
            os.makedirs(self.output_dir, exist_ok=True)
            out_path = os.path.join(self.output_dir, _output_name(file_path, target))
            with open(out_path, "w", encoding="utf-8") as f:
                f.write(result.data)
            print(f"[SAVED] {out_path}")

        if self.history is not None:
            entry_id = self.history.add(
                file_name=os.path.basename(file_path),
                operation=get_conversion_slug(source, target),
                operation_label=f"{FORMATS[source].label} to {FORMATS[target].label}",
                output_format=target,
            )
            if out_path:
                self.history.update_output_path(entry_id, out_path)

        return result

    def convert_directory(
        self, dir_path: str, target: str, save: bool = True
    ) -> list[tuple[str, ConversionResult]]:
        """Convert every recognised file in a directory to the target format."""
        results = []

        for filename in sorted(os.listdir(dir_path)):
            file_path = os.path.join(dir_path, filename)
            if not os.path.isfile(file_path):
                continue

            source = detect_format(file_path)
            if source is None or source == target:
                continue

            result = self.convert_file(file_path, target, source=source, save=save)
            if not result.success:
                print(f"[ERROR] Failed to convert {filename}: {result.error}")
            results.append((filename, result))

        converted = sum(1 for _, r in results if r.success)
        print(f"[DIR] {dir_path}: {converted} of {len(results)} files converted")
        return results

    @staticmethod
    def supported_formats() -> dict:
        """Return a dictionary of all supported formats and their extensions."""
        return {
            FORMATS[format_id].label: sorted(CONVERTERS[format_id].SUPPORTED_EXTENSIONS)
            for format_id in FORMAT_IDS
        }


def convert(source: str, target: str, text: str) -> ConversionResult:
    """Convert text with the default engine options."""
    return DataConverter().convert(source, target, text)


def _output_name(file_path: str, target: str) -> str:
    """Build the output filename from the source file and the target format."""
    basename = os.path.basename(file_path)
    name, _ = os.path.splitext(basename)
    safe_name = "".join(c if c.isalnum() or c in "-_ " else "_" for c in name)
    return f"{safe_name}{FORMATS[target].extension}"
