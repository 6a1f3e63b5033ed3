"""
HTML Table Converter

Reads the first <table> of an HTML document with BeautifulSoup and
writes data back out as a plain table with thead/tbody sections.
"""

import os
from typing import Any

from bs4 import BeautifulSoup

from .common import (
    ConversionError,
    collect_all_keys,
    normalize_to_array,
    sanitize,
    validate_input,
)

HTML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}


class HTMLConverter:
    """Reads and writes HTML tables."""

    FORMAT_ID = "html"
    SUPPORTED_EXTENSIONS = {".html", ".htm"}

    @staticmethod
    def can_handle(file_path: str) -> bool:
        _, ext = os.path.splitext(file_path.lower())
        return ext in HTMLConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def parse(text: str) -> list[dict]:
        validate_input(text, "HTML")

        soup = BeautifulSoup(text, "html.parser")
        table = soup.find("table")

        if table is None:
            raise ConversionError(
                "No table found in HTML", "Input must contain a <table> element"
            )

        thead = table.find("thead")
        header_row = (thead.find("tr") if thead else None) or table.find("tr")
        headers = []
        if header_row is not None:
            headers = [
                cell.get_text(strip=True)
                for cell in header_row.find_all(["th", "td"])
            ]

        if not headers:
            raise ConversionError("No table headers found")

        body = table.find("tbody") or table
        rows = []

        for idx, tr in enumerate(body.find_all("tr")):
            # Without a thead the first row is the header row
            if idx == 0 and thead is None:
                continue

            cells = tr.find_all("td")
            if not cells:
                continue

            row = {}
            for i, cell in enumerate(cells):
                header = headers[i] if i < len(headers) and headers[i] else f"column_{i + 1}"
                row[header] = cell.get_text(strip=True)
            rows.append(row)

        if not rows:
            raise ConversionError("HTML table has no data rows")

        return rows

    @staticmethod
    def serialize(data: Any) -> str:
        rows = normalize_to_array(data)
        keys = collect_all_keys(rows)

        if not keys:
            return "<table></table>"

        lines = ['<table class="data-table">', "  <thead>", "    <tr>"]
        lines.extend(f"      <th>{escape_html(key)}</th>" for key in keys)
        lines.extend(["    </tr>", "  </thead>", "  <tbody>"])

        for row in rows:
            lines.append("    <tr>")
            lines.extend(
                f"      <td>{escape_html(sanitize(row.get(key)))}</td>" for key in keys
            )
            lines.append("    </tr>")

        lines.extend(["  </tbody>", "</table>"])
        return "\n".join(lines)


def escape_html(text: str) -> str:
    return "".join(HTML_ENTITIES.get(c, c) for c in text)
