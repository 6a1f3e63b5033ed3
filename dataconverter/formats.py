"""
Format registry.

Static descriptors for every supported data format, plus the helpers that
derive conversion pairs and URL slugs from them.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .converters import CONVERTERS


@dataclass(frozen=True)
class DataFormat:
    """Static metadata for one supported data format."""
    id: str
    label: str
    extension: str
    mime_type: str
    description: str
    placeholder: str
    color: str  # Badge color, hex


FORMATS: dict[str, DataFormat] = {
    "json": DataFormat(
        id="json",
        label="JSON",
        extension=".json",
        mime_type="application/json",
        description="JavaScript Object Notation - lightweight data interchange format",
        placeholder='{\n  "name": "John",\n  "age": 30,\n  "city": "Paris"\n}',
        color="#eab308",
    ),
    "csv": DataFormat(
        id="csv",
        label="CSV",
        extension=".csv",
        mime_type="text/csv",
        description="Comma-Separated Values - simple tabular format",
        placeholder="name,age,city\nJohn,30,Paris\nJane,25,Lyon",
        color="#22c55e",
    ),
    "xml": DataFormat(
        id="xml",
        label="XML",
        extension=".xml",
        mime_type="application/xml",
        description="eXtensible Markup Language - structured markup format",
        placeholder=(
            '<?xml version="1.0"?>\n<users>\n  <user>\n    <name>John</name>\n'
            "    <age>30</age>\n  </user>\n</users>"
        ),
        color="#f97316",
    ),
    "yaml": DataFormat(
        id="yaml",
        label="YAML",
        extension=".yaml",
        mime_type="text/yaml",
        description="YAML Ain't Markup Language - human-readable configuration format",
        placeholder="users:\n  - name: John\n    age: 30\n    city: Paris",
        color="#a855f7",
    ),
    "sql": DataFormat(
        id="sql",
        label="SQL",
        extension=".sql",
        mime_type="application/sql",
        description="Structured Query Language - INSERT statements for databases",
        placeholder=(
            "INSERT INTO users (name, age, city) VALUES\n"
            "('John', 30, 'Paris'),\n('Jane', 25, 'Lyon');"
        ),
        color="#3b82f6",
    ),
    "markdown": DataFormat(
        id="markdown",
        label="Markdown",
        extension=".md",
        mime_type="text/markdown",
        description="Markdown tables - readable plain-text tables for documentation",
        placeholder="| name | age | city  |\n| ---- | --- | ----- |\n| John | 30  | Paris |",
        color="#52525b",
    ),
    "html": DataFormat(
        id="html",
        label="HTML",
        extension=".html",
        mime_type="text/html",
        description="HTML tables - web page table markup",
        placeholder=(
            "<table>\n  <tr><th>name</th><th>age</th></tr>\n"
            "  <tr><td>John</td><td>30</td></tr>\n</table>"
        ),
        color="#ef4444",
    ),
}

# Display order
FORMAT_IDS = list(FORMATS)

SLUG_PATTERN = re.compile(r"^([a-z]+)-to-([a-z]+)$")

# Translated labels and descriptions. Missing entries fall back to the
# descriptor's own text.
FORMAT_TRANSLATIONS: dict[str, dict[str, dict[str, str]]] = {
    "fr": {
        "json": {"description": "JavaScript Object Notation - format léger d'échange de données"},
        "csv": {"description": "Comma-Separated Values - format tabulaire simple"},
        "xml": {"description": "eXtensible Markup Language - format de balisage structuré"},
        "yaml": {"description": "YAML Ain't Markup Language - format lisible pour la configuration"},
        "sql": {"description": "Structured Query Language - instructions INSERT pour bases de données"},
        "markdown": {"description": "Tableaux Markdown - tableaux en texte brut pour la documentation"},
        "html": {"label": "HTML", "description": "Tableaux HTML - balisage de tableau pour le web"},
    },
    "es": {
        "json": {"description": "JavaScript Object Notation - formato ligero de intercambio de datos"},
        "csv": {"description": "Valores separados por comas - formato tabular simple"},
        "xml": {"description": "eXtensible Markup Language - formato de marcado estructurado"},
        "yaml": {"description": "YAML Ain't Markup Language - formato legible para configuración"},
        "sql": {"description": "Structured Query Language - sentencias INSERT para bases de datos"},
        "markdown": {"description": "Tablas Markdown - tablas de texto plano para documentación"},
    },
    "de": {
        "json": {"description": "JavaScript Object Notation - leichtgewichtiges Datenaustauschformat"},
        "csv": {"description": "Kommagetrennte Werte - einfaches Tabellenformat"},
        "xml": {"description": "eXtensible Markup Language - strukturiertes Auszeichnungsformat"},
        "yaml": {"description": "YAML Ain't Markup Language - lesbares Konfigurationsformat"},
        "sql": {"description": "Structured Query Language - INSERT-Anweisungen für Datenbanken"},
        "markdown": {"label": "Markdown-Tabelle"},
        "html": {"label": "HTML-Tabelle"},
    },
    "pt": {
        "json": {"description": "JavaScript Object Notation - formato leve de troca de dados"},
        "csv": {"description": "Valores separados por vírgula - formato tabular simples"},
        "xml": {"description": "eXtensible Markup Language - formato de marcação estruturado"},
        "yaml": {"description": "YAML Ain't Markup Language - formato legível para configuração"},
        "sql": {"description": "Structured Query Language - instruções INSERT para bancos de dados"},
    },
}


def get_format(format_id: str) -> Optional[DataFormat]:
    return FORMATS.get(format_id)


def get_all_conversions() -> list[tuple[str, str]]:
    """Every (source, target) pair, identity pairs excluded."""
    return [
        (source, target)
        for source in FORMAT_IDS
        for target in FORMAT_IDS
        if source != target
    ]


def is_valid_conversion(source: str, target: str) -> bool:
    return source != target and source in FORMATS and target in FORMATS


def get_conversion_slug(source: str, target: str) -> str:
    return f"{source}-to-{target}"


def parse_conversion_slug(slug: str) -> Optional[tuple[str, str]]:
    """
    Parse a "source-to-target" slug.

    Returns:
        (source, target), or None if the slug is malformed or names an
        invalid pair.
    """
    match = SLUG_PATTERN.match(slug)
    if not match:
        return None

    source, target = match.groups()
    if not is_valid_conversion(source, target):
        return None

    return source, target


def detect_format(file_path: str) -> Optional[str]:
    """Guess a format id from a file extension."""
    for format_id, converter in CONVERTERS.items():
        if converter.can_handle(file_path):
            return format_id
    return None


def _translated(format_id: str, locale: str, field: str) -> Optional[str]:
    return FORMAT_TRANSLATIONS.get(locale, {}).get(format_id, {}).get(field)


def get_format_label(format_id: str, locale: str = "en") -> str:
    """Localized display label, falling back to the default label."""
    fmt = FORMATS.get(format_id)
    if fmt is None:
        raise KeyError(f"Unknown format: {format_id}")
    return _translated(format_id, locale, "label") or fmt.label


def get_format_description(format_id: str, locale: str = "en") -> str:
    """Localized description, falling back to the default description."""
    fmt = FORMATS.get(format_id)
    if fmt is None:
        raise KeyError(f"Unknown format: {format_id}")
    return _translated(format_id, locale, "description") or fmt.description
