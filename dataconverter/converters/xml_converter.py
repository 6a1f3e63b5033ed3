"""
XML Converter

Maps an XML element tree onto nested mappings and back.

Reading rules:
- attributes become "@name" keys
- text next to attributes becomes "#text"
- repeated child elements collapse into a list
- text-only elements become scalars (numbers and booleans are coerced)

Writing mirrors the rules above. A list stored under key "users" is
written as repeated <user> elements, so the plural key name is lost
on a round trip.
"""

import os
import re
import xml.etree.ElementTree as ET
from typing import Any
from xml.sax.saxutils import escape, quoteattr

from .common import ConversionError, sanitize, scalar_text, validate_input

NUMBER_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")
UNSAFE_TAG_CHARS = re.compile(r"[^a-zA-Z0-9_-]")

XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


class XMLConverter:
    """Reads and writes XML documents."""

    FORMAT_ID = "xml"
    SUPPORTED_EXTENSIONS = {".xml"}
    DEFAULT_ROOT = "data"

    @staticmethod
    def can_handle(file_path: str) -> bool:
        _, ext = os.path.splitext(file_path.lower())
        return ext in XMLConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def parse(text: str) -> Any:
        validate_input(text, "XML")
        try:
            root = ET.fromstring(text.strip())
        except ET.ParseError as e:
            raise ConversionError("Invalid XML syntax", str(e)[:200]) from e
        return _element_to_value(root)

    @staticmethod
    def serialize(data: Any, root_name: str = DEFAULT_ROOT) -> str:
        lines = ['<?xml version="1.0" encoding="UTF-8"?>']
        if isinstance(data, list):
            root = safe_tag_name(root_name)
            if data:
                lines.append(f"<{root}>")
                lines.extend(_value_to_xml(item, "item", 1) for item in data)
                lines.append(f"</{root}>")
            else:
                lines.append(f"<{root}/>")
        else:
            lines.append(_value_to_xml(data, root_name, 0))
        return "\n".join(lines)


def safe_tag_name(name: str) -> str:
    """Make an arbitrary key usable as an element name."""
    tag = UNSAFE_TAG_CHARS.sub("_", str(name))
    if not tag or not (tag[0].isalpha() or tag[0] == "_"):
        tag = f"_{tag}"
    return tag


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def _coerce_text(text: str) -> Any:
    if NUMBER_PATTERN.match(text):
        return float(text) if "." in text else int(text)
    if text == "true":
        return True
    if text == "false":
        return False
    return text


def _element_to_value(element: ET.Element) -> Any:
    result = {}

    for name, value in element.attrib.items():
        result[f"@{_local_name(name)}"] = value

    children = list(element)
    text_parts = [(element.text or "").strip()]
    text_parts.extend((child.tail or "").strip() for child in children)
    text = "".join(part for part in text_parts if part)

    if not children and text:
        if not result:
            return _coerce_text(text)
        result["#text"] = text
        return result

    for child in children:
        name = _local_name(child.tag)
        value = _element_to_value(child)
        if name in result:
            existing = result[name]
            if isinstance(existing, list):
                existing.append(value)
            else:
                result[name] = [existing, value]
        else:
            result[name] = value

    return result if result else ""


def _value_to_xml(data: Any, tag_name: str, indent: int) -> str:
    spaces = "  " * indent
    tag = safe_tag_name(tag_name)

    if data is None:
        return f"{spaces}<{tag}/>"

    if isinstance(data, list):
        item_name = tag[:-1] if tag.endswith("s") and len(tag) > 1 else "item"
        return "\n".join(_value_to_xml(item, item_name, indent) for item in data)

    if not isinstance(data, dict):
        return f"{spaces}<{tag}>{escape(scalar_text(data), XML_ENTITIES)}</{tag}>"

    attrs = "".join(
        f" {safe_tag_name(key[1:])}={quoteattr(scalar_text(value))}"
        for key, value in data.items()
        if key.startswith("@") and not isinstance(value, (dict, list))
    )
    text = data.get("#text")
    entries = [
        (key, value) for key, value in data.items()
        if not key.startswith("@") and key != "#text"
    ]

    if not entries:
        if text is None:
            return f"{spaces}<{tag}{attrs}/>"
        return f"{spaces}<{tag}{attrs}>{escape(sanitize(text), XML_ENTITIES)}</{tag}>"

    lines = [f"{spaces}<{tag}{attrs}>"]
    if text is not None:
        lines.append(f"{spaces}  {escape(sanitize(text), XML_ENTITIES)}")
    # Empty lists produce no elements at all
    children = [_value_to_xml(value, key, indent + 1) for key, value in entries]
    lines.extend(child for child in children if child)
    lines.append(f"{spaces}</{tag}>")
    return "\n".join(lines)
