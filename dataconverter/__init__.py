"""
Data Converter - Structured Data Format Conversion

Converts documents between JSON, CSV, XML, YAML, SQL, Markdown tables
and HTML tables through one shared in-memory representation, and ships
a few document tools (PDF dark mode, PDF flattening, image watermarks).
"""

__version__ = "1.0.0"

from .core import ConversionResult, DataConverter, convert

__all__ = ["ConversionResult", "DataConverter", "convert", "__version__"]
