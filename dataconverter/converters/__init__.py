from .common import ConversionError
from .json_converter import JSONConverter
from .csv_converter import CSVConverter
from .xml_converter import XMLConverter
from .yaml_converter import YAMLConverter
from .sql_converter import SQLConverter
from .markdown_converter import MarkdownConverter
from .html_converter import HTMLConverter

CONVERTERS = {
    converter.FORMAT_ID: converter
    for converter in (
        JSONConverter,
        CSVConverter,
        XMLConverter,
        YAMLConverter,
        SQLConverter,
        MarkdownConverter,
        HTMLConverter,
    )
}

__all__ = [
    "ConversionError",
    "CONVERTERS",
    "JSONConverter",
    "CSVConverter",
    "XMLConverter",
    "YAMLConverter",
    "SQLConverter",
    "MarkdownConverter",
    "HTMLConverter",
]
