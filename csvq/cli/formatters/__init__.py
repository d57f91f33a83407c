"""
Output formatters for CLI

Available formatters:
- TableFormatter: Box-drawn Rich tables
- CSVFormatter / TSVFormatter: Unix-friendly delimited text
- JSONFormatter: Machine-readable JSON
- MarkdownFormatter: GitHub Flavored Markdown tables
- HTMLFormatter: HTML <table>
- XMLFormatter: SpreadsheetML 2003 workbook
"""

from csvq.cli.formatters.base import BaseFormatter
from csvq.cli.formatters.csv import CSVFormatter, TSVFormatter
from csvq.cli.formatters.html import HTMLFormatter
from csvq.cli.formatters.json import JSONFormatter
from csvq.cli.formatters.markdown import MarkdownFormatter
from csvq.cli.formatters.table import TableFormatter
from csvq.cli.formatters.xml import XMLFormatter

__all__ = [
    "BaseFormatter",
    "TableFormatter",
    "CSVFormatter",
    "TSVFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "HTMLFormatter",
    "XMLFormatter",
    "FORMATS",
    "get_formatter",
    "format_for_path",
]

FORMATTERS = {
    "table": TableFormatter,
    "csv": CSVFormatter,
    "tsv": TSVFormatter,
    "json": JSONFormatter,
    "markdown": MarkdownFormatter,
    "html": HTMLFormatter,
    "xml": XMLFormatter,
}

ALIASES = {"md": "markdown", "htm": "html"}

# Names accepted on the command line
FORMATS = list(FORMATTERS) + list(ALIASES)

EXTENSIONS = {
    ".csv": "csv",
    ".tsv": "tsv",
    ".json": "json",
    ".md": "markdown",
    ".markdown": "markdown",
    ".html": "html",
    ".htm": "html",
    ".xml": "xml",
}


def get_formatter(format_name: str) -> BaseFormatter:
    """
    Get formatter by name

    Args:
        format_name: Name of formatter (table, csv, tsv, json, markdown/md, html, xml)

    Returns:
        Formatter instance

    Raises:
        ValueError: If formatter not found
    """
    name = format_name.lower()
    name = ALIASES.get(name, name)

    if name not in FORMATTERS:
        available = ", ".join(FORMATS)
        raise ValueError(f"Unknown format: {format_name}. Available formats: {available}")

    return FORMATTERS[name]()


def format_for_path(path: str, default: str = "table") -> str:
    """Infer an output format from a file extension"""
    for ext, name in EXTENSIONS.items():
        if path.lower().endswith(ext):
            return name
    return default
