"""
csvq - Query and format delimited text tables from the command line

This package loads CSV/TSV tables, filters them with a small WHERE
expression language, sorts and reshapes them, and renders the result as
a table, CSV, TSV, JSON, Markdown, HTML or spreadsheet XML.
"""

__version__ = "0.1.0"

# Main API
from csvq.core.options import QueryOptions
from csvq.core.query import Query, query

__all__ = ["__version__", "query", "Query", "QueryOptions"]
