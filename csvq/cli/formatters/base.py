"""
Base formatter interface for CLI output

All formatters must implement the format() method.
"""

from typing import List, Optional

from csvq.core.query import QueryResult


def cell_text(value: Optional[str]) -> str:
    """Missing cells render as empty text"""
    return "" if value is None else value


def flatten_whitespace(text: str) -> str:
    """Replace tabs and line breaks so a value stays on one line"""
    return text.replace("\t", " ").replace("\r", " ").replace("\n", " ")


class BaseFormatter:
    """Base class for all output formatters"""

    def format(self, result: QueryResult, **kwargs) -> str:
        """
        Format query results for output

        Args:
            result: Query result (labels, projected rows, statistics)
            **kwargs: Additional formatter-specific options

        Returns:
            Formatted string ready for output
        """
        raise NotImplementedError("Formatters must implement format() method")

    def rows_as_text(self, result: QueryResult) -> List[List[str]]:
        return [[cell_text(v) for v in row] for row in result.rows]

    def get_name(self) -> str:
        """Get formatter name"""
        return self.__class__.__name__.replace("Formatter", "").lower()
