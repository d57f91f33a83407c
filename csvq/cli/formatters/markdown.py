"""
Markdown formatter for documentation and sharing
"""

from csvq.cli.formatters.base import BaseFormatter, flatten_whitespace
from csvq.core.query import QueryResult


def _escape(text: str) -> str:
    return flatten_whitespace(text).replace("|", "\\|")


class MarkdownFormatter(BaseFormatter):
    """Format results as a Markdown table"""

    def format(self, result: QueryResult, **kwargs) -> str:
        """
        Format results as a Markdown table

        Args:
            result: Query result
            **kwargs: Options like 'show_footer', 'align'

        Returns:
            Markdown formatted table string
        """
        columns = result.keys()

        header = "| " + " | ".join(_escape(c) for c in columns) + " |"

        # Default alignment is none, can be 'left', 'center', or 'right'
        align = kwargs.get("align")
        marker = {"left": ":---", "center": ":---:", "right": "---:"}.get(align, "---")
        separator = "| " + " | ".join(marker for _ in columns) + " |"

        data_rows = [
            "| " + " | ".join(_escape(v) for v in row) + " |"
            for row in self.rows_as_text(result)
        ]

        output = "\n".join([header, separator] + data_rows)

        if result.filtered and kwargs.get("show_footer", True):
            output += f"\n\nFiltered: {result.matched_rows}/{result.total_rows} rows matched"

        return output
