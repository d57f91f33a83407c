"""
HTML formatter - renders results as a standalone <table> element
"""

from html import escape

from csvq.cli.formatters.base import BaseFormatter
from csvq.core.query import QueryResult


class HTMLFormatter(BaseFormatter):
    """Format results as an HTML table"""

    def format(self, result: QueryResult, **kwargs) -> str:
        """
        Format results as HTML

        Args:
            result: Query result
            **kwargs: Options like 'indent' (spaces per nesting level)

        Returns:
            HTML string
        """
        pad = " " * kwargs.get("indent", 2)
        lines = ["<table>"]

        if result.has_header:
            lines.append(f"{pad}<thead>")
            lines.append(f"{pad * 2}<tr>")
            lines.extend(f"{pad * 3}<th>{escape(label)}</th>" for label in result.labels)
            lines.append(f"{pad * 2}</tr>")
            lines.append(f"{pad}</thead>")

        lines.append(f"{pad}<tbody>")
        for row in self.rows_as_text(result):
            lines.append(f"{pad * 2}<tr>")
            lines.extend(f"{pad * 3}<td>{escape(value)}</td>" for value in row)
            lines.append(f"{pad * 2}</tr>")
        lines.append(f"{pad}</tbody>")

        lines.append("</table>")
        return "\n".join(lines)
