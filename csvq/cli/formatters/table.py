"""
Rich table formatter for terminal output
"""

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from csvq.cli.formatters.base import BaseFormatter, flatten_whitespace
from csvq.core.query import QueryResult

# Cycled per column with --color
COLUMN_COLORS = [
    "cyan",
    "yellow",
    "magenta",
    "green",
    "blue",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "red",
]


class TableFormatter(BaseFormatter):
    """Format results as a box-drawn Rich table"""

    def format(self, result: QueryResult, **kwargs) -> str:
        """
        Format results as a Rich table

        Args:
            result: Query result
            **kwargs: Options like 'no_color', 'colors', 'zebra',
                'show_footer', 'width'

        Returns:
            Formatted table string
        """
        if not result.rows:
            return "No results found."

        console = Console(
            force_terminal=not kwargs.get("no_color", False),
            no_color=kwargs.get("no_color", False),
            width=kwargs.get("width"),
        )
        colors = kwargs.get("colors", False)

        table = Table(
            show_header=result.has_header,
            header_style="bold",
            box=box.SQUARE,
            row_styles=["", "on grey15"] if kwargs.get("zebra") else None,
        )

        labels = result.labels if result.has_header else result.keys()
        for i, label in enumerate(labels):
            style = COLUMN_COLORS[i % len(COLUMN_COLORS)] if colors else None
            table.add_column(Text(flatten_whitespace(label)), style=style, overflow="fold")

        for row in self.rows_as_text(result):
            table.add_row(*(Text(flatten_whitespace(v)) for v in row))

        with console.capture() as capture:
            console.print(table)
        output = capture.get()

        if kwargs.get("show_footer", True):
            count = len(result.rows)
            footer = f"{count} row{'s' if count != 1 else ''}"
            if result.filtered:
                footer += f" (matched {result.matched_rows} of {result.total_rows})"
            with console.capture() as capture:
                console.print(Text(footer, style="dim"))
            output += capture.get()

        return output.rstrip("\n")
