"""
Scrollable table viewer (Textual)

Used when a result is too wide to read as a printed table. Textual is
an optional dependency (`csvq[cli]`).
"""

import shutil
import sys
from typing import Optional

try:
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import DataTable, Footer, Header

    TEXTUAL_AVAILABLE = True
except ImportError:
    TEXTUAL_AVAILABLE = False
    App = None

from csvq.cli.formatters.base import cell_text
from csvq.core.query import QueryResult

# Auto-detection thresholds
MAX_PRINTED_COLUMNS = 10
NARROW_TERMINAL = 80
NARROW_MAX_COLUMNS = 5
LONG_VALUE = 50
BORDER_WIDTH = 3


def _estimated_width(result: QueryResult, sample: int = 5) -> int:
    """Rough printed width: widest label/cell per column plus borders"""
    head = result.rows[:sample]
    total = 0
    for i, label in enumerate(result.keys()):
        widest = max([len(label)] + [len(cell_text(row[i])) for row in head])
        total += widest + BORDER_WIDTH
    return total


def _has_long_values(result: QueryResult, sample: int = 10) -> bool:
    return any(len(cell_text(v)) > LONG_VALUE for row in result.rows[:sample] for v in row)


def should_use_interactive(
    result: QueryResult,
    force: bool = False,
    no_interactive: bool = False,
    output_file: Optional[str] = None,
    fmt: str = "table",
) -> bool:
    """
    Decide whether to open the viewer instead of printing

    Args:
        result: Query result to display
        force: --interactive was given
        no_interactive: --no-interactive was given
        output_file: --out-file target, if any
        fmt: Output format; only table output is ever replaced

    Returns:
        True if the viewer should be used
    """
    if force:
        return True
    if no_interactive or output_file or fmt != "table":
        return False
    if not sys.stdout.isatty() or not result.rows:
        return False

    terminal_width = shutil.get_terminal_size().columns
    num_cols = len(result.columns)

    if num_cols > MAX_PRINTED_COLUMNS:
        return True
    if terminal_width < NARROW_TERMINAL and num_cols > NARROW_MAX_COLUMNS:
        return True
    if _estimated_width(result) > terminal_width * 0.9:
        return True
    return _has_long_values(result)


if TEXTUAL_AVAILABLE:

    class TableApp(App):
        """Full-screen DataTable over a query result"""

        CSS = """
        DataTable {
            height: 100%;
        }
        """

        BINDINGS = [
            Binding("q", "quit", "Quit"),
            Binding("escape", "quit", "Quit", show=False),
            Binding("j", "cursor_down", "Down", show=False),
            Binding("k", "cursor_up", "Up", show=False),
            Binding("h", "cursor_left", "Left", show=False),
            Binding("l", "cursor_right", "Right", show=False),
        ]

        def __init__(self, result: QueryResult, title: str = "csvq", **kwargs):
            super().__init__(**kwargs)
            self.result = result
            self.title = title

        def compose(self) -> ComposeResult:
            yield Header()
            yield DataTable(zebra_stripes=True, cursor_type="row")
            yield Footer()

        def on_mount(self) -> None:
            table = self.query_one(DataTable)
            table.add_columns(*self.result.keys())
            table.add_rows([cell_text(v) for v in row] for row in self.result.rows)

            shown = len(self.result.rows)
            self.sub_title = f"{shown} of {self.result.total_rows} rows"

        def action_cursor_down(self) -> None:
            self.query_one(DataTable).action_cursor_down()

        def action_cursor_up(self) -> None:
            self.query_one(DataTable).action_cursor_up()

        def action_cursor_left(self) -> None:
            self.query_one(DataTable).action_cursor_left()

        def action_cursor_right(self) -> None:
            self.query_one(DataTable).action_cursor_right()

else:
    TableApp = None


def launch_interactive(result: QueryResult, title: str = "csvq") -> None:
    """
    Open the viewer and block until the user quits

    Raises:
        ImportError: If textual is not installed
    """
    if not TEXTUAL_AVAILABLE:
        raise ImportError("Interactive mode requires textual library. Install `csvq[cli]`")

    TableApp(result, title=title).run()
