"""
CSV Reader for delimited text files

Uses Python's built-in csv module for simplicity and zero dependencies.
Fields are kept as text; no type inference is done at read time.
"""

import csv
from pathlib import Path
from typing import Iterator, Optional

from csvq.readers.base import BaseReader, EmptyTableError, Row, Table


def normalize_delimiter(delimiter: Optional[str], default: str = ",") -> str:
    """
    Turn a command-line delimiter argument into a single character

    '\\t' (backslash-t as typed in a shell) and 'tab' mean a tab;
    otherwise the first character is used.
    """
    if not delimiter:
        return default
    if delimiter in ("\\t", "tab"):
        return "\t"
    return delimiter[0]


class CSVReader(BaseReader):
    """
    Delimited text reader

    Features:
    - Configurable delimiter and comment character
    - Header / skip-header handling
    - Blank lines and comment lines are ignored
    """

    def __init__(
        self,
        path: str,
        delimiter: str = ",",
        comment: Optional[str] = "#",
        has_header: bool = True,
        skip_header: bool = False,
        encoding: str = "utf-8",
    ):
        """
        Initialize CSV reader

        Args:
            path: Path to the file
            delimiter: Field delimiter (default: comma)
            comment: Lines starting with this character are skipped (None disables)
            has_header: Treat the first row as the header
            skip_header: Drop the first row entirely; implies no header
            encoding: File encoding (default: utf-8)
        """
        self.path = Path(path)
        self.delimiter = normalize_delimiter(delimiter)
        self.comment = comment[0] if comment else None
        self.skip_header = skip_header
        self.has_header = has_header and not skip_header
        self.encoding = encoding

        if not self.path.exists():
            raise FileNotFoundError(f"CSV file not found: {path}")

    def _lines(self, f) -> Iterator[str]:
        for line in f:
            if self.comment and line.startswith(self.comment):
                continue
            yield line

    def read_lazy(self) -> Iterator[Row]:
        """
        Lazy iterator over raw rows

        Yields every non-blank, non-comment row, header included.
        """
        with open(self.path, encoding=self.encoding, newline="") as f:
            reader = csv.reader(self._lines(f), delimiter=self.delimiter)
            try:
                for raw_row in reader:
                    if not raw_row:
                        continue
                    yield raw_row
            except csv.Error as e:
                raise ValueError(
                    f"Failed to parse {self.path} near line {reader.line_num}: {e}. "
                    "Use --delimiter='\\t' for tab-separated files"
                ) from e

    def read(self) -> Table:
        """
        Read the whole file into a Table

        Raises:
            EmptyTableError: If the file has no rows
        """
        rows = list(self.read_lazy())
        if not rows:
            raise EmptyTableError(f"No rows in CSV file: {self.path}")

        if self.skip_header:
            return Table(header=None, rows=rows[1:])
        if self.has_header:
            return Table(header=rows[0], rows=rows[1:])
        return Table(header=None, rows=rows)

    def __repr__(self) -> str:
        return f"CSVReader({str(self.path)!r}, delimiter={self.delimiter!r})"
