"""
Base reader interface and the in-memory table model

Readers turn a delimited text source into a Table: an optional header
row plus data rows, each row an ordered list of text fields.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

Row = List[Optional[str]]


class EmptyTableError(ValueError):
    """Raised when a source contains no rows at all"""

    pass


@dataclass
class Table:
    """
    A loaded table

    header is None when the source has no header row (or it was skipped).
    Rows are never modified after loading.
    """

    header: Optional[Row]
    rows: List[Row] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        """Number of data rows (header excluded)"""
        return len(self.rows)

    @property
    def has_header(self) -> bool:
        return self.header is not None

    @property
    def width(self) -> int:
        """Width of the widest row, header included"""
        widths = [len(r) for r in self.rows]
        if self.header is not None:
            widths.append(len(self.header))
        return max(widths, default=0)


class BaseReader:
    """
    Base class for all table readers

    Readers are responsible for:
    1. Reading raw rows from a source (file, URL)
    2. Yielding them lazily as lists of text fields
    3. Splitting off the header row according to their configuration
    """

    def read_lazy(self) -> Iterator[Row]:
        """
        Yield raw rows (header included) as lists of strings

        Yields:
            One row of text fields

        Example:
            ['Alice', '30', 'NYC']
        """
        raise NotImplementedError("Subclasses must implement read_lazy()")

    def read(self) -> Table:
        """Materialize the source into a Table"""
        raise NotImplementedError("Subclasses must implement read()")

    def __iter__(self):
        """Allow readers to be used directly in for loops"""
        return self.read_lazy()
