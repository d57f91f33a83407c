"""
Project operator - implements column hiding and selection

Maps each row onto the list of visible column indices.
"""

from typing import Iterator, List

from csvq.operators.base import Operator
from csvq.readers.base import Row


def project_row(row: Row, columns: List[int]) -> Row:
    """Pick columns from a row in order; missing cells become None"""
    return [row[i] if i < len(row) else None for i in columns]


class Project(Operator):
    """
    Project operator - yields only the visible columns, in display order
    """

    def __init__(self, child: Operator, columns: List[int]):
        """
        Initialize project operator

        Args:
            child: Child operator to pull rows from
            columns: Column indices to keep, in output order
        """
        super().__init__(child)
        self.columns = columns

    def __iter__(self) -> Iterator[Row]:
        for row in self.child:
            yield project_row(row, self.columns)

    def __repr__(self) -> str:
        col_str = ", ".join(f"#{i}" for i in self.columns)
        return f"Project({col_str})"
