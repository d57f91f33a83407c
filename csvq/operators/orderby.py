"""
OrderBy Operator

Sorts data rows by one column, ascending or descending.
"""

from functools import cmp_to_key
from typing import Iterator

from csvq.operators.base import Operator
from csvq.readers.base import Row
from csvq.where.evaluator import to_number


def _cell(row: Row, idx: int) -> str:
    if idx < len(row) and row[idx] is not None:
        return row[idx]
    return ""


def compare_values(left: str, right: str) -> int:
    """
    Compare two cells

    Numbers compare numerically when both cells are non-empty numbers;
    anything else falls back to case-insensitive text comparison.
    """
    a = to_number(left) if left else None
    b = to_number(right) if right else None
    if a is None or b is None:
        a, b = left.casefold(), right.casefold()
    return (a > b) - (a < b)


class OrderByOperator(Operator):
    """
    ORDER BY operator

    Sorts all input rows by a single column. The sort is stable, so rows
    with equal keys keep their file order.

    Note: This operator materializes all rows in memory (not lazy).
    """

    def __init__(self, source: Operator, column_index: int, descending: bool = False):
        """
        Initialize OrderBy operator

        Args:
            source: Source operator
            column_index: Index of the column to sort by
            descending: Sort in descending order
        """
        super().__init__(source)
        self.column_index = column_index
        self.descending = descending

    def __iter__(self) -> Iterator[Row]:
        rows = list(self.child)
        idx = self.column_index
        key = cmp_to_key(lambda r1, r2: compare_values(_cell(r1, idx), _cell(r2, idx)))
        yield from sorted(rows, key=key, reverse=self.descending)

    def __repr__(self) -> str:
        direction = "DESC" if self.descending else "ASC"
        return f"OrderBy(#{self.column_index} {direction})"
