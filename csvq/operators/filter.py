"""
Filter operator - implements row filtering

Combines the whole-row substring filter with the WHERE expression.
"""

from collections.abc import Iterator
from typing import List, Optional

from csvq.operators.base import Operator
from csvq.readers.base import Row
from csvq.where.ast_nodes import WhereFilter
from csvq.where.evaluator import matches


def row_contains(row: Row, pattern: Optional[str]) -> bool:
    """
    Check if any field of the row contains pattern (case-insensitive)

    An empty or missing pattern matches every row.
    """
    if not pattern:
        return True

    needle = pattern.casefold()
    return any(field is not None and needle in field.casefold() for field in row)


class Filter(Operator):
    """
    Filter operator - keeps rows that pass both filters

    The substring pattern is checked first; the WHERE tree is only
    evaluated for rows that contain the pattern.
    """

    def __init__(
        self,
        child: Operator,
        where: Optional[WhereFilter] = None,
        pattern: Optional[str] = None,
    ):
        """
        Initialize filter operator

        Args:
            child: Child operator to pull rows from
            where: Parsed (and resolved) WHERE filter, or None
            pattern: Substring that must appear in some field, or None
        """
        super().__init__(child)
        self.where = where
        self.pattern = pattern

    def __iter__(self) -> Iterator[Row]:
        for row in self.child:
            if self._matches(row):
                yield row

    def _matches(self, row: Row) -> bool:
        return row_contains(row, self.pattern) and matches(row, self.where)

    def explain(self, indent: int = 0) -> List[str]:
        lines = [" " * indent + repr(self)]
        if self.where is not None:
            lines.extend(self.where.explain(indent + 4))
        lines.extend(self.child.explain(indent + 2))
        return lines

    def __repr__(self) -> str:
        parts = []
        if self.pattern:
            parts.append(f"contains {self.pattern!r}")
        if self.where is not None:
            parts.append(f"where {self.where!r}")
        return f"Filter({', '.join(parts)})"
