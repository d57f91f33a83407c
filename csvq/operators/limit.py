"""
Limit operator - caps the number of displayed rows
"""

from collections.abc import Iterator
from itertools import islice

from csvq.operators.base import Operator
from csvq.readers.base import Row


class Limit(Operator):
    """
    Yields the first N rows of its child

    Pulling stops after the N-th row, so nothing further upstream runs.
    """

    def __init__(self, child: Operator, limit: int):
        super().__init__(child)
        self.limit = max(limit, 0)

    def __iter__(self) -> Iterator[Row]:
        return islice(iter(self.child), self.limit)

    def __repr__(self) -> str:
        return f"Limit({self.limit})"
