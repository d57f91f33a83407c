"""
Scan operator - yields the data rows of a loaded table

This is a leaf operator (has no child).
"""

from collections.abc import Iterator

from csvq.operators.base import Operator
from csvq.readers.base import Row, Table


class Scan(Operator):
    """Scan operator - the leaf of the operator chain"""

    def __init__(self, table: Table):
        super().__init__(child=None)
        self.table = table

    def __iter__(self) -> Iterator[Row]:
        yield from self.table.rows

    def __repr__(self) -> str:
        return f"Scan({self.table.row_count} rows)"
