"""
Base operator class for Volcano-style row pipelines

The Volcano model uses pull-based execution where each operator
pulls rows from its child operator on demand.
"""

from collections.abc import Iterator
from typing import List, Optional

from csvq.readers.base import Row


class Operator:
    """
    Base class for all row operators

    Operators form a chain where:
    - The leaf operator (Scan) yields the table's data rows
    - Inner operators (OrderBy, Filter, Project, Limit) transform them
    - The caller pulls from the last operator
    """

    def __init__(self, child: Optional["Operator"] = None):
        """
        Initialize operator

        Args:
            child: Child operator to pull rows from (None for leaf operators)
        """
        self.child = child

    def __iter__(self) -> Iterator[Row]:
        """
        Execute operator and yield rows

        Yields:
            Rows as lists of text fields
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement __iter__()")

    def explain(self, indent: int = 0) -> List[str]:
        """Describe this operator and its children, one per line"""
        lines = [" " * indent + repr(self)]
        if self.child is not None:
            lines.extend(self.child.explain(indent + 2))
        return lines

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
