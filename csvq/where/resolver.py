"""
Column-name resolution

Binds the column names used in a WHERE tree to positions in the
header row. Resolution runs once the header is known; conditions whose
column cannot be found stay unresolved and never match.
"""

import warnings
from typing import Optional, Sequence

from csvq.where.ast_nodes import Node, iter_conditions


class ColumnNotFoundWarning(UserWarning):
    """A column referenced by name does not exist in the header"""

    pass


def find_column_by_name(header: Optional[Sequence[Optional[str]]], name: str) -> int:
    """
    Find a column index by name in the header row

    Matching is case-insensitive and ignores whitespace around the header
    cell. Header names need not be unique; the first match wins.

    Args:
        header: Header row (may be None)
        name: Column name to search for

    Returns:
        Column index, or -1 if not found
    """
    if header is None or name is None:
        return -1

    wanted = name.casefold()
    for i, cell in enumerate(header):
        if cell is None:
            continue
        if cell.strip().casefold() == wanted:
            return i
    return -1


def resolve(root: Optional[Node], header: Optional[Sequence[Optional[str]]]) -> None:
    """
    Resolve column indices for every unresolved condition in the tree

    Already-resolved conditions are left alone, so calling this twice is
    harmless. Without a header nothing can be resolved.

    Args:
        root: Root of the expression tree (or None)
        header: Header row, or None when the table has no header
    """
    if root is None or header is None:
        return

    for condition in iter_conditions(root):
        if condition.is_resolved:
            continue

        idx = find_column_by_name(header, condition.column_name)
        if idx >= 0:
            condition.column_index = idx
        else:
            warnings.warn(
                f"Column '{condition.column_name}' in where clause not found in header",
                ColumnNotFoundWarning,
                stacklevel=2,
            )
