"""
Column specifications: hide lists, select lists and single column references

Columns are referenced either by 0-based index or by header name.
Bad entries are reported with a warning and skipped.
"""

import warnings
from typing import List, Optional, Sequence

from csvq.where.resolver import ColumnNotFoundWarning, find_column_by_name


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def _as_index(token: str) -> Optional[int]:
    try:
        index = int(token)
    except ValueError:
        return None
    return index if index >= 0 else None


def parse_hidden_columns(value: Optional[str]) -> List[int]:
    """
    Parse a comma-separated list of column indices to hide

    Args:
        value: String like "0,2,5"

    Returns:
        Indices in the order given (duplicates removed)
    """
    hidden: List[int] = []
    for token in _split(value):
        index = _as_index(token)
        if index is None:
            warnings.warn(f"Invalid column index '{token}', skipping", UserWarning, stacklevel=2)
            continue
        if index not in hidden:
            hidden.append(index)
    return hidden


def resolve_column(token: str, header: Optional[Sequence[Optional[str]]]) -> Optional[int]:
    """
    Resolve one column reference (index or name)

    Returns:
        Column index, or None if it cannot be resolved
    """
    token = token.strip()
    index = _as_index(token)
    if index is not None:
        return index
    if header is None:
        return None
    found = find_column_by_name(header, token)
    return found if found >= 0 else None


def parse_column_selection(
    value: Optional[str], header: Optional[Sequence[Optional[str]]]
) -> List[int]:
    """
    Parse a column selection such as "name,age,email" or "0,2,1"

    The result gives the display order. Names need a header.

    Returns:
        Selected column indices; empty when nothing could be resolved
    """
    selection: List[int] = []
    for token in _split(value):
        index = resolve_column(token, header)
        if index is not None:
            selection.append(index)
        elif header is None:
            warnings.warn(
                f"Cannot resolve column name '{token}' without header",
                ColumnNotFoundWarning,
                stacklevel=2,
            )
        else:
            warnings.warn(f"Column '{token}' not found, skipping", ColumnNotFoundWarning, stacklevel=2)
    return selection


def visible_columns(width: int, hidden: Sequence[int] = (), selection: Sequence[int] = ()) -> List[int]:
    """
    Compute the displayed column indices

    A selection, when present, wins over the hide list.
    """
    if selection:
        return list(selection)
    hidden_set = set(hidden)
    return [i for i in range(width) if i not in hidden_set]
