"""
Per-invocation query options

Everything a single run needs to filter, sort and reshape a table.
One instance is built per command invocation; nothing here is global.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class QueryOptions:
    """
    Options for one query run

    Attributes:
        where: WHERE expression text
        pattern: Whole-row substring filter
        hide: Comma-separated column indices to hide
        select: Comma-separated columns (names or indices) to show, in order
        sort: Column (name or index) to sort by
        descending: Sort in descending order
        limit: Display at most this many rows
        strict_where: Raise on an unparsable WHERE instead of ignoring it
    """

    where: Optional[str] = None
    pattern: Optional[str] = None
    hide: Optional[str] = None
    select: Optional[str] = None
    sort: Optional[str] = None
    descending: bool = False
    limit: Optional[int] = None
    strict_where: bool = False

    @property
    def is_filtering(self) -> bool:
        return bool(self.pattern) or bool(self.where)
