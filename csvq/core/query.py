"""
Main Query API - user-facing interface for csvq

Loads a table, then filters, sorts and reshapes it according to a
QueryOptions instance.

Example:
    >>> from csvq import query
    >>> result = query("data.csv", QueryOptions(where="age > 25")).execute()
    >>> for row in result:
    ...     print(row)
"""

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from csvq.core.columns import parse_column_selection, parse_hidden_columns, resolve_column, visible_columns
from csvq.core.options import QueryOptions
from csvq.operators.base import Operator
from csvq.operators.filter import Filter
from csvq.operators.limit import Limit
from csvq.operators.orderby import OrderByOperator
from csvq.operators.project import Project
from csvq.operators.scan import Scan
from csvq.readers.base import BaseReader, Row, Table
from csvq.readers.csv_reader import CSVReader
from csvq.readers.http_reader import HTTPReader, is_url
from csvq.where.ast_nodes import WhereFilter
from csvq.where.parser import ParseError, parse
from csvq.where.resolver import resolve

TAB_SEPARATED_SUFFIXES = (".tsv", ".tab")


class WhereIgnoredWarning(UserWarning):
    """The WHERE clause could not be used and filtering was skipped"""

    pass


def create_reader(
    source: str,
    delimiter: Optional[str] = None,
    comment: Optional[str] = "#",
    has_header: bool = True,
    skip_header: bool = False,
) -> BaseReader:
    """
    Create a reader for a local path or an HTTP(S) URL

    Without an explicit delimiter, .tsv/.tab files are read as
    tab-separated and everything else as comma-separated.
    """
    if delimiter is None:
        suffix = Path(source.split("?", 1)[0]).suffix.lower()
        delimiter = "\t" if suffix in TAB_SEPARATED_SUFFIXES else ","

    kwargs = {
        "delimiter": delimiter,
        "comment": comment,
        "has_header": has_header,
        "skip_header": skip_header,
    }

    if is_url(source):
        return HTTPReader(source, **kwargs)

    return CSVReader(source, **kwargs)


@dataclass
class QueryResult:
    """
    Outcome of a query run

    Attributes:
        columns: Original indices of the displayed columns, in order
        labels: Header text for each displayed column (None without a header)
        rows: Displayed rows, already projected onto columns
        total_rows: Data rows in the table
        matched_rows: Rows that passed the filters (before any display limit)
        filtered: Whether a substring or WHERE filter was requested
    """

    columns: List[int]
    labels: Optional[List[str]]
    rows: List[Row] = field(default_factory=list)
    total_rows: int = 0
    matched_rows: int = 0
    filtered: bool = False

    @property
    def has_header(self) -> bool:
        return self.labels is not None

    def keys(self) -> List[str]:
        """Column names for keyed output; 'field_<index>' without a header"""
        if self.labels is not None:
            return list(self.labels)
        return [f"field_{i}" for i in self.columns]

    def records(self) -> Iterator[dict]:
        """Yield rows as dicts keyed by keys(); later duplicate names win"""
        keys = self.keys()
        for row in self.rows:
            yield dict(zip(keys, row))

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


class Query:
    """
    A query over one loaded table

    Parses and resolves the WHERE clause, works out the visible columns
    and the sort column, then runs the operator chain on execute().
    """

    def __init__(self, table: Table, options: Optional[QueryOptions] = None):
        """
        Initialize query

        Args:
            table: Loaded table
            options: Filtering / sorting / projection options

        Raises:
            ParseError: If the WHERE clause is invalid and options.strict_where is set
        """
        self.table = table
        self.options = options or QueryOptions()

        self.where = self._parse_where()
        self.columns = self._visible_columns()
        self.sort_column = self._sort_column()

    def _parse_where(self) -> Optional[WhereFilter]:
        text = self.options.where
        if not text:
            return None

        try:
            where = parse(text)
        except ParseError as e:
            if self.options.strict_where:
                raise
            warnings.warn(f"{e}; where clause ignored", WhereIgnoredWarning, stacklevel=3)
            return None

        if self.table.header is None:
            warnings.warn(
                "Where clause needs a header row to resolve column names; no rows will match",
                UserWarning,
                stacklevel=3,
            )
        else:
            resolve(where.root, self.table.header)
        return where

    def _visible_columns(self) -> List[int]:
        selection = parse_column_selection(self.options.select, self.table.header)
        hidden = [] if selection else parse_hidden_columns(self.options.hide)
        return visible_columns(self.table.width, hidden, selection)

    def _sort_column(self) -> Optional[int]:
        if not self.options.sort:
            return None
        idx = resolve_column(self.options.sort, self.table.header)
        if idx is None:
            warnings.warn(
                f"Could not resolve sort column '{self.options.sort}'. Sorting skipped.",
                UserWarning,
                stacklevel=3,
            )
        return idx

    def _labels(self) -> Optional[List[str]]:
        header = self.table.header
        if header is None:
            return None
        return [
            (header[i] or "").strip() if i < len(header) else ""
            for i in self.columns
        ]

    def _build_plan(self) -> Operator:
        """
        Build the operator chain

        Scan -> OrderBy (optional) -> Filter
        """
        plan: Operator = Scan(self.table)

        if self.sort_column is not None:
            plan = OrderByOperator(plan, self.sort_column, self.options.descending)

        return Filter(plan, where=self.where, pattern=self.options.pattern)

    def execute(self) -> QueryResult:
        """
        Run the query

        Returns:
            QueryResult with the projected rows and match statistics
        """
        matched = list(self._build_plan())

        plan: Operator = Scan(Table(header=None, rows=matched))
        if self.options.limit is not None:
            plan = Limit(plan, self.options.limit)
        plan = Project(plan, self.columns)

        return QueryResult(
            columns=list(self.columns),
            labels=self._labels(),
            rows=list(plan),
            total_rows=self.table.row_count,
            matched_rows=len(matched),
            filtered=self.options.is_filtering,
        )

    def explain(self) -> str:
        """
        Describe the execution plan

        Example:
            >>> print(query("data.csv", QueryOptions(where="age > 25")).explain())
            Project(#0, #1, #2)
              Filter(where age > 25)
                  Condition(age > 25) [#1, numeric]
                Scan(3 rows)
        """
        plan: Operator = self._build_plan()
        if self.options.limit is not None:
            plan = Limit(plan, self.options.limit)
        plan = Project(plan, self.columns)
        return "\n".join(plan.explain())


def query(source: str, options: Optional[QueryOptions] = None, **reader_kwargs) -> Query:
    """
    Load a table and create a query over it

    This is the main entry point for the csvq API.

    Args:
        source: Path to a delimited file or an HTTP(S) URL
        options: Query options
        **reader_kwargs: delimiter, comment, has_header, skip_header

    Returns:
        Query object

    Example:
        >>> from csvq import query
        >>> result = query("data.csv", QueryOptions(where="age > 25 AND status = active")).execute()
        >>> print(result.matched_rows)
    """
    table = create_reader(source, **reader_kwargs).read()
    return Query(table, options)
