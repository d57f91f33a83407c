"""
CSV and TSV formatters for Unix-friendly output
"""

import csv
import io

from csvq.cli.formatters.base import BaseFormatter
from csvq.core.query import QueryResult


class CSVFormatter(BaseFormatter):
    """Format results as CSV"""

    def format(self, result: QueryResult, **kwargs) -> str:
        """
        Format results as CSV

        Fields containing the delimiter, quotes or newlines are quoted.

        Args:
            result: Query result
            **kwargs: Options like 'delimiter', 'quote_all'

        Returns:
            CSV string
        """
        output = io.StringIO()
        writer = csv.writer(
            output,
            delimiter=kwargs.get("delimiter", ","),
            quoting=csv.QUOTE_ALL if kwargs.get("quote_all") else csv.QUOTE_MINIMAL,
            lineterminator="\n",
        )

        if result.has_header:
            writer.writerow(result.labels)
        writer.writerows(self.rows_as_text(result))

        return output.getvalue().rstrip("\n")


class TSVFormatter(BaseFormatter):
    """Format results as tab-separated values (no quoting)"""

    def format(self, result: QueryResult, **kwargs) -> str:
        lines = []
        if result.has_header:
            lines.append("\t".join(result.labels))
        for row in self.rows_as_text(result):
            lines.append("\t".join(row))
        return "\n".join(lines)
