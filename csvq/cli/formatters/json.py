"""
JSON formatter for machine-readable output
"""

import json

from csvq.cli.formatters.base import BaseFormatter, cell_text
from csvq.core.query import QueryResult


class JSONFormatter(BaseFormatter):
    """Format results as a JSON array of objects"""

    def format(self, result: QueryResult, **kwargs) -> str:
        """
        Format results as JSON

        Keys are the header names ('field_<index>' without a header);
        values are the trimmed cell text.

        Args:
            result: Query result
            **kwargs: Options like 'compact', 'indent'

        Returns:
            JSON string
        """
        records = [
            {key: cell_text(value).strip() for key, value in record.items()}
            for record in result.records()
        ]

        if kwargs.get("compact", False):
            return json.dumps(records, separators=(",", ":"), ensure_ascii=False)
        return json.dumps(records, indent=kwargs.get("indent", 2), ensure_ascii=False)
