"""
Spreadsheet XML formatter (SpreadsheetML 2003)

The output opens directly in Excel and LibreOffice. Cells holding a
finite number are typed as Number, everything else as String.
"""

import math
import xml.etree.ElementTree as ET

from csvq.cli.formatters.base import BaseFormatter
from csvq.core.query import QueryResult
from csvq.where.evaluator import to_number

SPREADSHEET_NS = "urn:schemas-microsoft-com:office:spreadsheet"

XML_PROLOG = '<?xml version="1.0" encoding="UTF-8"?>\n<?mso-application progid="Excel.Sheet"?>\n'


def _add_cell(row: ET.Element, value: str, typed: bool = True) -> None:
    cell = ET.SubElement(row, "Cell")
    number = to_number(value) if typed and value.strip() else None
    if number is not None and math.isfinite(number):
        data = ET.SubElement(cell, "Data", {"ss:Type": "Number"})
        data.text = value.strip()
    else:
        data = ET.SubElement(cell, "Data", {"ss:Type": "String"})
        data.text = value


class XMLFormatter(BaseFormatter):
    """Format results as a SpreadsheetML workbook with one worksheet"""

    def format(self, result: QueryResult, **kwargs) -> str:
        """
        Format results as spreadsheet XML

        Args:
            result: Query result
            **kwargs: Options like 'sheet_name'

        Returns:
            XML document string
        """
        workbook = ET.Element("Workbook", {"xmlns": SPREADSHEET_NS, "xmlns:ss": SPREADSHEET_NS})
        sheet = ET.SubElement(workbook, "Worksheet", {"ss:Name": kwargs.get("sheet_name", "Sheet1")})
        table = ET.SubElement(sheet, "Table")

        if result.has_header:
            header = ET.SubElement(table, "Row")
            for label in result.labels:
                _add_cell(header, label, typed=False)

        for values in self.rows_as_text(result):
            row = ET.SubElement(table, "Row")
            for value in values:
                _add_cell(row, value)

        ET.indent(workbook)
        return XML_PROLOG + ET.tostring(workbook, encoding="unicode")
