"""CSV exporter.

Two quoting modes:
- legacy (default): every field wrapped in double quotes and joined by
  commas, embedded quotes left untouched.  Existing spreadsheets and
  import scripts depend on this exact output.
- ``REPORTS_CSV_ESCAPE_QUOTES = True``: RFC 4180 via ``csv.QUOTE_ALL``,
  embedded quotes doubled.

Output is UTF-8 with a BOM so Excel detects the encoding.
"""

from __future__ import annotations

import csv
from io import StringIO
from typing import Optional, Sequence

from django.conf import settings
from pydantic import BaseModel

from modules.reports.constants import ExportFormat
from modules.reports.exporters.base import IReportExporter, cell_value
from modules.reports.formatting import as_text
from modules.reports.layouts import ReportLayout

LINE_TERMINATOR = "\r\n"
ENCODING = "utf-8-sig"


class CsvExporter(IReportExporter):
    export_format = ExportFormat.CSV

    def __init__(self, escape_quotes: Optional[bool] = None) -> None:
        self._escape_quotes = escape_quotes

    @property
    def escape_quotes(self) -> bool:
        if self._escape_quotes is not None:
            return self._escape_quotes
        return bool(getattr(settings, "REPORTS_CSV_ESCAPE_QUOTES", False))

    def export(
        self,
        rows: Sequence[BaseModel],
        layout: ReportLayout,
        event_name: str,
    ) -> bytes:
        records = [layout.headers]
        records.extend(
            [as_text(cell_value(row, column.field)) for column in layout.columns]
            for row in rows
        )
        if self.escape_quotes:
            text = self._rfc4180(records)
        else:
            text = self._legacy(records)
        return text.encode(ENCODING)

    @staticmethod
    def _legacy(records: list[list[str]]) -> str:
        return "".join(
            ",".join(f'"{value}"' for value in record) + LINE_TERMINATOR
            for record in records
        )

    @staticmethod
    def _rfc4180(records: list[list[str]]) -> str:
        buffer = StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator=LINE_TERMINATOR)
        writer.writerows(records)
        return buffer.getvalue()
