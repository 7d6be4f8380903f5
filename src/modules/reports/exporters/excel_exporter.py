"""Excel (.xlsx) exporter built on openpyxl.

Layout rules:
- one sheet named after the report, bold header row with a lavender fill;
- fixed column widths per report;
- thin border on every written cell;
- grouped layouts (Kits) alternate the row fill each time the grouping
  field changes, in a single pass over the rows;
- money stays numeric and dates are real date cells.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from io import BytesIO
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from pydantic import BaseModel

from modules.reports.constants import ExportFormat
from modules.reports.exporters.base import IReportExporter, cell_value
from modules.reports.layouts import ReportLayout

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(start_color="E6E6FA", end_color="E6E6FA", fill_type="solid")
GROUP_FILLS = (
    PatternFill(start_color="F8F8FF", end_color="F8F8FF", fill_type="solid"),
    PatternFill(start_color="F0F8FF", end_color="F0F8FF", fill_type="solid"),
)
THIN_SIDE = Side(style="thin")
THIN_BORDER = Border(left=THIN_SIDE, right=THIN_SIDE, top=THIN_SIDE, bottom=THIN_SIDE)
DATE_FORMAT = "DD/MM/YYYY"
CURRENCY_FORMAT = "#,##0.00"
# Excel limit
MAX_SHEET_TITLE = 31


def _excel_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


class ExcelExporter(IReportExporter):
    export_format = ExportFormat.EXCEL

    def export(
        self,
        rows: Sequence[BaseModel],
        layout: ReportLayout,
        event_name: str,
    ) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = layout.title[:MAX_SHEET_TITLE]

        for col_idx, column in enumerate(layout.columns, start=1):
            cell = ws.cell(row=1, column=col_idx, value=column.header)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.border = THIN_BORDER
            if column.width:
                ws.column_dimensions[get_column_letter(col_idx)].width = column.width

        group_index = -1
        previous_group: Any = object()
        for row_idx, row in enumerate(rows, start=2):
            fill = None
            if layout.group_by:
                current_group = cell_value(row, layout.group_by)
                if current_group != previous_group:
                    group_index += 1
                    previous_group = current_group
                fill = GROUP_FILLS[group_index % len(GROUP_FILLS)]

            for col_idx, column in enumerate(layout.columns, start=1):
                raw = cell_value(row, column.field)
                cell = ws.cell(row=row_idx, column=col_idx, value=_excel_value(raw))
                cell.border = THIN_BORDER
                if isinstance(raw, Decimal):
                    cell.number_format = CURRENCY_FORMAT
                elif isinstance(raw, date):
                    cell.number_format = DATE_FORMAT
                if fill is not None:
                    cell.fill = fill

        ws.freeze_panes = "A2"

        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()
