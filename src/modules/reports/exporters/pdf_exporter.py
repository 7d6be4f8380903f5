"""PDF exporter built on the reportlab canvas.

Page flow: title block on the first page, column header at the top of
every page.  Before drawing a row, if the cursor would cross the bottom
threshold the page is closed and the header redrawn on the next one.
Striped layouts shade every other data row; configured name fields are
truncated with an ellipsis.
"""

from __future__ import annotations

from io import BytesIO
from typing import Optional, Sequence

import structlog
from django.conf import settings
from pydantic import BaseModel
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.pdfgen import canvas

from modules.reports.constants import ExportFormat
from modules.reports.exporters.base import IReportExporter, cell_value
from modules.reports.formatting import as_text, truncate
from modules.reports.layouts import ReportLayout

logger = structlog.get_logger(__name__)

PAGE_SIZES = {"A4": A4, "LETTER": LETTER}

MARGIN_X = 40
TOP_MARGIN = 50
ROW_HEIGHT = 18
TITLE_FONT = ("Helvetica-Bold", 16)
SUBTITLE_FONT = ("Helvetica", 11)
HEADER_FONT = ("Helvetica-Bold", 10)
BODY_FONT = ("Helvetica", 9)
HEADER_BACKGROUND = colors.HexColor("#E6E6FA")
STRIPE_BACKGROUND = colors.HexColor("#F5F5F5")
CELL_PADDING = 4


class PdfExporter(IReportExporter):
    export_format = ExportFormat.PDF

    def __init__(
        self,
        page_size: Optional[str] = None,
        bottom_threshold: Optional[float] = None,
        max_name_length: Optional[int] = None,
    ) -> None:
        size_name = page_size or getattr(settings, "REPORTS_PDF_PAGE_SIZE", "A4")
        self.page_size = PAGE_SIZES.get(str(size_name).upper(), A4)
        self.bottom_threshold = (
            bottom_threshold
            if bottom_threshold is not None
            else getattr(settings, "REPORTS_PDF_BOTTOM_THRESHOLD", 60)
        )
        self.max_name_length = (
            max_name_length
            if max_name_length is not None
            else getattr(settings, "REPORTS_PDF_MAX_NAME_LENGTH", 25)
        )

    def export(
        self,
        rows: Sequence[BaseModel],
        layout: ReportLayout,
        event_name: str,
    ) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=self.page_size)
        pdf.setTitle(f"{layout.title} - {event_name}")
        _, height = self.page_size

        y = height - TOP_MARGIN
        pdf.setFont(*TITLE_FONT)
        pdf.drawString(MARGIN_X, y, layout.title)
        y -= 20
        pdf.setFont(*SUBTITLE_FONT)
        pdf.drawString(MARGIN_X, y, f"Evento: {event_name}")
        y -= 30
        y = self._draw_header(pdf, layout, y)

        pages = 1
        for index, row in enumerate(rows):
            if y - ROW_HEIGHT < self.bottom_threshold:
                pdf.showPage()
                pages += 1
                y = self._draw_header(pdf, layout, height - TOP_MARGIN)
            if layout.striped and index % 2 == 1:
                pdf.setFillColor(STRIPE_BACKGROUND)
                pdf.rect(
                    MARGIN_X, y - ROW_HEIGHT, self._table_width(layout), ROW_HEIGHT,
                    stroke=0, fill=1,
                )
                pdf.setFillColor(colors.black)
            pdf.setFont(*BODY_FONT)
            x = MARGIN_X
            for column in layout.columns:
                text = as_text(cell_value(row, column.field))
                if column.field in layout.truncate_fields:
                    text = truncate(text, self.max_name_length)
                pdf.drawString(x + CELL_PADDING, y - ROW_HEIGHT + 5, text)
                x += column.width
            y -= ROW_HEIGHT

        pdf.showPage()
        pdf.save()
        logger.debug("report.pdf_rendered", row_count=len(rows), page_count=pages)
        return buffer.getvalue()

    @staticmethod
    def _table_width(layout: ReportLayout) -> float:
        return sum(column.width for column in layout.columns)

    def _draw_header(self, pdf: canvas.Canvas, layout: ReportLayout, y: float) -> float:
        pdf.setFillColor(HEADER_BACKGROUND)
        pdf.rect(MARGIN_X, y - ROW_HEIGHT, self._table_width(layout), ROW_HEIGHT, stroke=0, fill=1)
        pdf.setFillColor(colors.black)
        pdf.setFont(*HEADER_FONT)
        x = MARGIN_X
        for column in layout.columns:
            pdf.drawString(x + CELL_PADDING, y - ROW_HEIGHT + 5, column.header)
            x += column.width
        return y - ROW_HEIGHT
