"""Exporter registry, one stateless exporter per format."""

from modules.reports.constants import ExportFormat
from modules.reports.exporters.base import IReportExporter
from modules.reports.exporters.csv_exporter import CsvExporter
from modules.reports.exporters.excel_exporter import ExcelExporter
from modules.reports.exporters.pdf_exporter import PdfExporter


def default_exporters() -> dict[ExportFormat, IReportExporter]:
    """Exporters built per call so settings overrides are honoured."""
    return {
        ExportFormat.EXCEL: ExcelExporter(),
        ExportFormat.CSV: CsvExporter(),
        ExportFormat.PDF: PdfExporter(),
    }


__all__ = [
    "CsvExporter",
    "ExcelExporter",
    "IReportExporter",
    "PdfExporter",
    "default_exporters",
]
