"""Report domain exceptions.

Raised by the report service and assemblers.  The API layer (views)
catches these and translates them into HTTP responses.
"""

from __future__ import annotations

from modules.reports.constants import EVENT_NOT_FOUND_MESSAGE


class EventNotFound(Exception):
    """The requested event does not exist."""

    def __init__(self, message: str = EVENT_NOT_FOUND_MESSAGE) -> None:
        super().__init__(message)


class UnsupportedFormat(Exception):
    """The export format is not implemented for the requested report type."""

    def __init__(self, export_format: str, report_type: str) -> None:
        self.export_format = export_format
        self.report_type = report_type
        super().__init__(
            f"Formato '{export_format}' não suportado para o relatório '{report_type}'."
        )


class InvalidReportFilter(Exception):
    """A report parameter (type, status, zone) could not be understood."""
