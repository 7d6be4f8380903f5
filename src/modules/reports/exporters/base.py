"""Exporter contract.

Exporters are stateless encoders: ``export`` receives the assembled rows
and the layout of the (report, format) pair and returns the encoded
bytes.  They never touch the database.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from pydantic import BaseModel

from modules.reports.constants import CONTENT_TYPES, FILE_EXTENSIONS, ExportFormat
from modules.reports.layouts import ReportLayout


class IReportExporter(ABC):
    export_format: ExportFormat

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self.export_format]

    @property
    def extension(self) -> str:
        return FILE_EXTENSIONS[self.export_format]

    @abstractmethod
    def export(
        self,
        rows: Sequence[BaseModel],
        layout: ReportLayout,
        event_name: str,
    ) -> bytes:
        """Encode ``rows`` following ``layout``."""


def cell_value(row: BaseModel, field: str) -> Any:
    return getattr(row, field)
