"""Report service layer (Use Cases).

Orchestrates one report-generation call:

1. Check the (report type, format) pair against the support matrix,
   before any database access.
2. Validate the event.
3. Take a fresh ``ZoneCatalog`` snapshot; every CEP resolution of the
   call uses it.
4. Assemble rows, encode them, wrap the bytes in a ``ReportFile``.

The service is read-only: it never opens a write transaction and keeps no
state between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional
from uuid import UUID

import structlog
from django.utils import timezone

from modules.reports.assemblers import ASSEMBLERS
from modules.reports.constants import ExportFormat, ReportType
from modules.reports.dtos import ReportFile, ReportFiltersDTO
from modules.reports.exceptions import EventNotFound, UnsupportedFormat
from modules.reports.exporters import default_exporters
from modules.reports.formatting import slugify_filename
from modules.reports.layouts import ReportLayout, get_layout
from modules.zones.resolver import ZoneCatalog

if TYPE_CHECKING:
    from modules.events.models import Event
    from modules.reports.exporters import IReportExporter
    from modules.reports.repositories.interfaces import IReportDataRepository

logger = structlog.get_logger(__name__)


class ReportService:
    """Application service for report exports.

    Receives the data repository via constructor injection.  ``exporters``
    may be overridden per format (tests, alternative encoders).
    """

    def __init__(
        self,
        repository: IReportDataRepository,
        exporters: Optional[Dict[ExportFormat, IReportExporter]] = None,
    ) -> None:
        self._repo = repository
        self._exporters = exporters

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_report_events(self) -> List[Event]:
        return self._repo.list_available_events()

    def validate_event(self, event_id: UUID | str) -> Event:
        event = self._repo.get_event(event_id)
        if event is None:
            logger.warning("report.event_not_found", event_id=str(event_id))
            raise EventNotFound()
        return event

    def dispatch(
        self,
        report_type: ReportType | str,
        export_format: ExportFormat | str,
        filters: ReportFiltersDTO,
    ) -> ReportFile:
        """Generate one report file.

        Raises:
            UnsupportedFormat: pair not in the support matrix.
            EventNotFound: ``filters.event_id`` does not exist.
        """
        layout = self._resolve_layout(report_type, export_format)
        log = logger.bind(
            report_type=str(layout.report_type),
            export_format=str(layout.export_format),
            event_id=str(filters.event_id),
        )
        log.info("report.generation_started")

        event = self.validate_event(filters.event_id)
        catalog = ZoneCatalog.from_definitions(self._repo.list_zones())
        if filters.zone_ids is not None:
            unknown = filters.zone_ids - catalog.ids()
            if unknown:
                log.warning(
                    "report.unknown_zone_filter",
                    zone_ids=sorted(str(zone_id) for zone_id in unknown),
                )

        assembler = ASSEMBLERS[layout.report_type](self._repo)
        rows = assembler.assemble(event, filters, catalog)

        exporter = self._exporter_for(layout.export_format)
        content = exporter.export(rows, layout, event.name)

        report = ReportFile(
            content=content,
            content_type=exporter.content_type,
            filename=self.build_filename(layout.report_type, event, exporter.extension),
            row_count=len(rows),
        )
        log.info(
            "report.generated",
            row_count=report.row_count,
            zone_count=len(catalog),
            byte_size=len(content),
        )
        return report

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def build_filename(report_type: ReportType, event: Event, extension: str) -> str:
        """``relatorio-{type}-{event-slug}-{YYYY-MM-DD}.{ext}``."""
        today = timezone.localdate().isoformat()
        return f"relatorio-{report_type}-{slugify_filename(event.name)}-{today}.{extension}"

    @staticmethod
    def _resolve_layout(
        report_type: ReportType | str,
        export_format: ExportFormat | str,
    ) -> ReportLayout:
        try:
            layout = get_layout(ReportType(report_type), ExportFormat(export_format))
        except ValueError:
            layout = None
        if layout is None:
            logger.warning(
                "report.unsupported_format",
                report_type=str(report_type),
                export_format=str(export_format),
            )
            raise UnsupportedFormat(str(export_format), str(report_type))
        return layout

    def _exporter_for(self, export_format: ExportFormat) -> IReportExporter:
        exporters = self._exporters if self._exporters is not None else default_exporters()
        return exporters[export_format]
