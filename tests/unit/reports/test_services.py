from __future__ import annotations

import io
import uuid
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time
from openpyxl import load_workbook

from modules.reports.constants import ExportFormat, ReportType
from modules.reports.dtos import ReportFiltersDTO
from modules.reports.exceptions import EventNotFound, UnsupportedFormat
from modules.reports.repositories import IReportDataRepository, ReportDataDjangoRepository
from modules.reports.services import ReportService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return ReportService(repository=ReportDataDjangoRepository())


@pytest.fixture()
def populated(event, make_customer, make_address, make_order, make_zone):
    make_zone("Zona A", [("58000000", "58099999")])
    customer = make_customer()
    make_order(
        event,
        customer,
        make_address(customer, zip_code="58070000"),
        kits=[("Ana", "M"), ("Bruno", "G")],
        order_number="KR25-0001",
    )
    return event


class TestValidateEvent:
    def test_returns_event(self, service, event):
        assert service.validate_event(event.id) == event

    def test_unknown_event_raises(self, service):
        with pytest.raises(EventNotFound, match="Evento não encontrado"):
            service.validate_event(uuid.uuid4())

    def test_malformed_id_raises(self, service):
        with pytest.raises(EventNotFound):
            service.validate_event("not-a-uuid")


class TestDispatch:
    @pytest.mark.parametrize(
        "report_type,export_format",
        [
            (ReportType.KITS, ExportFormat.EXCEL),
            (ReportType.KITS, ExportFormat.PDF),
            (ReportType.KITS, ExportFormat.CSV),
            (ReportType.CIRCUIT, ExportFormat.EXCEL),
            (ReportType.ORDERS, ExportFormat.EXCEL),
            (ReportType.ORDERS, ExportFormat.CSV),
            (ReportType.ORDERS, ExportFormat.PDF),
        ],
    )
    def test_supported_matrix(self, service, populated, report_type, export_format):
        report = service.dispatch(report_type, export_format, ReportFiltersDTO(event_id=populated.id))
        assert report.content
        assert report.filename.endswith({"excel": ".xlsx", "csv": ".csv", "pdf": ".pdf"}[export_format])

    @pytest.mark.parametrize("export_format", ["csv", "pdf", "docx"])
    def test_unsupported_pairs(self, service, populated, export_format):
        with pytest.raises(UnsupportedFormat) as exc_info:
            service.dispatch("circuit", export_format, ReportFiltersDTO(event_id=populated.id))
        assert export_format in str(exc_info.value)
        assert exc_info.value.report_type == "circuit"

    def test_matrix_checked_before_data_access(self):
        repository = MagicMock(spec=IReportDataRepository)
        service = ReportService(repository=repository)
        with pytest.raises(UnsupportedFormat):
            service.dispatch("circuit", "pdf", ReportFiltersDTO(event_id=uuid.uuid4()))
        repository.get_event.assert_not_called()
        repository.list_orders.assert_not_called()

    def test_unknown_event(self, service):
        with pytest.raises(EventNotFound):
            service.dispatch("kits", "excel", ReportFiltersDTO(event_id=uuid.uuid4()))

    def test_zone_snapshot_taken_once_per_call(self, populated):
        repository = ReportDataDjangoRepository()
        spy = MagicMock(wraps=repository.list_zones)
        repository.list_zones = spy
        ReportService(repository=repository).dispatch(
            "orders", "csv", ReportFiltersDTO(event_id=populated.id)
        )
        assert spy.call_count == 1

    def test_kits_excel_rows(self, service, populated):
        report = service.dispatch("kits", "excel", ReportFiltersDTO(event_id=populated.id))
        ws = load_workbook(io.BytesIO(report.content)).active
        assert report.row_count == 2
        assert ws.max_row == 3
        assert report.content_type == (
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )

    def test_custom_exporter_is_used(self, populated):
        exporter = MagicMock()
        exporter.export.return_value = b"fake"
        exporter.content_type = "text/plain"
        exporter.extension = "txt"
        service = ReportService(
            repository=ReportDataDjangoRepository(),
            exporters={ExportFormat.CSV: exporter},
        )
        report = service.dispatch("orders", "csv", ReportFiltersDTO(event_id=populated.id))
        assert report.content == b"fake"
        assert report.filename.endswith(".txt")


class TestFilename:
    @freeze_time("2025-09-10 15:00:00")
    def test_filename_pattern(self, service, populated):
        report = service.dispatch("orders", "pdf", ReportFiltersDTO(event_id=populated.id))
        assert report.filename == "relatorio-orders-Corrida-Run-2025-2025-09-10.pdf"


class TestListReportEvents:
    def test_only_available_events_by_date(self, service, event):
        from datetime import date

        from modules.events.models import Event

        earlier = Event.objects.create(name="Meia", date=date(2025, 5, 1), city="Recife", state="PE")
        Event.objects.create(
            name="Encerrado", date=date(2025, 1, 1), city="Natal", state="RN", available=False
        )
        assert service.list_report_events() == [earlier, event]


class TestZonesWithoutRanges:
    @pytest.mark.parametrize("report_type", ["kits", "circuit", "orders"])
    def test_report_ignores_zone_without_ranges(self, service, populated, report_type):
        from modules.zones.models import CepZone

        CepZone.objects.create(name="Rascunho", priority=5, active=False)
        CepZone.objects.create(name="Sem faixas", priority=1, active=True)
        export_format = "csv" if report_type != "circuit" else "excel"
        report = service.dispatch(report_type, export_format, ReportFiltersDTO(event_id=populated.id))
        assert report.row_count >= 1

    def test_orders_still_resolve_to_valid_zone(self, service, populated):
        from modules.zones.models import CepZone

        CepZone.objects.create(name="Sem faixas", priority=1, active=True)
        report = service.dispatch("orders", "csv", ReportFiltersDTO(event_id=populated.id))
        assert "Zona A" in report.content.decode("utf-8-sig")
        assert "Sem faixas" not in report.content.decode("utf-8-sig")


class TestUnknownZoneFilter:
    def test_unknown_zone_is_logged_and_filters_everything(self, service, populated, caplog):
        import logging

        with caplog.at_level(logging.WARNING):
            report = service.dispatch(
                "orders",
                "csv",
                ReportFiltersDTO(event_id=populated.id, zone_ids={uuid.uuid4()}),
            )
        assert report.row_count == 0
        assert any("report.unknown_zone_filter" in r.getMessage() for r in caplog.records)
