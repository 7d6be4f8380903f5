"""Integration tests for the report download API."""

from __future__ import annotations

import csv
import io
import uuid

import pytest
from openpyxl import load_workbook

from modules.orders.constants import OrderStatus

pytestmark = pytest.mark.integration


def _url(report_type, event_id):
    return f"/api/v1/reports/{report_type}/{event_id}/"


@pytest.fixture()
def populated(event, make_customer, make_address, make_order, make_zone):
    zone_a = make_zone("Zona A", [("58000000", "58099999")], priority=1)
    zone_b = make_zone("Zona B", [("58050000", "58150000")], priority=2)
    maria = make_customer(name="Maria Silva")
    joao = make_customer(name="João Souza")
    make_order(
        event,
        maria,
        make_address(maria, zip_code="58070000"),
        kits=[("Bruno Silva", "G"), ("Carla Silva", "P")],
        order_number="KR25-0001",
    )
    make_order(
        event,
        joao,
        make_address(joao, zip_code="58120000"),
        kits=[("João Souza", "M")],
        order_number="KR25-0002",
        status=OrderStatus.CANCELLED,
    )
    return event, zone_a, zone_b


class TestAuthentication:
    def test_download_requires_authentication(self, api_client, event):
        response = api_client.get(_url("kits", event.id))
        assert response.status_code == 401

    def test_events_require_authentication(self, api_client):
        response = api_client.get("/api/v1/reports/events/")
        assert response.status_code == 401

    def test_invalid_token_returns_401(self, api_client, event):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        response = api_client.get(_url("kits", event.id))
        assert response.status_code == 401


class TestReportEvents:
    def test_lists_available_events(self, auth_client, event):
        response = auth_client.get("/api/v1/reports/events/")
        assert response.status_code == 200
        assert response.json() == [
            {
                "id": str(event.id),
                "name": "Corrida Run 2025",
                "date": "2025-09-14",
                "location": "Busto de Tamandaré",
                "city": "João Pessoa",
                "state": "PB",
            }
        ]


class TestReportDownload:
    def test_kits_csv_with_status_filter(self, auth_client, populated):
        event, _, _ = populated
        response = auth_client.get(
            _url("kits", event.id), {"export_format": "csv", "status": "confirmado"}
        )
        assert response.status_code == 200
        assert response["Content-Type"] == "text/csv; charset=utf-8"
        assert response["Content-Disposition"].startswith('attachment; filename="relatorio-kits-')
        records = list(csv.reader(io.StringIO(response.content.decode("utf-8-sig"))))
        assert [record[0] for record in records[1:]] == ["KR25-0001", "KR25-0001"]
        assert response["X-Report-Rows"] == "2"

    def test_orders_excel_zone_filter(self, auth_client, populated):
        event, _, zone_b = populated
        response = auth_client.get(
            _url("orders", event.id), {"export_format": "excel", "zones": str(zone_b.id)}
        )
        assert response.status_code == 200
        ws = load_workbook(io.BytesIO(response.content)).active
        assert ws.max_row == 2
        assert ws["A2"].value == "KR25-0002"
        assert ws["F2"].value == "Zona B"

    def test_circuit_defaults_to_excel(self, auth_client, populated):
        event, _, _ = populated
        response = auth_client.get(_url("circuit", event.id))
        assert response.status_code == 200
        assert response["Content-Disposition"].endswith('.xlsx"')

    def test_orders_pdf(self, auth_client, populated):
        event, _, _ = populated
        response = auth_client.get(_url("orders", event.id), {"export_format": "pdf"})
        assert response.status_code == 200
        assert response["Content-Type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    def test_unknown_event_returns_404(self, auth_client):
        response = auth_client.get(_url("kits", uuid.uuid4()))
        assert response.status_code == 404
        assert response.json() == {"detail": "Evento não encontrado"}

    def test_unsupported_format_returns_400(self, auth_client, event):
        response = auth_client.get(_url("circuit", event.id), {"export_format": "pdf"})
        assert response.status_code == 400
        assert "pdf" in response.json()["detail"]

    def test_unknown_report_type_returns_400(self, auth_client, event):
        response = auth_client.get(_url("estoque", event.id))
        assert response.status_code == 400

    def test_invalid_status_returns_400(self, auth_client, event):
        response = auth_client.get(_url("kits", event.id), {"status": "pago"})
        assert response.status_code == 400
        assert "status" in response.json()

    def test_invalid_zone_returns_400(self, auth_client, event):
        response = auth_client.get(_url("orders", event.id), {"zones": "1,2"})
        assert response.status_code == 400
        assert "zones" in response.json()

    def test_response_carries_correlation_id(self, auth_client, event):
        response = auth_client.get(_url("kits", event.id), HTTP_X_REQUEST_ID="relatorio-123")
        assert response["X-Request-ID"] == "relatorio-123"
