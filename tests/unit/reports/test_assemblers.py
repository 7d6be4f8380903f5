"""Unit tests for the report row assemblers against the Django repository."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.constants import OrderStatus, PaymentMethod
from modules.reports.assemblers import (
    CircuitReportAssembler,
    KitsReportAssembler,
    OrdersReportAssembler,
)
from modules.reports.dtos import ReportFiltersDTO
from modules.reports.repositories import ReportDataDjangoRepository
from modules.zones.resolver import ZoneCatalog

pytestmark = pytest.mark.unit


@pytest.fixture()
def repository():
    return ReportDataDjangoRepository()


@pytest.fixture()
def zones(make_zone):
    zone_a = make_zone("Zona A", [("58000000", "58099999")], priority=1)
    zone_b = make_zone("Zona B", [("58050000", "58150000")], priority=2)
    return zone_a, zone_b


@pytest.fixture()
def catalog(zones, repository):
    return ZoneCatalog.from_definitions(repository.list_zones())


@pytest.fixture()
def scenario(event, make_customer, make_address, make_order):
    """KR25-0001: 2 kits, confirmed, zone A.  KR25-0002: 1 kit, cancelled, zone B only.
    KR25-0003: 1 kit, confirmed, outside every zone."""
    maria = make_customer(name="Maria Silva")
    joao = make_customer(name="João Souza")
    ana = make_customer(name="Ana Lima")
    order_1 = make_order(
        event,
        maria,
        make_address(maria, zip_code="58070000", complement="Apto 201"),
        kits=[("Bruno Silva", "G"), ("Carla Silva", "P")],
        order_number="KR25-0001",
        total_cost=Decimal("120.00"),
    )
    order_2 = make_order(
        event,
        joao,
        make_address(joao, zip_code="58120000"),
        kits=[("João Souza", "M")],
        order_number="KR25-0002",
        status=OrderStatus.CANCELLED,
        payment_method=PaymentMethod.CREDIT,
    )
    order_3 = make_order(
        event,
        ana,
        make_address(ana, zip_code="01310100", city="São Paulo", state="SP"),
        kits=[("Ana Lima", "PP")],
        order_number="KR25-0003",
    )
    return order_1, order_2, order_3


def _filters(event, statuses=None, zone_ids=None):
    return ReportFiltersDTO(event_id=event.id, statuses=statuses, zone_ids=zone_ids)


class TestKitsReportAssembler:
    def test_status_filter_keeps_only_matching_kits(self, repository, event, scenario, catalog):
        rows = KitsReportAssembler(repository).assemble(
            event, _filters(event, statuses={"confirmado"}), catalog
        )
        numbers = [row.order_number for row in rows]
        assert numbers.count("KR25-0001") == 2
        assert "KR25-0002" not in numbers

    def test_one_row_per_kit(self, repository, event, scenario, catalog):
        rows = KitsReportAssembler(repository).assemble(event, _filters(event), catalog)
        assert len(rows) == sum(order.kits.count() for order in scenario)

    def test_rows_sorted_by_order_number(self, repository, event, scenario, catalog):
        rows = KitsReportAssembler(repository).assemble(event, _filters(event), catalog)
        numbers = [row.order_number for row in rows]
        assert numbers == sorted(numbers)

    def test_row_content(self, repository, event, scenario, catalog):
        row = KitsReportAssembler(repository).assemble(event, _filters(event), catalog)[0]
        assert row.athlete_name == "Bruno Silva"
        assert row.cpf == "529.982.247-25"
        assert row.product_label == "[Retirada do Kit] Corrida Run 2025"
        assert row.customer_name == "Maria Silva"
        assert row.delivery_address == "Rua A, 10, Apto 201 - Centro, João Pessoa/PB"

    def test_soft_deleted_orders_are_excluded(self, repository, event, scenario, catalog):
        scenario[0].delete()
        rows = KitsReportAssembler(repository).assemble(event, _filters(event), catalog)
        assert {row.order_number for row in rows} == {"KR25-0002", "KR25-0003"}


class TestCircuitReportAssembler:
    def test_without_zone_filter_every_order_is_kept(self, repository, event, scenario, catalog):
        rows = CircuitReportAssembler(repository).assemble(event, _filters(event), catalog)
        assert [row.extra_info for row in rows] == [
            "Pedido - KR25-0001",
            "Pedido - KR25-0002",
            "Pedido - KR25-0003",
        ]

    def test_row_content(self, repository, event, scenario, catalog):
        row = CircuitReportAssembler(repository).assemble(event, _filters(event), catalog)[0]
        assert row.order_id == scenario[0].id
        assert row.address_line1 == "Rua A, 10, Apto 201"
        assert (row.city, row.state, row.postal_code) == ("João Pessoa", "PB", "58070000")

    def test_zone_filter_uses_full_catalog(self, repository, event, scenario, zones, catalog):
        # 58070000 lies in both zones; zone A wins, so filtering on B drops it
        _, zone_b = zones
        rows = CircuitReportAssembler(repository).assemble(
            event, _filters(event, zone_ids={zone_b.id}), catalog
        )
        assert [row.order_id for row in rows] == [scenario[1].id]


class TestOrdersReportAssembler:
    def test_row_content(self, repository, event, scenario, catalog):
        rows = OrdersReportAssembler(repository).assemble(event, _filters(event), catalog)
        first = rows[0]
        assert first.order_number == "KR25-0001"
        assert first.customer_cpf.count(".") == 2
        assert first.status == "Confirmado"
        assert first.total_value == Decimal("120.00")
        assert first.cep_zone_name == "Zona A"
        assert first.kits_summary == "Bruno Silva (G), Carla Silva (P)"
        assert first.payment_method == "PIX"

    def test_unknown_zone_label(self, repository, event, scenario, catalog):
        rows = OrdersReportAssembler(repository).assemble(event, _filters(event), catalog)
        assert rows[-1].cep_zone_name == "Não identificada"
        assert rows[1].status == "Cancelado"

    def test_zone_filter_skips_unresolved_orders(self, repository, event, scenario, zones, catalog):
        zone_a, zone_b = zones
        rows = OrdersReportAssembler(repository).assemble(
            event, _filters(event, zone_ids={zone_a.id, zone_b.id}), catalog
        )
        assert [row.order_number for row in rows] == ["KR25-0001", "KR25-0002"]

    def test_inactive_zone_is_unresolved(self, repository, event, scenario, zones):
        zone_a, zone_b = zones
        zone_b.active = False
        zone_b.save()
        catalog = ZoneCatalog.from_definitions(repository.list_zones())
        rows = OrdersReportAssembler(repository).assemble(event, _filters(event), catalog)
        assert [row.cep_zone_name for row in rows] == ["Zona A", "Não identificada", "Não identificada"]


class TestCrossReportConsistency:
    @pytest.mark.parametrize("zone_index", [0, 1])
    def test_circuit_and_orders_keep_same_orders(
        self, repository, event, scenario, zones, catalog, zone_index
    ):
        filters = _filters(event, zone_ids={zones[zone_index].id})
        circuit = CircuitReportAssembler(repository).assemble(event, filters, catalog)
        orders = OrdersReportAssembler(repository).assemble(event, filters, catalog)
        assert {row.order_id for row in circuit} == {row.order_id for row in orders}
