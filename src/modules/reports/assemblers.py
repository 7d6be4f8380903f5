"""Report row assemblers.

Each assembler turns the orders of one event into the row DTOs of one
report type.  Business rules implemented:
- Status filters are pushed down into the order query (single predicate).
- Zone filters are applied after resolving every order's CEP against the
  *full* zone catalog snapshot of the current call, so a zone filter can
  never change which zone an order belongs to.
- Kits and Orders rows are sorted by ``order_number`` (lexicographic).
  Circuit rows follow query order, which is also ``order_number``.
- Nothing here writes to the database.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Sequence

import structlog
from django.utils import timezone

from modules.orders.constants import OrderStatus, PaymentMethod
from modules.reports.constants import (
    CIRCUIT_EXTRA_INFO_PREFIX,
    KIT_PRODUCT_PREFIX,
    UNKNOWN_ZONE_LABEL,
    ReportType,
)
from modules.reports.dtos import CircuitRow, KitRow, OrderRow, ReportFiltersDTO
from modules.reports.formatting import (
    format_address,
    format_cpf,
    format_kits_summary,
    format_street_line,
)
from modules.reports.repositories.interfaces import IReportDataRepository
from modules.zones.resolver import ZoneCatalog, ZoneDefinition

if TYPE_CHECKING:
    from pydantic import BaseModel

    from modules.events.models import Event
    from modules.orders.models import Order

logger = structlog.get_logger(__name__)


def _choice_label(choices, value: str) -> str:
    try:
        return str(choices(value).label)
    except ValueError:
        return value


class ReportRecordAssembler(ABC):
    """Base class: fetches the event's orders and delegates row building."""

    report_type: ReportType

    def __init__(self, repository: IReportDataRepository) -> None:
        self._repo = repository

    def assemble(
        self,
        event: Event,
        filters: ReportFiltersDTO,
        catalog: ZoneCatalog,
    ) -> List[BaseModel]:
        orders = self._repo.list_orders(event.id, filters.statuses)
        rows = self.build_rows(event, orders, filters, catalog)
        logger.debug(
            "report.rows_assembled",
            report_type=str(self.report_type),
            event_id=str(event.id),
            order_count=len(orders),
            row_count=len(rows),
        )
        return rows

    @abstractmethod
    def build_rows(
        self,
        event: Event,
        orders: Sequence[Order],
        filters: ReportFiltersDTO,
        catalog: ZoneCatalog,
    ) -> List[BaseModel]:
        """Turn already filtered orders into report rows."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _zone_for(order: Order, catalog: ZoneCatalog) -> Optional[ZoneDefinition]:
        return catalog.resolve(order.address.zip_code)

    @staticmethod
    def _passes_zone_filter(
        zone: Optional[ZoneDefinition],
        filters: ReportFiltersDTO,
    ) -> bool:
        if filters.zone_ids is None:
            return True
        return zone is not None and zone.id in filters.zone_ids


class KitsReportAssembler(ReportRecordAssembler):
    """One row per kit; orders without kits contribute nothing."""

    report_type = ReportType.KITS

    def build_rows(self, event, orders, filters, catalog) -> List[KitRow]:
        product_label = f"{KIT_PRODUCT_PREFIX}{event.name}"
        rows: List[KitRow] = []
        for order in orders:
            customer_name = order.customer.name
            delivery_address = format_address(order.address)
            for kit in self._repo.list_kits(order):
                rows.append(
                    KitRow(
                        order_number=order.order_number,
                        athlete_name=kit.name,
                        cpf=format_cpf(kit.cpf),
                        shirt_size=kit.shirt_size,
                        product_label=product_label,
                        customer_name=customer_name,
                        delivery_address=delivery_address,
                    )
                )
        # stable sort keeps kit creation order inside an order
        rows.sort(key=lambda row: row.order_number)
        return rows


class CircuitReportAssembler(ReportRecordAssembler):
    """Delivery addresses for route planning, one row per order."""

    report_type = ReportType.CIRCUIT

    def build_rows(self, event, orders, filters, catalog) -> List[CircuitRow]:
        rows: List[CircuitRow] = []
        for order in orders:
            if filters.zone_ids is not None and not self._passes_zone_filter(
                self._zone_for(order, catalog), filters
            ):
                continue
            address = order.address
            rows.append(
                CircuitRow(
                    order_id=order.id,
                    address_line1=format_street_line(
                        address.street, address.number, address.complement
                    ),
                    city=address.city,
                    state=address.state,
                    postal_code=address.zip_code,
                    extra_info=f"{CIRCUIT_EXTRA_INFO_PREFIX}{order.order_number}",
                )
            )
        return rows


class OrdersReportAssembler(ReportRecordAssembler):
    """One row per order with its resolved CEP zone."""

    report_type = ReportType.ORDERS

    def build_rows(self, event, orders, filters, catalog) -> List[OrderRow]:
        rows: List[OrderRow] = []
        for order in orders:
            zone = self._zone_for(order, catalog)
            if not self._passes_zone_filter(zone, filters):
                continue
            rows.append(
                OrderRow(
                    order_id=order.id,
                    order_number=order.order_number,
                    customer_name=order.customer.name,
                    customer_cpf=format_cpf(order.customer.cpf),
                    status=_choice_label(OrderStatus, order.status),
                    total_value=order.total_cost,
                    cep_zone_name=zone.name if zone is not None else UNKNOWN_ZONE_LABEL,
                    kits_summary=format_kits_summary(self._repo.list_kits(order)),
                    address=format_address(order.address),
                    order_date=timezone.localtime(order.created_at).date(),
                    payment_method=_choice_label(PaymentMethod, order.payment_method),
                )
            )
        rows.sort(key=lambda row: row.order_number)
        return rows


ASSEMBLERS: dict[ReportType, type[ReportRecordAssembler]] = {
    ReportType.KITS: KitsReportAssembler,
    ReportType.CIRCUIT: CircuitReportAssembler,
    ReportType.ORDERS: OrdersReportAssembler,
}
