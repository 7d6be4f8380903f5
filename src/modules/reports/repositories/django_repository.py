"""Django ORM implementation of the report data repository.

Follows the Null Object convention of the other repositories: look-ups
return ``None`` for missing or malformed IDs and the service decides what
a missing entity means.
"""

from __future__ import annotations

from typing import Iterable, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError

from modules.customers.models import Address, Customer
from modules.events.models import Event
from modules.orders.models import Kit, Order
from modules.reports.predicates import build_order_predicate
from modules.reports.repositories.interfaces import IReportDataRepository
from modules.zones.models import CepZone
from modules.zones.resolver import ZoneDefinition

logger = structlog.get_logger(__name__)


class ReportDataDjangoRepository(IReportDataRepository):
    """Concrete report repository backed by Django ORM."""

    def get_event(self, event_id: UUID | str) -> Optional[Event]:
        try:
            return Event.objects.filter(id=event_id).first()
        except (ValueError, ValidationError):
            return None

    def list_available_events(self) -> List[Event]:
        return list(Event.objects.filter(available=True).order_by("date", "name"))

    def list_orders(
        self,
        event_id: UUID | str,
        statuses: Optional[Iterable[str]] = None,
    ) -> List[Order]:
        """Single query for orders (+ customer, address) and one batched query for kits."""
        predicate = build_order_predicate(event_id, statuses)
        return list(
            Order.objects.select_related("customer", "address")
            .prefetch_related("kits")
            .filter(predicate)
            .order_by("order_number")
        )

    def list_kits(self, order: Order) -> List[Kit]:
        # served from the prefetch cache when the order came from list_orders()
        return list(order.kits.all())

    def get_address(self, address_id: UUID | str) -> Optional[Address]:
        try:
            return Address.objects.filter(id=address_id).first()
        except (ValueError, ValidationError):
            return None

    def get_customer(self, customer_id: UUID | str) -> Optional[Customer]:
        try:
            return Customer.objects.filter(id=customer_id).first()
        except (ValueError, ValidationError):
            return None

    def list_zones(self) -> tuple[ZoneDefinition, ...]:
        zones = tuple(zone.to_definition() for zone in CepZone.objects.order_by("priority", "id"))
        logger.debug("report.zones_loaded", zone_count=len(zones))
        return zones
