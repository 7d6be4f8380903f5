"""Read-only data-access contract consumed by the report pipeline.

Events, orders, customers, addresses and kits are owned by the CRUD side
of the application; reports only read them.  Zones are returned as
``ZoneDefinition`` value objects so a caller can freeze them into a
``ZoneCatalog`` snapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional
from uuid import UUID

if TYPE_CHECKING:
    from modules.customers.models import Address, Customer
    from modules.events.models import Event
    from modules.orders.models import Kit, Order
    from modules.zones.resolver import ZoneDefinition


class IReportDataRepository(ABC):
    """Repository contract for report generation (no write methods)."""

    @abstractmethod
    def get_event(self, event_id: UUID | str) -> Optional[Event]:
        """Retrieve an event, ``None`` when it does not exist."""

    @abstractmethod
    def list_available_events(self) -> List[Event]:
        """Events that can be selected for reporting."""

    @abstractmethod
    def list_orders(
        self,
        event_id: UUID | str,
        statuses: Optional[Iterable[str]] = None,
    ) -> List[Order]:
        """Live orders of an event, customer and address joined, by ``order_number``."""

    @abstractmethod
    def list_kits(self, order: Order) -> List[Kit]:
        """Kits of one order, in creation order."""

    @abstractmethod
    def get_address(self, address_id: UUID | str) -> Optional[Address]:
        """Retrieve an address by primary key."""

    @abstractmethod
    def get_customer(self, customer_id: UUID | str) -> Optional[Customer]:
        """Retrieve a customer by primary key."""

    @abstractmethod
    def list_zones(self) -> tuple[ZoneDefinition, ...]:
        """Every zone definition, active or not."""
