"""Report DTOs.

Framework-agnostic data transfer objects using Pydantic v2, all immutable
(``frozen=True``):

- ``ReportFiltersDTO``: input of a report run (event + optional filters).
- ``KitRow`` / ``CircuitRow`` / ``OrderRow``: one row of each report type.
  Rows live for a single call and are never persisted.
- ``ReportFile``: the encoded output handed back to the API layer.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import FrozenSet, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class ReportFiltersDTO(BaseModel):
    """Filters for one report run.

    ``statuses`` / ``zone_ids`` set to ``None`` mean "no filter".  An empty
    collection is normalised to ``None`` as well, so an empty query
    parameter never filters everything out.
    """

    model_config = ConfigDict(frozen=True)

    event_id: UUID
    statuses: Optional[FrozenSet[str]] = None
    zone_ids: Optional[FrozenSet[UUID]] = None

    @field_validator("statuses", "zone_ids", mode="after")
    @classmethod
    def empty_means_unfiltered(cls, v):
        return v or None


# ---------------------------------------------------------------------------
# Row DTOs
# ---------------------------------------------------------------------------


class KitRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_number: str
    athlete_name: str
    cpf: str
    shirt_size: str
    product_label: str
    customer_name: str
    delivery_address: str


class CircuitRow(BaseModel):
    """Address line for route planning.

    ``order_id`` is not exported; it ties the row back to its order.
    """

    model_config = ConfigDict(frozen=True)

    order_id: UUID
    address_line1: str
    city: str
    state: str
    postal_code: str
    extra_info: str


class OrderRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: UUID
    order_number: str
    customer_name: str
    customer_cpf: str
    status: str
    total_value: Decimal
    cep_zone_name: str
    kits_summary: str
    address: str
    order_date: date
    payment_method: str


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ReportFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: bytes
    content_type: str
    filename: str
    row_count: int = 0
