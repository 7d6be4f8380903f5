"""Order and Kit models.

Business rules implemented:
- ``order_number`` is a human-readable sequential identifier per year
  (format: ``KR{YY}-{NNNN}``), generated on first save when absent.
- Event, customer and address FKs use PROTECT: an order can never point at
  a missing address, so report joins never hit a dangling reference.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel); reports
  only see live orders.
- One Kit row per athlete; an order carries one or more kits.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog
from validate_docbr import CPF

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel, SoftDeleteModel
from modules.customers.models import sanitize_digits
from modules.orders.constants import (
    ORDER_NUMBER_MAX_RETRIES,
    ORDER_NUMBER_PREFIX,
    OrderStatus,
    PaymentMethod,
)

logger = structlog.get_logger(__name__)


class Order(SoftDeleteModel):
    order_number: models.CharField = models.CharField(
        max_length=20, unique=True, editable=False
    )
    event: models.ForeignKey = models.ForeignKey(
        "events.Event",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    address: models.ForeignKey = models.ForeignKey(
        "customers.Address",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    status: models.CharField = models.CharField(
        max_length=30,
        choices=OrderStatus.choices,
        default=OrderStatus.CONFIRMED,
    )
    total_cost: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    payment_method: models.CharField = models.CharField(
        max_length=10,
        choices=PaymentMethod.choices,
    )

    class Meta:
        db_table = "orders"
        ordering = ["order_number"]
        indexes = [
            models.Index(fields=["event", "status"], name="orders_event_status_idx"),
        ]

    # ------------------------------------------------------------------
    # Order number generation
    # ------------------------------------------------------------------

    @staticmethod
    def order_number_prefix() -> str:
        return f"{ORDER_NUMBER_PREFIX}{timezone.now():%y}-"

    @classmethod
    def next_order_number(cls) -> str:
        """Next sequential number for the current year (``KR25-0001``, ``KR25-0002``...)."""
        prefix = cls.order_number_prefix()
        last = (
            cls.objects.filter(order_number__startswith=prefix)
            .order_by("-order_number")
            .values_list("order_number", flat=True)
            .first()
        )
        sequence = int(last[len(prefix):]) + 1 if last else 1
        return f"{prefix}{sequence:04d}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.order_number:
            for _ in range(ORDER_NUMBER_MAX_RETRIES):
                candidate = self.next_order_number()
                if not Order.objects.filter(order_number=candidate).exists():
                    self.order_number = candidate
                    break
            else:
                logger.error("order.number_generation_failed", prefix=self.order_number_prefix())
                raise RuntimeError(
                    f"Failed to generate unique order_number after "
                    f"{ORDER_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"


class Kit(BaseModel):
    """A single athlete's kit inside an order."""

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="kits",
    )
    name: models.CharField = models.CharField(max_length=255)
    cpf: models.CharField = models.CharField(max_length=11)
    shirt_size: models.CharField = models.CharField(max_length=10)

    class Meta:
        db_table = "kits"
        ordering = ["created_at", "id"]

    def clean(self) -> None:
        super().clean()
        self.cpf = sanitize_digits(self.cpf)
        if not CPF().validate(self.cpf):
            raise ValidationError({"cpf": "CPF inválido."})

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.cpf = sanitize_digits(self.cpf)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} ({self.shirt_size})"
