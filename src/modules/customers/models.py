"""Customer and delivery address models.

Business rules implemented:
- CPF is unique per customer and stored as digits only.
- CPF is validated with *validate-docbr* on ``clean()``.
- CPF is masked in ``__str__`` so it never leaks into logs.
- An address always belongs to a customer; ``zip_code`` is an 8-digit CEP.
"""

from __future__ import annotations

import re

import structlog
from validate_docbr import CPF

from django.core.exceptions import ValidationError
from django.db import models

from modules.core.models import BaseModel, SoftDeleteModel

logger = structlog.get_logger(__name__)


def sanitize_digits(value: str) -> str:
    """Strip every non-digit character."""
    return re.sub(r"\D", "", value or "")


class Customer(SoftDeleteModel):
    name = models.CharField(max_length=255)
    cpf = models.CharField(max_length=11, unique=True)
    email = models.EmailField(max_length=254)
    phone = models.CharField(max_length=20, blank=True, default="")

    class Meta:
        db_table = "customers"
        ordering = ["name"]

    def clean(self) -> None:
        super().clean()
        self.cpf = sanitize_digits(self.cpf)
        if not CPF().validate(self.cpf):
            logger.warning("customer.invalid_cpf", cpf_suffix=self.cpf[-4:])
            raise ValidationError({"cpf": "CPF inválido."})

    def save(self, *args, **kwargs) -> None:
        self.cpf = sanitize_digits(self.cpf)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        suffix = self.cpf[-4:] if self.cpf else "????"
        return f"{self.name} (CPF: ***{suffix})"


class Address(BaseModel):
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.CASCADE,
        related_name="addresses",
    )
    label = models.CharField(max_length=50, default="casa")
    street = models.CharField(max_length=255)
    number = models.CharField(max_length=20)
    complement = models.CharField(max_length=255, blank=True, default="")
    neighborhood = models.CharField(max_length=100)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2, default="PB")
    zip_code = models.CharField(max_length=8)
    is_default = models.BooleanField(default=False)

    class Meta:
        db_table = "addresses"
        ordering = ["-is_default", "created_at"]

    def clean(self) -> None:
        super().clean()
        self.zip_code = sanitize_digits(self.zip_code)
        if len(self.zip_code) != 8:
            raise ValidationError({"zip_code": "CEP deve ter 8 dígitos."})

    def save(self, *args, **kwargs) -> None:
        self.zip_code = sanitize_digits(self.zip_code)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.street}, {self.number} - {self.city}/{self.state}"
