"""Text formatting shared by assemblers and exporters."""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

_CPF_PATTERN = re.compile(r"^(\d{3})(\d{3})(\d{3})(\d{2})$")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")

ELLIPSIS = "..."


def format_cpf(cpf: str) -> str:
    """``"12345678901"`` -> ``"123.456.789-01"``.  Other shapes are returned as-is."""
    digits = re.sub(r"\D", "", cpf or "")
    return _CPF_PATTERN.sub(r"\1.\2.\3-\4", digits) if len(digits) == 11 else (cpf or "")


def format_street_line(street: str, number: str, complement: str | None = None) -> str:
    """``"street, number[, complement]"``."""
    line = f"{street}, {number}"
    if complement:
        line += f", {complement}"
    return line


def format_address(address: Any) -> str:
    """Single-line delivery address: ``street, number[, complement] - neighborhood, city/state``."""
    street_line = format_street_line(address.street, address.number, address.complement)
    return f"{street_line} - {address.neighborhood}, {address.city}/{address.state}"


def format_currency(value: Decimal | float | int) -> str:
    return f"R$ {Decimal(value):.2f}"


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def format_kits_summary(kits: Iterable[Any]) -> str:
    """``"Ana (M), Bruno (G)"``."""
    return ", ".join(f"{kit.name} ({kit.shirt_size})" for kit in kits)


def truncate(text: str, max_length: int) -> str:
    """Cut ``text`` to ``max_length`` characters, ending with an ellipsis when cut."""
    if len(text) <= max_length:
        return text
    return text[: max(max_length - len(ELLIPSIS), 0)] + ELLIPSIS


def slugify_filename(value: str) -> str:
    return _NON_ALNUM.sub("-", value) or "evento"


def as_text(value: Any) -> str:
    """Render a row value for text formats (CSV, PDF)."""
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format_currency(value)
    if isinstance(value, date):
        return format_date(value)
    return str(value)
