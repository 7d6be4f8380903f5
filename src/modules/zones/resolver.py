"""CEP zone resolution.

A zone is a named delivery region made of one or more inclusive CEP ranges,
a ``priority`` (``1`` is the highest precedence) and an ``active`` flag.
``resolve`` maps a CEP to at most one zone of a catalog snapshot:

1. Inactive zones never match.
2. A zone matches when the CEP falls inside any of its ranges (inclusive).
3. Among several matches the smallest ``priority`` wins; equal priorities
   fall back to the smallest zone ``id`` so the result is always stable.

This module is a leaf: it imports nothing from Django or from other
project modules, so any layer (report assemblers, pricing, admin
diagnostics) can import it directly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

CEP_LENGTH = 8

_NON_DIGITS = re.compile(r"\D")
_RANGE_SEPARATORS = re.compile(r"[\n,;]+")
_RANGE_DELIMITER = "..."


class InvalidCepRange(ValueError):
    """A CEP range is malformed (non 8-digit bound or ``start > end``)."""


# ---------------------------------------------------------------------------
# CEP helpers
# ---------------------------------------------------------------------------


def clean_cep(value: str) -> str:
    """Strip formatting and left-pad to 8 digits (``"58.070-000"`` -> ``"58070000"``)."""
    digits = _NON_DIGITS.sub("", value or "")
    return digits.zfill(CEP_LENGTH) if digits else ""


def is_valid_cep(value: str) -> bool:
    cleaned = clean_cep(value)
    return len(cleaned) == CEP_LENGTH


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CepRange:
    """Inclusive range of CEPs, both bounds stored as 8-digit strings."""

    start: str
    end: str

    def __post_init__(self) -> None:
        start, end = clean_cep(self.start), clean_cep(self.end)
        if len(start) != CEP_LENGTH or len(end) != CEP_LENGTH:
            raise InvalidCepRange(
                f"CEP range bounds must have {CEP_LENGTH} digits: {self.start}...{self.end}"
            )
        if int(start) > int(end):
            raise InvalidCepRange(f"CEP range start is after end: {start}...{end}")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def contains(self, cep: int) -> bool:
        return int(self.start) <= cep <= int(self.end)

    def overlaps(self, other: CepRange) -> bool:
        return int(self.start) <= int(other.end) and int(other.start) <= int(self.end)

    def __str__(self) -> str:
        return f"{self.start}{_RANGE_DELIMITER}{self.end}"


@dataclass(frozen=True)
class ZoneDefinition:
    """Read-only view of a delivery zone used for resolution."""

    id: Any
    name: str
    priority: int = 1
    active: bool = True
    ranges: tuple[CepRange, ...] = field(default_factory=tuple)

    def covers(self, cep: int) -> bool:
        return any(cep_range.contains(cep) for cep_range in self.ranges)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _precedence(zone: ZoneDefinition) -> tuple[int, Any]:
    return (zone.priority, zone.id)


def resolve(zip_code: str, zones: Iterable[ZoneDefinition]) -> Optional[ZoneDefinition]:
    """Return the zone that serves ``zip_code``, or ``None`` if no active zone covers it."""
    cleaned = clean_cep(zip_code)
    if len(cleaned) != CEP_LENGTH:
        return None
    cep = int(cleaned)

    matches = [zone for zone in zones if zone.active and zone.covers(cep)]
    if not matches:
        return None
    return min(matches, key=_precedence)


@dataclass(frozen=True)
class ZoneCatalog:
    """Frozen snapshot of every zone definition at a point in time.

    A report run takes one snapshot and resolves every order against it,
    so concurrent edits to the zone table cannot change results mid-run.
    """

    zones: tuple[ZoneDefinition, ...] = ()

    @classmethod
    def from_definitions(cls, zones: Iterable[ZoneDefinition]) -> ZoneCatalog:
        return cls(zones=tuple(zones))

    def resolve(self, zip_code: str) -> Optional[ZoneDefinition]:
        return resolve(zip_code, self.zones)

    def ids(self) -> frozenset[Any]:
        return frozenset(zone.id for zone in self.zones)

    def __len__(self) -> int:
        return len(self.zones)


# ---------------------------------------------------------------------------
# Admin helpers
# ---------------------------------------------------------------------------


def parse_ranges(text: str) -> tuple[CepRange, ...]:
    """Parse the admin range notation into ``CepRange`` objects.

    Ranges are separated by newlines, commas or semicolons and written as
    ``58083000...58083500``.  A lone CEP is a single-CEP range.

    Raises:
        InvalidCepRange: on any malformed entry or when nothing was parsed.
    """
    ranges: list[CepRange] = []
    for chunk in _RANGE_SEPARATORS.split(text or ""):
        entry = chunk.strip()
        if not entry:
            continue
        if _RANGE_DELIMITER in entry:
            start, _, end = entry.partition(_RANGE_DELIMITER)
        else:
            start = end = entry
        ranges.append(CepRange(start=start.strip(), end=end.strip()))

    if not ranges:
        raise InvalidCepRange("At least one CEP range is required.")
    return tuple(ranges)


def find_overlapping_zone(
    ranges: Sequence[CepRange],
    zones: Iterable[ZoneDefinition],
    exclude_id: Any = None,
) -> Optional[ZoneDefinition]:
    """Return the first active zone whose ranges intersect any of ``ranges``.

    Overlaps are legal (priority settles them), this only tells an
    administrator which zone a new range will compete with.
    """
    for zone in zones:
        if not zone.active or (exclude_id is not None and zone.id == exclude_id):
            continue
        for candidate in ranges:
            if any(candidate.overlaps(existing) for existing in zone.ranges):
                return zone
    return None
