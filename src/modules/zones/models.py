"""CEP zone persistence.

``cep_ranges`` stores a JSON list of ``{"start": "58000000", "end": "58099999"}``
objects.  Admin forms may also send the text notation accepted by
``parse_ranges`` (``"58083000...58083500; 58090000"``); ``clean()``
normalises it into the JSON list.

``to_definition()`` converts a row into the immutable ``ZoneDefinition``
the resolver works on.  ``save()`` does not run ``clean()``, so a stored
zone may have no usable ranges: such a zone is exported with an empty
range tuple and never matches a CEP.
"""

from __future__ import annotations

from typing import Any, Iterable

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.zones.resolver import (
    CepRange,
    InvalidCepRange,
    ZoneDefinition,
    find_overlapping_zone,
    parse_ranges,
)

logger = structlog.get_logger(__name__)


def _coerce_ranges(raw: Any) -> tuple[CepRange, ...]:
    if isinstance(raw, str):
        return parse_ranges(raw)
    if not isinstance(raw, list) or not raw:
        raise InvalidCepRange("At least one CEP range is required.")
    ranges = []
    for item in raw:
        if not isinstance(item, dict) or "start" not in item or "end" not in item:
            raise InvalidCepRange(f"Malformed CEP range entry: {item!r}")
        ranges.append(CepRange(start=str(item["start"]), end=str(item["end"])))
    return tuple(ranges)


class CepZone(BaseModel):
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    priority = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        help_text="1 is the highest precedence when ranges overlap.",
    )
    active = models.BooleanField(default=True)
    cep_ranges = models.JSONField(default=list)

    class Meta:
        db_table = "cep_zones"
        ordering = ["priority", "id"]

    @property
    def ranges(self) -> tuple[CepRange, ...]:
        """Validated ranges.  Raises ``InvalidCepRange`` on empty or malformed data."""
        return _coerce_ranges(self.cep_ranges)

    def set_ranges(self, ranges: Iterable[CepRange]) -> None:
        self.cep_ranges = [{"start": r.start, "end": r.end} for r in ranges]

    def clean(self) -> None:
        super().clean()
        try:
            self.set_ranges(self.ranges)
        except InvalidCepRange as exc:
            raise ValidationError({"cep_ranges": str(exc)}) from exc
        self._warn_overlaps()

    def _warn_overlaps(self) -> None:
        others = (
            zone.to_definition()
            for zone in CepZone.objects.filter(active=True).exclude(pk=self.pk)
        )
        competing = find_overlapping_zone(self.ranges, others)
        if competing is not None:
            # overlaps are legal, priority settles them
            logger.warning(
                "zone.ranges_overlap",
                zone_name=self.name,
                priority=self.priority,
                competing_zone=competing.name,
                competing_priority=competing.priority,
            )

    def to_definition(self) -> ZoneDefinition:
        return ZoneDefinition(
            id=self.id,
            name=self.name,
            priority=self.priority,
            active=self.active,
            ranges=self._stored_ranges(),
        )

    def _stored_ranges(self) -> tuple[CepRange, ...]:
        if not self.cep_ranges:
            return ()
        try:
            return self.ranges
        except InvalidCepRange as exc:
            logger.warning("zone.invalid_ranges_ignored", zone_id=str(self.id), error=str(exc))
            return ()

    def __str__(self) -> str:
        return f"{self.name} (P{self.priority}{'' if self.active else ', inativa'})"
