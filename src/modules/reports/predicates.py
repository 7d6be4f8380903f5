"""Query predicates for report data.

Filters are composed once into a single ``Q`` object and applied in one
query, instead of branching into different querysets per filter.
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from django.db.models import Q


def build_order_predicate(
    event_id: UUID | str,
    statuses: Optional[Iterable[str]] = None,
) -> Q:
    """Live orders of ``event_id``, optionally restricted to ``statuses``."""
    predicate = Q(event_id=event_id) & Q(deleted_at__isnull=True)
    if statuses:
        predicate &= Q(status__in=sorted(set(statuses)))
    return predicate
