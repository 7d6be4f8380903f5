"""Running event a kit pickup belongs to.

Events are maintained by the admin CRUD screens; the report pipeline only
reads them (``name`` feeds the product label and the export filename).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Event(BaseModel):
    name = models.CharField(max_length=255)
    date = models.DateField()
    location = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2)
    pickup_zip_code = models.CharField(max_length=8, blank=True, default="")
    available = models.BooleanField(default=True)

    class Meta:
        db_table = "events"
        ordering = ["date", "name"]
        indexes = [
            models.Index(fields=["available", "date"], name="events_available_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.date:%d/%m/%Y})"
