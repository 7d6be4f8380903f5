"""Report DRF serializers.

Input serializers validate query parameters; the view maps the validated
data onto ``ReportFiltersDTO`` before calling the service.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.events.models import Event
from modules.orders.constants import OrderStatus
from modules.reports.constants import ExportFormat

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CommaSeparatedListField(serializers.ListField):
    """Accepts ``"a,b,c"`` (or repeated parameters) as a list."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [item.strip() for item in data.split(",") if item.strip()]
        elif isinstance(data, (list, tuple)):
            data = [
                item.strip()
                for chunk in data
                for item in str(chunk).split(",")
                if item.strip()
            ]
        return super().to_internal_value(data)


class ReportQuerySerializer(serializers.Serializer):
    """Validates the query string of a report download."""

    export_format = serializers.ChoiceField(
        choices=[fmt.value for fmt in ExportFormat],
        default=ExportFormat.EXCEL.value,
    )
    status = CommaSeparatedListField(
        child=serializers.ChoiceField(choices=OrderStatus.choices),
        required=False,
        allow_empty=True,
    )
    zones = CommaSeparatedListField(
        child=serializers.UUIDField(),
        required=False,
        allow_empty=True,
    )


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class ReportEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = Event
        fields = ["id", "name", "date", "location", "city", "state"]
        read_only_fields = fields
