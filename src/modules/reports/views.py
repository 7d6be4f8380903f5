"""Report API views.

Exposes ``ReportService`` via HTTP.  Domain exceptions are translated
into status codes here; anything unexpected propagates to DRF.
"""

from __future__ import annotations

from uuid import UUID

from django.http import HttpResponse
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.reports.constants import ReportType
from modules.reports.dtos import ReportFiltersDTO
from modules.reports.exceptions import (
    EventNotFound,
    InvalidReportFilter,
    UnsupportedFormat,
)
from modules.reports.repositories import ReportDataDjangoRepository
from modules.reports.serializers import ReportEventSerializer, ReportQuerySerializer
from modules.reports.services import ReportService


def _report_service() -> ReportService:
    return ReportService(repository=ReportDataDjangoRepository())


def _parse_report_type(value: str) -> ReportType:
    try:
        return ReportType(value)
    except ValueError as exc:
        raise InvalidReportFilter(f"Tipo de relatório desconhecido: '{value}'.") from exc


class ReportEventsView(APIView):
    """GET /api/v1/reports/events/"""

    def get(self, request: Request) -> Response:
        events = _report_service().list_report_events()
        return Response(ReportEventSerializer(events, many=True).data)


class ReportDownloadView(APIView):
    """GET /api/v1/reports/{report_type}/{event_id}/

    Query parameters: ``export_format`` (excel|csv|pdf), ``status`` and
    ``zones`` (comma separated).
    """

    throttle_scope = "report_generation"

    def get(self, request: Request, report_type: str, event_id: UUID) -> HttpResponse:
        query = ReportQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        data = query.validated_data

        try:
            filters = ReportFiltersDTO(
                event_id=event_id,
                statuses=frozenset(data.get("status") or ()),
                zone_ids=frozenset(data.get("zones") or ()),
            )
            report = _report_service().dispatch(
                _parse_report_type(report_type),
                data["export_format"],
                filters,
            )
        except InvalidReportFilter as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except UnsupportedFormat as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except EventNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        response = HttpResponse(report.content, content_type=report.content_type)
        response["Content-Disposition"] = f'attachment; filename="{report.filename}"'
        response["X-Report-Rows"] = str(report.row_count)
        return response
