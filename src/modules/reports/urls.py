"""Report URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.reports.views import ReportDownloadView, ReportEventsView

urlpatterns = [
    path("reports/events/", ReportEventsView.as_view(), name="report-events"),
    path(
        "reports/<str:report_type>/<uuid:event_id>/",
        ReportDownloadView.as_view(),
        name="report-download",
    ),
]
