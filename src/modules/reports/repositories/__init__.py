"""Report data repositories package."""

from modules.reports.repositories.django_repository import ReportDataDjangoRepository
from modules.reports.repositories.interfaces import IReportDataRepository

__all__ = ["IReportDataRepository", "ReportDataDjangoRepository"]
