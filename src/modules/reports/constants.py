"""Report domain constants."""

from __future__ import annotations

from enum import StrEnum


class ReportType(StrEnum):
    KITS = "kits"
    CIRCUIT = "circuit"
    ORDERS = "orders"


class ExportFormat(StrEnum):
    EXCEL = "excel"
    CSV = "csv"
    PDF = "pdf"


CONTENT_TYPES: dict[ExportFormat, str] = {
    ExportFormat.EXCEL: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.CSV: "text/csv; charset=utf-8",
    ExportFormat.PDF: "application/pdf",
}

FILE_EXTENSIONS: dict[ExportFormat, str] = {
    ExportFormat.EXCEL: "xlsx",
    ExportFormat.CSV: "csv",
    ExportFormat.PDF: "pdf",
}

REPORT_TITLES: dict[ReportType, str] = {
    ReportType.KITS: "Relatório de Kits",
    ReportType.CIRCUIT: "Relatório de Circuito",
    ReportType.ORDERS: "Relatório de Pedidos",
}

UNKNOWN_ZONE_LABEL = "Não identificada"
KIT_PRODUCT_PREFIX = "[Retirada do Kit] "
CIRCUIT_EXTRA_INFO_PREFIX = "Pedido - "
EVENT_NOT_FOUND_MESSAGE = "Evento não encontrado"
