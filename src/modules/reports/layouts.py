"""Column layouts for every supported (report type, export format) pair.

The keys of ``LAYOUTS`` *are* the support matrix: a pair that is not
listed here is an unsupported format for that report.

``Column.width`` is expressed in the unit of the target format: character
widths for Excel, points for PDF; CSV ignores it.
"""

from __future__ import annotations

from dataclasses import dataclass

from modules.reports.constants import REPORT_TITLES, ExportFormat, ReportType


@dataclass(frozen=True)
class Column:
    header: str
    field: str
    width: float = 0


@dataclass(frozen=True)
class ReportLayout:
    report_type: ReportType
    export_format: ExportFormat
    columns: tuple[Column, ...]
    # Excel: alternate the row fill whenever this field changes value.
    group_by: str | None = None
    # PDF: shade every other data row.
    striped: bool = False
    # PDF: fields cut with an ellipsis past the configured length.
    truncate_fields: frozenset[str] = frozenset()

    @property
    def title(self) -> str:
        return REPORT_TITLES[self.report_type]

    @property
    def headers(self) -> list[str]:
        return [column.header for column in self.columns]


# ---------------------------------------------------------------------------
# Kits
# ---------------------------------------------------------------------------

KITS_EXCEL_COLUMNS = (
    Column("Nº Pedido", "order_number", 15),
    Column("Nome do Atleta", "athlete_name", 25),
    Column("CPF", "cpf", 15),
    Column("Camisa", "shirt_size", 12),
    Column("Produto", "product_label", 40),
    Column("Cliente Responsável", "customer_name", 25),
    Column("Endereço de Entrega", "delivery_address", 50),
)

KITS_SUMMARY_HEADERS = (
    ("Nº Pedido", "order_number"),
    ("Nome do Atleta", "athlete_name"),
    ("CPF", "cpf"),
    ("Camisa", "shirt_size"),
)

KITS_PDF_COLUMNS = tuple(
    Column(header, field, width)
    for (header, field), width in zip(KITS_SUMMARY_HEADERS, (90, 225, 110, 90))
)

KITS_CSV_COLUMNS = tuple(Column(header, field) for header, field in KITS_SUMMARY_HEADERS)

# ---------------------------------------------------------------------------
# Circuit (address import sheet for route planning, headers in English)
# ---------------------------------------------------------------------------

CIRCUIT_EXCEL_COLUMNS = (
    Column("Address Line 1", "address_line1", 45),
    Column("City", "city", 20),
    Column("State", "state", 10),
    Column("Postal Code", "postal_code", 15),
    Column("Extra Info", "extra_info", 25),
)

# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

ORDERS_FULL_COLUMNS = (
    Column("Nº Pedido", "order_number", 15),
    Column("Cliente", "customer_name", 30),
    Column("CPF", "customer_cpf", 16),
    Column("Status", "status", 22),
    Column("Valor Total", "total_value", 14),
    Column("Zona CEP", "cep_zone_name", 22),
    Column("Kits", "kits_summary", 45),
    Column("Endereço", "address", 55),
    Column("Data do Pedido", "order_date", 15),
    Column("Pagamento", "payment_method", 14),
)

ORDERS_PDF_COLUMNS = (
    Column("Pedido", "order_number", 80),
    Column("Cliente", "customer_name", 170),
    Column("Status", "status", 110),
    Column("Valor", "total_value", 70),
    Column("Zona CEP", "cep_zone_name", 85),
)


LAYOUTS: dict[tuple[ReportType, ExportFormat], ReportLayout] = {
    (ReportType.KITS, ExportFormat.EXCEL): ReportLayout(
        ReportType.KITS,
        ExportFormat.EXCEL,
        KITS_EXCEL_COLUMNS,
        group_by="order_number",
    ),
    (ReportType.KITS, ExportFormat.PDF): ReportLayout(
        ReportType.KITS,
        ExportFormat.PDF,
        KITS_PDF_COLUMNS,
        striped=True,
        truncate_fields=frozenset({"athlete_name"}),
    ),
    (ReportType.KITS, ExportFormat.CSV): ReportLayout(
        ReportType.KITS,
        ExportFormat.CSV,
        KITS_CSV_COLUMNS,
    ),
    (ReportType.CIRCUIT, ExportFormat.EXCEL): ReportLayout(
        ReportType.CIRCUIT,
        ExportFormat.EXCEL,
        CIRCUIT_EXCEL_COLUMNS,
    ),
    (ReportType.ORDERS, ExportFormat.EXCEL): ReportLayout(
        ReportType.ORDERS,
        ExportFormat.EXCEL,
        ORDERS_FULL_COLUMNS,
    ),
    (ReportType.ORDERS, ExportFormat.CSV): ReportLayout(
        ReportType.ORDERS,
        ExportFormat.CSV,
        tuple(Column(column.header, column.field) for column in ORDERS_FULL_COLUMNS),
    ),
    (ReportType.ORDERS, ExportFormat.PDF): ReportLayout(
        ReportType.ORDERS,
        ExportFormat.PDF,
        ORDERS_PDF_COLUMNS,
        truncate_fields=frozenset({"customer_name"}),
    ),
}


def get_layout(report_type: ReportType, export_format: ExportFormat) -> ReportLayout | None:
    return LAYOUTS.get((report_type, export_format))


def supported_formats(report_type: ReportType) -> list[ExportFormat]:
    return [fmt for (rtype, fmt) in LAYOUTS if rtype == report_type]
