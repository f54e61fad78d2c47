"""CSV export of aging reports, plus the detail-row layout shared by all exports."""
from __future__ import annotations

import csv
import io
from datetime import date

from backend.app.services.aging import AgedRecord, AgingReport, ReportType
from backend.app.services.currency import decimal_text
from backend.app.services.export_i18n import t


def aging_export_filename(report: AgingReport, ext: str) -> str:
    return f"aging-report-{report.type.value}-{report.as_of:%Y-%m-%d}.{ext}"


def _fmt_date(value: date | None, lang: str) -> str:
    return value.strftime("%Y-%m-%d") if value is not None else t(lang, "n_a")


def aging_detail_headers(report_type: ReportType, lang: str = "en") -> list[str]:
    if report_type == ReportType.RECEIVABLE:
        first = ["invoice_number", "customer_name", "transaction_date"]
    else:
        first = ["order_number", "supplier_name", "order_date"]
    keys = first + [
        "due_date",
        "outstanding_amount",
        "currency",
        "days_overdue",
        "status",
    ]
    return [t(lang, k) for k in keys]


def aging_detail_row(aged: AgedRecord, report_type: ReportType, lang: str = "en") -> list[str]:
    rec = aged.record
    unknown = "unknown_customer" if report_type == ReportType.RECEIVABLE else "unknown_supplier"
    return [
        rec.reference_number or t(lang, "n_a"),
        rec.counterparty_name or t(lang, unknown),
        _fmt_date(rec.origin_date, lang),
        _fmt_date(rec.due_date, lang),
        decimal_text(aged.amount),
        rec.currency_code or "",
        str(aged.days_overdue),
        t(lang, aged.bucket),
    ]


def export_aging_csv(report: AgingReport, lang: str = "en") -> io.BytesIO:
    """One quoted row per record, buckets in fixed order, UTF-8 with BOM for Excel."""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(aging_detail_headers(report.type, lang))
    for aged in report.iter_records():
        writer.writerow(aging_detail_row(aged, report.type, lang))
    return io.BytesIO(output.getvalue().encode("utf-8-sig"))
