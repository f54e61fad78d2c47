"""Excel export of aging reports using openpyxl."""
from __future__ import annotations

import io
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from backend.app.services.aging import BUCKETS, AgingReport, ReportType
from backend.app.services.export_csv import aging_detail_headers, aging_detail_row
from backend.app.services.export_i18n import t

# ── Shared styling constants ────────────────────────────────────────────────

_HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
_HEADER_FILL = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
_SECTION_FONT = Font(name="Calibri", bold=True, size=11)
_TOTAL_FONT = Font(name="Calibri", bold=True, size=11)
_TOTAL_BORDER = Border(
    top=Side(style="thin"),
    bottom=Side(style="double"),
)
_CURRENCY_FMT = "#,##0.00"
_RIGHT = Alignment(horizontal="right")
_LEFT = Alignment(horizontal="left")

# Detail columns holding numbers (1-based): amount, days overdue
_AMOUNT_COL = 5
_DAYS_COL = 7


def _auto_width(ws: Any) -> None:
    """Auto-fit column widths based on content."""
    for col_idx in range(1, ws.max_column + 1):
        max_len = 0
        col_letter = get_column_letter(col_idx)
        for row in ws.iter_rows(min_col=col_idx, max_col=col_idx, values_only=False):
            cell = row[0]
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_len + 4, 40)


def _write_header_row(ws: Any, row: int, values: list[str]) -> None:
    for col, val in enumerate(values, 1):
        cell = ws.cell(row=row, column=col, value=val)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _RIGHT if col > 1 else _LEFT


def _write_title(ws: Any, title: str, subtitle: str) -> int:
    """Write report title and subtitle, return next available row."""
    ws.cell(row=1, column=1, value=title).font = Font(name="Calibri", bold=True, size=14)
    ws.cell(row=2, column=1, value=subtitle).font = Font(name="Calibri", size=10, italic=True)
    return 4


def _to_workbook(ws: Any, wb: Workbook) -> io.BytesIO:
    _auto_width(ws)
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf


def export_aging_excel(report: AgingReport, lang: str = "en") -> io.BytesIO:
    receivable = report.type == ReportType.RECEIVABLE
    title = t(lang, "receivable_aging" if receivable else "payable_aging")

    wb = Workbook()
    ws = wb.active
    # Sheet titles are capped at 31 characters
    ws.title = title[:31]

    row = _write_title(ws, title, f"{t(lang, 'as_of')} {report.as_of:%Y-%m-%d %H:%M} UTC")

    # Bucket summary
    _write_header_row(ws, row, [t(lang, "bucket"), t(lang, "count"), t(lang, "amount"), t(lang, "percentage")])
    row += 1
    for name in BUCKETS:
        ws.cell(row=row, column=1, value=t(lang, name))
        ws.cell(row=row, column=2, value=report.count(name)).alignment = _RIGHT
        c = ws.cell(row=row, column=3, value=float(report.totals[name]))
        c.number_format = _CURRENCY_FMT
        c.alignment = _RIGHT
        ws.cell(row=row, column=4, value=f"{report.percentage(name)}%").alignment = _RIGHT
        row += 1

    ws.cell(row=row, column=1, value=t(lang, "total_receivable" if receivable else "total_payable")).font = _TOTAL_FONT
    c = ws.cell(row=row, column=2, value=len(report.details))
    c.font = _TOTAL_FONT
    c.alignment = _RIGHT
    c = ws.cell(row=row, column=3, value=float(report.grand_total))
    c.number_format = _CURRENCY_FMT
    c.font = _TOTAL_FONT
    c.border = _TOTAL_BORDER
    c.alignment = _RIGHT
    row += 2

    # Details
    _write_header_row(ws, row, aging_detail_headers(report.type, lang))
    row += 1
    if report.is_empty:
        ws.cell(row=row, column=1, value=t(lang, "no_receivable" if receivable else "no_payable")).font = _SECTION_FONT
        return _to_workbook(ws, wb)

    for aged in report.iter_records():
        values = aging_detail_row(aged, report.type, lang)
        for col, val in enumerate(values, 1):
            if col == _AMOUNT_COL:
                c = ws.cell(row=row, column=col, value=float(aged.amount))
                c.number_format = _CURRENCY_FMT
                c.alignment = _RIGHT
            elif col == _DAYS_COL:
                ws.cell(row=row, column=col, value=aged.days_overdue).alignment = _RIGHT
            else:
                ws.cell(row=row, column=col, value=val)
        row += 1

    return _to_workbook(ws, wb)
