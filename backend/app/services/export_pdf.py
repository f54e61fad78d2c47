"""PDF export of aging reports using fpdf2."""
from __future__ import annotations

import io
import logging
from pathlib import Path

from fpdf import FPDF

from backend.app.services.aging import BUCKETS, AgingReport, ReportType
from backend.app.services.currency import format_amount
from backend.app.services.export_csv import aging_detail_headers, aging_detail_row
from backend.app.services.export_i18n import t

logger = logging.getLogger(__name__)

_COL_BG = (31, 78, 121)   # dark blue header
_LINE_H = 7

_FONT_DIR = Path(__file__).parent / "fonts"
_ARABIC_FONT = "NotoSansArabic"

# Landscape A4 leaves ~277mm between margins
_SUMMARY_WIDTHS = [60, 30, 50, 30]
_DETAIL_WIDTHS = [32, 55, 30, 30, 38, 20, 27, 30]


def _setup_font(pdf: FPDF, lang: str) -> tuple[str, str]:
    """Pick the font family; returns (font, effective_lang).

    Arabic needs the bundled Noto font. Without it the export falls back to
    English labels in Helvetica.
    """
    if lang == "ar":
        regular = _FONT_DIR / "NotoSansArabic-Regular.ttf"
        bold = _FONT_DIR / "NotoSansArabic-Bold.ttf"
        if regular.exists() and bold.exists():
            pdf.add_font(_ARABIC_FONT, "", str(regular))
            pdf.add_font(_ARABIC_FONT, "B", str(bold))
            return _ARABIC_FONT, "ar"
        logger.warning("Arabic font not found in %s, exporting PDF in English", _FONT_DIR)
    return "Helvetica", "en"


def _safe_text(text: str, font: str) -> str:
    """Replace characters the built-in fonts cannot encode."""
    if font == _ARABIC_FONT:
        return text
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _header_row(pdf: FPDF, headers: list[str], widths: list[int], font: str) -> None:
    pdf.set_fill_color(*_COL_BG)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font(font, "B", 9)
    for i, (h, w) in enumerate(zip(headers, widths)):
        align = "R" if i > 0 else "L"
        pdf.cell(w, _LINE_H, _safe_text(h, font), border=1, fill=True, align=align)
    pdf.ln()
    pdf.set_text_color(0, 0, 0)


def _data_row(pdf: FPDF, values: list[str], widths: list[int], font: str, bold: bool = False) -> None:
    pdf.set_font(font, "B" if bold else "", 8)
    for i, (v, w) in enumerate(zip(values, widths)):
        align = "R" if i > 0 else "L"
        pdf.cell(w, _LINE_H, _safe_text(v, font), border="B", align=align)
    pdf.ln()


def _to_bytes(pdf: FPDF) -> io.BytesIO:
    buf = io.BytesIO(bytes(pdf.output()))
    buf.seek(0)
    return buf


def export_aging_pdf(report: AgingReport, lang: str = "en") -> io.BytesIO:
    receivable = report.type == ReportType.RECEIVABLE

    pdf = FPDF(orientation="L")
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)
    font, lang = _setup_font(pdf, lang)

    pdf.set_font(font, "B", 16)
    pdf.cell(0, 10, _safe_text(t(lang, "receivable_aging" if receivable else "payable_aging"), font), ln=True)
    pdf.set_font(font, "", 9)
    pdf.cell(0, 6, _safe_text(f"{t(lang, 'as_of')} {report.as_of:%Y-%m-%d %H:%M} UTC", font), ln=True)
    pdf.ln(4)

    # Bucket summary
    _header_row(pdf, [t(lang, "bucket"), t(lang, "count"), t(lang, "amount"), t(lang, "percentage")], _SUMMARY_WIDTHS, font)
    for name in BUCKETS:
        _data_row(pdf, [
            t(lang, name),
            str(report.count(name)),
            format_amount(report.totals[name]),
            f"{report.percentage(name)}%",
        ], _SUMMARY_WIDTHS, font)
    _data_row(pdf, [
        t(lang, "total"),
        str(len(report.details)),
        format_amount(report.grand_total),
        "100%" if report.grand_total else "0%",
    ], _SUMMARY_WIDTHS, font, bold=True)
    pdf.ln(6)

    # Details
    _header_row(pdf, aging_detail_headers(report.type, lang), _DETAIL_WIDTHS, font)
    if report.is_empty:
        pdf.set_font(font, "", 9)
        pdf.cell(0, 10, _safe_text(t(lang, "no_receivable" if receivable else "no_payable"), font), align="C", ln=True)
        return _to_bytes(pdf)

    for aged in report.iter_records():
        values = aging_detail_row(aged, report.type, lang)
        values[1] = values[1][:28]
        values[4] = format_amount(aged.amount)
        _data_row(pdf, values, _DETAIL_WIDTHS, font)

    return _to_bytes(pdf)
