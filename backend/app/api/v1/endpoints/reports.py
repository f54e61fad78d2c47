from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from backend.app.api.deps import require_report_access
from backend.app.core.database import get_db
from backend.app.models.user import User
from backend.app.schemas.aging import AgingReportOut
from backend.app.services.aging import ReportType
from backend.app.services.export_csv import aging_export_filename, export_aging_csv
from backend.app.services.export_excel import export_aging_excel
from backend.app.services.export_pdf import export_aging_pdf
from backend.app.services.outstanding import get_aging_report as _get_aging_report

router = APIRouter()

_CSV_MIME = "text/csv; charset=utf-8"
_XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
_PDF_MIME = "application/pdf"


def _export_response(buf: object, media_type: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        buf,  # type: ignore[arg-type]
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ── Aging ──────────────────────────────────────────────────────────────────


@router.get("/aging/{station_id}", response_model=AgingReportOut)
def aging_report(
    station_id: str,
    report_type: ReportType = Query(..., alias="type"),
    as_of: datetime | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_report_access),
) -> AgingReportOut:
    report = _get_aging_report(db, station_id, report_type, as_of)
    return AgingReportOut.from_report(report)


# ── Aging exports ──────────────────────────────────────────────────────────


@router.get("/aging/{station_id}/export/csv")
def aging_export_csv(
    station_id: str,
    report_type: ReportType = Query(..., alias="type"),
    as_of: datetime | None = Query(None),
    lang: str = Query("en"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_report_access),
) -> StreamingResponse:
    report = _get_aging_report(db, station_id, report_type, as_of)
    buf = export_aging_csv(report, lang=lang)
    return _export_response(buf, _CSV_MIME, aging_export_filename(report, "csv"))


@router.get("/aging/{station_id}/export/excel")
def aging_export_excel(
    station_id: str,
    report_type: ReportType = Query(..., alias="type"),
    as_of: datetime | None = Query(None),
    lang: str = Query("en"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_report_access),
) -> StreamingResponse:
    report = _get_aging_report(db, station_id, report_type, as_of)
    buf = export_aging_excel(report, lang=lang)
    return _export_response(buf, _XLSX_MIME, aging_export_filename(report, "xlsx"))


@router.get("/aging/{station_id}/export/pdf")
def aging_export_pdf(
    station_id: str,
    report_type: ReportType = Query(..., alias="type"),
    as_of: datetime | None = Query(None),
    lang: str = Query("en"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_report_access),
) -> StreamingResponse:
    report = _get_aging_report(db, station_id, report_type, as_of)
    buf = export_aging_pdf(report, lang=lang)
    return _export_response(buf, _PDF_MIME, aging_export_filename(report, "pdf"))
