from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel

from backend.app.services.aging import BUCKETS, AgedRecord, AgingReport
from backend.app.services.currency import decimal_text


# ─── Aged record row ─────────────────────────────────────────────────────────


class AgedRecordOut(BaseModel):
    id: str
    reference_number: str | None
    counterparty_name: str | None
    origin_date: datetime | date | None
    due_date: datetime | date | None
    outstanding_amount: str
    currency_code: str
    days_overdue: int  # negative means not yet due
    status: str

    @classmethod
    def from_aged(cls, aged: AgedRecord) -> AgedRecordOut:
        rec = aged.record
        return cls(
            id=rec.id,
            reference_number=rec.reference_number,
            counterparty_name=rec.counterparty_name,
            origin_date=rec.origin_date,
            due_date=rec.due_date,
            outstanding_amount=decimal_text(aged.amount),
            currency_code=rec.currency_code,
            days_overdue=aged.days_overdue,
            status=aged.status,
        )


# ─── Per-bucket maps ─────────────────────────────────────────────────────────


class AgingBucketsOut(BaseModel):
    current: list[AgedRecordOut]
    days30: list[AgedRecordOut]
    days60: list[AgedRecordOut]
    days90: list[AgedRecordOut]
    over90: list[AgedRecordOut]


class AgingTotalsOut(BaseModel):
    current: str
    days30: str
    days60: str
    days90: str
    over90: str


class AgingCountsOut(BaseModel):
    current: int
    days30: int
    days60: int
    days90: int
    over90: int


class DataQualityWarningOut(BaseModel):
    record_id: str
    code: str
    message: str


# ─── Report ──────────────────────────────────────────────────────────────────


class AgingReportOut(BaseModel):
    type: str
    as_of: datetime
    buckets: AgingBucketsOut
    totals: AgingTotalsOut
    grand_total: str
    percentages: AgingCountsOut
    counts: AgingCountsOut
    details: list[AgedRecordOut]
    warnings: list[DataQualityWarningOut]
    currency_totals: dict[str, dict[str, str]] | None = None

    @classmethod
    def from_report(cls, report: AgingReport) -> AgingReportOut:
        currency_totals = None
        if report.currency_totals is not None:
            currency_totals = {
                code: {k: decimal_text(v) for k, v in totals.items()}
                for code, totals in report.currency_totals.items()
            }
        return cls(
            type=report.type.value,
            as_of=report.as_of,
            buckets=AgingBucketsOut(**{
                name: [AgedRecordOut.from_aged(a) for a in report.buckets[name]]
                for name in BUCKETS
            }),
            totals=AgingTotalsOut(**{name: decimal_text(report.totals[name]) for name in BUCKETS}),
            grand_total=decimal_text(report.grand_total),
            percentages=AgingCountsOut(**{name: report.percentage(name) for name in BUCKETS}),
            counts=AgingCountsOut(**{name: report.count(name) for name in BUCKETS}),
            details=[AgedRecordOut.from_aged(a) for a in report.details],
            warnings=[
                DataQualityWarningOut(record_id=w.record_id, code=w.code, message=w.message)
                for w in report.warnings
            ],
            currency_totals=currency_totals,
        )
