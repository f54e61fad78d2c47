"""Aging-bucket aggregation for receivable and payable reports.

``compute_aging_report`` is a pure function: callers hand it the outstanding
records (see ``backend.app.services.outstanding`` for the database loader)
plus a reference instant, and get back an immutable ``AgingReport``.
"""
from __future__ import annotations

import enum
import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from types import MappingProxyType

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
_HUNDRED = Decimal("100")


class ReportType(str, enum.Enum):
    RECEIVABLE = "receivable"
    PAYABLE = "payable"


# Fixed display/export order.
BUCKETS: tuple[str, ...] = ("current", "days30", "days60", "days90", "over90")

BUCKET_LABELS: dict[str, str] = {
    "current": "Current",
    "days30": "1-30 Days",
    "days60": "31-60 Days",
    "days90": "61-90 Days",
    "over90": "90+ Days",
}


def bucket(days_overdue: int) -> str:
    """Assign an aging bucket based on days overdue."""
    if days_overdue <= 0:
        return "current"
    elif days_overdue <= 30:
        return "days30"
    elif days_overdue <= 60:
        return "days60"
    elif days_overdue <= 90:
        return "days90"
    else:
        return "over90"


def status_label(days_overdue: int) -> str:
    return BUCKET_LABELS[bucket(days_overdue)]


def empty_buckets() -> dict[str, Decimal]:
    return {name: ZERO for name in BUCKETS}


# ─── Value objects ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class OutstandingRecord:
    """One unpaid sales invoice or purchase order.

    ``outstanding_amount`` is kept as delivered by the source; the aggregator
    coerces it to ``Decimal``.
    """

    id: str
    reference_number: str | None
    counterparty_name: str | None
    origin_date: date | None
    due_date: date | None
    outstanding_amount: Decimal | int | float | str | None
    currency_code: str = "PKR"


@dataclass(frozen=True)
class AgedRecord:
    record: OutstandingRecord
    days_overdue: int
    bucket: str
    amount: Decimal

    @property
    def status(self) -> str:
        return BUCKET_LABELS[self.bucket]


@dataclass(frozen=True)
class DataQualityWarning:
    record_id: str
    code: str
    message: str


@dataclass(frozen=True)
class AgingReport:
    type: ReportType
    as_of: datetime
    buckets: Mapping[str, tuple[AgedRecord, ...]]
    totals: Mapping[str, Decimal]
    grand_total: Decimal
    details: tuple[AgedRecord, ...] = ()
    warnings: tuple[DataQualityWarning, ...] = ()
    # currency code -> bucket totals plus "grand_total"; only when grouping
    currency_totals: Mapping[str, Mapping[str, Decimal]] | None = None

    def percentage(self, name: str) -> int:
        """Share of the grand total held by bucket *name*, rounded half-up."""
        total = self.totals[name]
        if self.grand_total == ZERO:
            return 0
        share = total / self.grand_total * _HUNDRED
        return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def count(self, name: str) -> int:
        return len(self.buckets[name])

    @property
    def is_empty(self) -> bool:
        return all(not self.buckets[name] for name in BUCKETS)

    def iter_records(self) -> Iterator[AgedRecord]:
        """Yield every classified record, bucket by bucket in fixed order."""
        for name in BUCKETS:
            yield from self.buckets[name]


# ─── Helpers ─────────────────────────────────────────────────────────────────


def coerce_amount(value: object) -> Decimal | None:
    """Parse an outstanding amount, returning None when it is not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite():
        return None
    return amount


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps from the database are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def days_overdue(reference: date, now: datetime) -> int:
    """Whole days elapsed from *reference* to *now*, floored.

    A ``datetime`` reference is compared instant-to-instant; a plain ``date``
    is compared with the UTC calendar date of *now*.
    """
    now = _as_utc(now)
    if isinstance(reference, datetime):
        return (now - _as_utc(reference)).days
    return (now.astimezone(timezone.utc).date() - reference).days


# ─── Aggregation ─────────────────────────────────────────────────────────────


def compute_aging_report(
    records: Sequence[OutstandingRecord],
    report_type: ReportType | str,
    now: datetime | None = None,
    *,
    group_by_currency: bool = False,
) -> AgingReport:
    """Partition *records* into aging buckets relative to *now*.

    Records without a due date are aged from their origin date; records with
    neither are left out. Amounts that cannot be parsed count as zero. Both
    cases are reported in ``AgingReport.warnings`` instead of raising.
    """
    if report_type is None:
        raise ValueError("report_type is required")
    try:
        rtype = ReportType(report_type)
    except ValueError:
        raise ValueError(
            f"Unknown report type {report_type!r}; expected 'receivable' or 'payable'"
        ) from None
    if not isinstance(records, (list, tuple)):
        raise TypeError(
            f"records must be a list or tuple of OutstandingRecord, got {type(records).__name__}"
        )

    as_of = _as_utc(now) if now is not None else datetime.now(timezone.utc)

    grouped: dict[str, list[AgedRecord]] = {name: [] for name in BUCKETS}
    totals = empty_buckets()
    by_currency: dict[str, dict[str, Decimal]] = {}
    details: list[AgedRecord] = []
    warnings: list[DataQualityWarning] = []

    def flag(rec: OutstandingRecord, code: str, message: str) -> None:
        logger.warning("Aging %s record %s: %s", rtype.value, rec.id, message)
        warnings.append(DataQualityWarning(record_id=rec.id, code=code, message=message))

    for rec in records:
        if not isinstance(rec, OutstandingRecord):
            raise TypeError(f"expected OutstandingRecord, got {type(rec).__name__}")

        reference = rec.due_date if rec.due_date is not None else rec.origin_date
        if reference is None:
            flag(rec, "missing_reference_date", "no due date or origin date; excluded from aging")
            continue

        amount = coerce_amount(rec.outstanding_amount)
        if amount is None:
            flag(
                rec,
                "unparseable_amount",
                f"outstanding amount {rec.outstanding_amount!r} is not numeric; counted as 0",
            )
            amount = ZERO
        elif amount < ZERO:
            flag(rec, "negative_amount", f"outstanding amount {amount} is negative")

        days = days_overdue(reference, as_of)
        bkt = bucket(days)
        aged = AgedRecord(record=rec, days_overdue=days, bucket=bkt, amount=amount)

        grouped[bkt].append(aged)
        details.append(aged)
        totals[bkt] += amount
        if group_by_currency:
            cur = by_currency.setdefault(rec.currency_code or "", empty_buckets())
            cur[bkt] += amount

    grand_total = sum(totals.values(), ZERO)

    currency_totals = None
    if group_by_currency:
        currency_totals = MappingProxyType({
            code: MappingProxyType({**b, "grand_total": sum(b.values(), ZERO)})
            for code, b in sorted(by_currency.items())
        })

    return AgingReport(
        type=rtype,
        as_of=as_of,
        buckets=MappingProxyType({name: tuple(grouped[name]) for name in BUCKETS}),
        totals=MappingProxyType(totals),
        grand_total=grand_total,
        details=tuple(details),
        warnings=tuple(warnings),
        currency_totals=currency_totals,
    )
