from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from backend.app.core.config import settings
from backend.app.models.customer import Customer
from backend.app.models.sales import SalesTransaction
from backend.app.models.supplier import POStatus, PurchaseOrder, Supplier
from backend.app.services.aging import (
    AgingReport,
    OutstandingRecord,
    ReportType,
    compute_aging_report,
)

logger = logging.getLogger(__name__)


def load_receivables(db: Session, station_id: str) -> list[OutstandingRecord]:
    """Unpaid sales transactions for a station, earliest due first (undated last)."""
    rows = (
        db.query(SalesTransaction, Customer.name)
        .outerjoin(Customer, SalesTransaction.customer_id == Customer.id)
        .filter(
            SalesTransaction.station_id == station_id,
            SalesTransaction.outstanding_amount > 0,
        )
        .order_by(
            SalesTransaction.due_date.is_(None),
            SalesTransaction.due_date,
            SalesTransaction.transaction_date,
        )
        .all()
    )
    return [
        OutstandingRecord(
            id=str(txn.id),
            reference_number=txn.invoice_number,
            counterparty_name=customer_name,
            origin_date=txn.transaction_date,
            due_date=txn.due_date,
            outstanding_amount=txn.outstanding_amount,
            currency_code=txn.currency_code or settings.DEFAULT_CURRENCY,
        )
        for txn, customer_name in rows
    ]


def load_payables(db: Session, station_id: str) -> list[OutstandingRecord]:
    """Purchase orders with an unpaid balance, earliest due first (undated last)."""
    balance = PurchaseOrder.total_amount - PurchaseOrder.paid_amount
    rows = (
        db.query(PurchaseOrder, Supplier.name)
        .outerjoin(Supplier, PurchaseOrder.supplier_id == Supplier.id)
        .filter(
            PurchaseOrder.station_id == station_id,
            PurchaseOrder.status != POStatus.CANCELLED,
            balance > 0,
        )
        .order_by(
            PurchaseOrder.due_date.is_(None),
            PurchaseOrder.due_date,
            PurchaseOrder.order_date,
        )
        .all()
    )
    return [
        OutstandingRecord(
            id=str(po.id),
            reference_number=po.order_number,
            counterparty_name=supplier_name,
            origin_date=po.order_date,
            due_date=po.due_date,
            outstanding_amount=po.total_amount - po.paid_amount,
            currency_code=po.currency_code or settings.DEFAULT_CURRENCY,
        )
        for po, supplier_name in rows
    ]


def load_outstanding(
    db: Session, station_id: str, report_type: ReportType
) -> list[OutstandingRecord]:
    if report_type == ReportType.RECEIVABLE:
        return load_receivables(db, station_id)
    return load_payables(db, station_id)


def get_aging_report(
    db: Session,
    station_id: str,
    report_type: ReportType | str,
    now: datetime | None = None,
) -> AgingReport:
    """Load a station's open receivables or payables and age them."""
    rtype = ReportType(report_type)
    records = load_outstanding(db, station_id, rtype)
    report = compute_aging_report(
        records,
        rtype,
        now,
        group_by_currency=settings.AGING_GROUP_BY_CURRENCY,
    )
    logger.info(
        "Aging %s report for station %s: %d records, grand total %s",
        rtype.value,
        station_id,
        len(report.details),
        report.grand_total,
    )
    return report
