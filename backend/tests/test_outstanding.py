"""Tests for loading open receivables/payables from the database."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from backend.app.core.config import settings
from backend.app.models.customer import Customer
from backend.app.models.supplier import POStatus, Supplier
from backend.app.services.aging import ReportType
from backend.app.services.outstanding import (
    get_aging_report,
    load_outstanding,
    load_payables,
    load_receivables,
)
from backend.tests.conftest import NOW, OTHER_STATION_ID, STATION_ID, add_order, add_sale


class TestLoadReceivables:
    def test_only_unpaid_sales_for_station(self, db: Session, customer: Customer) -> None:
        add_sale(db, "INV-1", customer=customer, days_overdue=10, outstanding="150.00")
        add_sale(db, "INV-2", customer=customer, days_overdue=10, outstanding="0")
        add_sale(db, "INV-3", customer=customer, days_overdue=10, outstanding="90.00",
                 station_id=OTHER_STATION_ID)

        records = load_receivables(db, STATION_ID)

        assert [r.reference_number for r in records] == ["INV-1"]
        rec = records[0]
        assert rec.counterparty_name == "City Transport Fleet"
        assert Decimal(rec.outstanding_amount) == Decimal("150.00")
        assert rec.currency_code == "PKR"

    def test_sale_without_customer(self, db: Session) -> None:
        add_sale(db, "INV-9", customer=None, days_overdue=3, outstanding="20")
        records = load_receivables(db, STATION_ID)
        assert records[0].counterparty_name is None

    def test_ordered_by_due_date_with_undated_last(self, db: Session, customer: Customer) -> None:
        add_sale(db, "INV-A", customer=customer, days_overdue=None, outstanding="1")
        add_sale(db, "INV-B", customer=customer, days_overdue=5, outstanding="1")
        add_sale(db, "INV-C", customer=customer, days_overdue=80, outstanding="1")

        records = load_receivables(db, STATION_ID)
        assert [r.reference_number for r in records] == ["INV-C", "INV-B", "INV-A"]

    def test_no_records(self, db: Session) -> None:
        assert load_receivables(db, STATION_ID) == []


class TestLoadPayables:
    def test_balance_is_total_minus_paid(self, db: Session, supplier: Supplier) -> None:
        add_order(db, "PO-1", supplier=supplier, days_overdue=40, total="1000.00", paid="250.00")

        records = load_payables(db, STATION_ID)

        assert len(records) == 1
        assert Decimal(records[0].outstanding_amount) == Decimal("750.00")
        assert records[0].counterparty_name == "Pakistan State Oil"

    def test_settled_cancelled_and_foreign_orders_are_skipped(
        self, db: Session, supplier: Supplier
    ) -> None:
        add_order(db, "PO-OPEN", supplier=supplier, days_overdue=5, total="100")
        add_order(db, "PO-PAID", supplier=supplier, days_overdue=5, total="100", paid="100")
        add_order(db, "PO-CANCEL", supplier=supplier, days_overdue=5, total="100",
                  status=POStatus.CANCELLED)
        add_order(db, "PO-PENDING", supplier=supplier, days_overdue=-10, total="40",
                  status=POStatus.PENDING)
        add_order(db, "PO-ELSEWHERE", supplier=supplier, days_overdue=5, total="100",
                  station_id=OTHER_STATION_ID)

        numbers = {r.reference_number for r in load_payables(db, STATION_ID)}
        assert numbers == {"PO-OPEN", "PO-PENDING"}

    def test_load_outstanding_dispatches_on_type(
        self, db: Session, customer: Customer, supplier: Supplier
    ) -> None:
        add_sale(db, "INV-1", customer=customer, days_overdue=1, outstanding="5")
        add_order(db, "PO-1", supplier=supplier, days_overdue=1, total="7")

        receivable = load_outstanding(db, STATION_ID, ReportType.RECEIVABLE)
        payable = load_outstanding(db, STATION_ID, ReportType.PAYABLE)
        assert [r.reference_number for r in receivable] == ["INV-1"]
        assert [r.reference_number for r in payable] == ["PO-1"]


class TestGetAgingReport:
    def test_receivable_report_from_database(self, db: Session, customer: Customer) -> None:
        add_sale(db, "INV-1", customer=customer, days_overdue=-5, outstanding="100")
        add_sale(db, "INV-2", customer=customer, days_overdue=15, outstanding="200")
        add_sale(db, "INV-3", customer=customer, days_overdue=45, outstanding="300")

        report = get_aging_report(db, STATION_ID, "receivable", NOW)

        assert report.type == ReportType.RECEIVABLE
        assert report.totals["current"] == Decimal("100")
        assert report.totals["days30"] == Decimal("200")
        assert report.totals["days60"] == Decimal("300")
        assert report.grand_total == Decimal("600")
        assert report.percentage("days60") == 50
        assert report.currency_totals is None

    def test_undated_sale_ages_from_transaction_date(
        self, db: Session, customer: Customer
    ) -> None:
        add_sale(db, "INV-1", customer=customer, days_overdue=None, outstanding="80",
                 sold_days_ago=40)

        report = get_aging_report(db, STATION_ID, ReportType.RECEIVABLE, NOW)

        assert report.details[0].days_overdue == 40
        assert report.totals["days60"] == Decimal("80")

    def test_payable_report_over_ninety(self, db: Session, supplier: Supplier) -> None:
        add_order(db, "PO-1", supplier=supplier, days_overdue=120, total="500", paid="100")

        report = get_aging_report(db, STATION_ID, ReportType.PAYABLE, NOW)

        assert report.count("over90") == 1
        assert report.totals["over90"] == Decimal("400")
        assert report.percentage("over90") == 100

    def test_currency_grouping_follows_settings(
        self, db: Session, customer: Customer, monkeypatch
    ) -> None:
        monkeypatch.setattr(settings, "AGING_GROUP_BY_CURRENCY", True)
        add_sale(db, "INV-1", customer=customer, days_overdue=10, outstanding="100")
        add_sale(db, "INV-2", customer=customer, days_overdue=10, outstanding="5",
                 currency_code="USD")

        report = get_aging_report(db, STATION_ID, ReportType.RECEIVABLE, NOW)

        assert report.currency_totals is not None
        assert report.currency_totals["PKR"]["days30"] == Decimal("100")
        assert report.currency_totals["USD"]["grand_total"] == Decimal("5")
