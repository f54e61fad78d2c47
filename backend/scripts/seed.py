"""Create the tables and seed one demo station with open receivables and payables.

Usage:
    python -m backend.scripts.seed

Prints a bearer token for the seeded admin so the aging endpoints can be
tried right away.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from backend.app.core.database import Base, SessionLocal, engine
from backend.app.core.security import create_access_token
from backend.app.models.customer import Customer, CustomerType
from backend.app.models.sales import PaymentMethod, SalesTransaction
from backend.app.models.supplier import POStatus, PurchaseOrder, Supplier
from backend.app.models.user import RoleEnum, User

STATION_ID = "station-1"

# (invoice, customer index, days since sale, terms in days or None, total, paid)
SALES: list[tuple[str, int, int, int | None, str, str]] = [
    ("INV-1001", 0, 10, 30, "45000.00", "0.00"),
    ("INV-1002", 0, 50, 30, "120000.00", "20000.00"),
    ("INV-1003", 1, 75, 15, "88000.00", "0.00"),
    ("INV-1004", 1, 140, 30, "64500.00", "4500.00"),
    ("INV-1005", 2, 5, None, "15000.00", "0.00"),
]

# (order, supplier index, days since order, terms in days or None, total, paid)
ORDERS: list[tuple[str, int, int, int | None, str, str]] = [
    ("PO-2001", 0, 20, 30, "2900000.00", "0.00"),
    ("PO-2002", 0, 70, 30, "2800000.00", "1000000.00"),
    ("PO-2003", 1, 120, 7, "350000.00", "0.00"),
]


def main() -> None:
    Base.metadata.create_all(bind=engine)
    now = datetime.now(timezone.utc)

    db = SessionLocal()
    try:
        if db.query(User).filter(User.username == "admin").first():
            print("Database already seeded, skipping.")
            return

        admin = User(
            username="admin",
            full_name="Station Administrator",
            role=RoleEnum.ADMIN,
            is_active=True,
        )
        db.add(admin)

        customers = [
            Customer(name="City Transport Fleet", type=CustomerType.FLEET),
            Customer(name="Green Valley Farms", type=CustomerType.CREDIT),
            Customer(name="Metro Cabs", type=CustomerType.FLEET),
        ]
        suppliers = [
            Supplier(name="Pakistan State Oil", payment_terms="Net 30"),
            Supplier(name="Shell Lubricants", payment_terms="Net 7"),
        ]
        db.add_all(customers + suppliers)
        db.flush()

        for number, cust, age, terms, total, paid in SALES:
            sold_at = now - timedelta(days=age)
            db.add(SalesTransaction(
                invoice_number=number,
                station_id=STATION_ID,
                customer_id=customers[cust].id,
                transaction_date=sold_at,
                due_date=sold_at + timedelta(days=terms) if terms is not None else None,
                payment_method=PaymentMethod.CREDIT,
                total_amount=Decimal(total),
                paid_amount=Decimal(paid),
                outstanding_amount=Decimal(total) - Decimal(paid),
            ))

        for number, supp, age, terms, total, paid in ORDERS:
            ordered_at = now - timedelta(days=age)
            db.add(PurchaseOrder(
                order_number=number,
                station_id=STATION_ID,
                supplier_id=suppliers[supp].id,
                order_date=ordered_at,
                due_date=ordered_at + timedelta(days=terms) if terms is not None else None,
                status=POStatus.DELIVERED,
                total_amount=Decimal(total),
                paid_amount=Decimal(paid),
            ))

        db.commit()
        db.refresh(admin)

        print(f"Seeded station {STATION_ID}: {len(SALES)} invoices, {len(ORDERS)} purchase orders")
        print(f"Admin token: {create_access_token(subject=str(admin.id))}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
