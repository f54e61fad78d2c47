"""Shared test fixtures.

Each test gets a fresh in-memory SQLite database, so tests never pollute
each other or a real database.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from backend.app.core.database import Base, get_db
from backend.app.core.security import create_access_token
from backend.app.main import app
from backend.app.models.customer import Customer, CustomerType
from backend.app.models.sales import PaymentMethod, SalesTransaction
from backend.app.models.supplier import POStatus, PurchaseOrder, Supplier
from backend.app.models.user import RoleEnum, User

STATION_ID = "station-1"
OTHER_STATION_ID = "station-2"

# Fixed reference instant for every date-sensitive test
NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


# ─── DB session on a throwaway in-memory database ────────────────────────────


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def client(db: Session) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the test session."""

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ─── Users & tokens ──────────────────────────────────────────────────────────


def _user(
    db: Session,
    username: str,
    role: RoleEnum,
    station_id: str | None,
    is_active: bool = True,
) -> User:
    user = User(
        username=username,
        full_name=username.replace("_", " ").title(),
        role=role,
        station_id=station_id,
        is_active=is_active,
    )
    db.add(user)
    db.flush()
    return user


@pytest.fixture()
def admin_user(db: Session) -> User:
    return _user(db, "test_admin", RoleEnum.ADMIN, None)


@pytest.fixture()
def manager_user(db: Session) -> User:
    return _user(db, "test_manager", RoleEnum.MANAGER, STATION_ID)


@pytest.fixture()
def other_manager_user(db: Session) -> User:
    return _user(db, "other_manager", RoleEnum.MANAGER, OTHER_STATION_ID)


@pytest.fixture()
def cashier_user(db: Session) -> User:
    return _user(db, "test_cashier", RoleEnum.CASHIER, STATION_ID)


@pytest.fixture()
def pending_user(db: Session) -> User:
    return _user(db, "new_manager", RoleEnum.MANAGER, STATION_ID, is_active=False)


@pytest.fixture()
def unassigned_user(db: Session) -> User:
    return _user(db, "floating_manager", RoleEnum.MANAGER, None)


@pytest.fixture()
def admin_token(admin_user: User) -> str:
    return create_access_token(subject=str(admin_user.id))


@pytest.fixture()
def manager_token(manager_user: User) -> str:
    return create_access_token(subject=str(manager_user.id))


@pytest.fixture()
def other_manager_token(other_manager_user: User) -> str:
    return create_access_token(subject=str(other_manager_user.id))


@pytest.fixture()
def cashier_token(cashier_user: User) -> str:
    return create_access_token(subject=str(cashier_user.id))


@pytest.fixture()
def pending_token(pending_user: User) -> str:
    return create_access_token(subject=str(pending_user.id))


@pytest.fixture()
def unassigned_token(unassigned_user: User) -> str:
    return create_access_token(subject=str(unassigned_user.id))


def auth(token: str) -> dict[str, str]:
    """Return Authorization header dict."""
    return {"Authorization": f"Bearer {token}"}


# ─── Counterparties ──────────────────────────────────────────────────────────


@pytest.fixture()
def customer(db: Session) -> Customer:
    c = Customer(name="City Transport Fleet", type=CustomerType.FLEET)
    db.add(c)
    db.flush()
    return c


@pytest.fixture()
def supplier(db: Session) -> Supplier:
    s = Supplier(name="Pakistan State Oil", payment_terms="Net 30")
    db.add(s)
    db.flush()
    return s


# ─── Transaction factories ──────────────────────────────────────────────────


def add_sale(
    db: Session,
    invoice_number: str,
    *,
    customer: Customer | None,
    days_overdue: int | None,
    outstanding: str,
    station_id: str = STATION_ID,
    currency_code: str = "PKR",
    sold_days_ago: int = 120,
) -> SalesTransaction:
    """Credit sale whose due date lies *days_overdue* days before NOW (None = no due date)."""
    outstanding_amount = Decimal(outstanding)
    txn = SalesTransaction(
        invoice_number=invoice_number,
        station_id=station_id,
        customer_id=customer.id if customer else None,
        transaction_date=NOW - timedelta(days=sold_days_ago),
        due_date=NOW - timedelta(days=days_overdue) if days_overdue is not None else None,
        payment_method=PaymentMethod.CREDIT,
        currency_code=currency_code,
        total_amount=outstanding_amount,
        paid_amount=Decimal("0"),
        outstanding_amount=outstanding_amount,
    )
    db.add(txn)
    db.flush()
    return txn


def add_order(
    db: Session,
    order_number: str,
    *,
    supplier: Supplier | None,
    days_overdue: int | None,
    total: str,
    paid: str = "0",
    station_id: str = STATION_ID,
    status: POStatus = POStatus.DELIVERED,
    ordered_days_ago: int = 120,
) -> PurchaseOrder:
    po = PurchaseOrder(
        order_number=order_number,
        station_id=station_id,
        supplier_id=supplier.id if supplier else None,
        order_date=NOW - timedelta(days=ordered_days_ago),
        due_date=NOW - timedelta(days=days_overdue) if days_overdue is not None else None,
        status=status,
        total_amount=Decimal(total),
        paid_amount=Decimal(paid),
    )
    db.add(po)
    db.flush()
    return po
