"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
import tempfile
from datetime import date
from pathlib import Path

import pytest

# Ensure project root is on path when running tests
_project_root = Path(__file__).resolve().parents[2]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from bonded_store_app.models import (
    AppState,
    CrewMember,
    Currency,
    Product,
    ReportSettings,
    RepresentationType,
    Transaction,
    TransactionItem,
    TransactionType,
    compute_total,
)


def make_tx(
    tx_id: str,
    day: date,
    items: list[tuple[Product, int]],
    recipient_id: str = "c1",
    recipient_name: str = "",
    tx_type: TransactionType = TransactionType.CREW,
    rep_type: RepresentationType | None = None,
) -> Transaction:
    """Build a transaction with snapshots taken from the given products."""
    lines = [
        TransactionItem(product_id=p.id, product_name=p.name, quantity=qty, unit_price=p.price)
        for p, qty in items
    ]
    return Transaction(
        id=tx_id,
        timestamp=day,
        type=tx_type,
        recipient_id=recipient_id,
        recipient_name=recipient_name or recipient_id,
        representation_type=rep_type,
        items=lines,
        total_amount=compute_total(lines),
    )


@pytest.fixture
def tx_factory():
    """Expose make_tx to tests."""
    return make_tx


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database and return its path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    try:
        path.unlink(missing_ok=True)
    except OSError:
        pass  # Windows may hold file; ignore cleanup failure


@pytest.fixture
def db_session(temp_db):
    """Provide a database session with initialized schema."""
    from bonded_store_app.repositories.database import init_database

    SessionLocal = init_database(temp_db)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        session.get_bind().dispose()


@pytest.fixture
def report_settings():
    return ReportSettings(
        vessel_name="MV Test",
        master_name="Capt. Test",
        report_month="03",
        report_year="2024",
        exchange_rate=1.10,
        gbp_exchange_rate=0.85,
    )


@pytest.fixture
def sample_crew():
    return [
        CrewMember(id="c1", name="J. Doe", rank="A.B", is_active=True, currency=Currency.USD),
        CrewMember(id="c2", name="A. Smith", rank="Master", is_active=True, currency=Currency.EUR),
        CrewMember(id="c3", name="B. Jones", rank="Cook", is_active=False, currency=Currency.EUR),
        CrewMember(id="c4", name="C. Brown", rank="Supercargo", is_active=True, currency=Currency.EUR),
    ]


@pytest.fixture
def sample_products():
    return [
        Product(id="p-water", name="Water", category="Water", price=6.0, unit_type="btl",
                pack_size=6, initial_stock=100, added_stock_1=50),
        Product(id="p-cig", name="Marlboro Red", category="Cigarettes", price=25.0, unit_type="ctn",
                pack_size=1, initial_stock=20, added_stock_2=10),
        Product(id="p-cola", name="Cola", category="Soft Drinks", price=2.0, unit_type="can",
                pack_size=1, initial_stock=48),
    ]


@pytest.fixture
def sample_transactions(sample_products):
    water, cig, cola = sample_products
    return [
        make_tx("t1", date(2024, 3, 2), [(water, 10)], recipient_id="c1"),
        make_tx("t2", date(2024, 3, 16), [(water, 5), (cig, 2)], recipient_id="c2"),
        make_tx(
            "t3", date(2024, 3, 9), [(cola, 3)],
            recipient_id="Agent Co", tx_type=TransactionType.REPRESENTATION,
            rep_type=RepresentationType.CHARTERER,
        ),
        make_tx(
            "t4", date(2024, 3, 30), [(cig, 1)],
            recipient_id="Owner Rep", tx_type=TransactionType.REPRESENTATION,
            rep_type=RepresentationType.OWNER,
        ),
    ]


@pytest.fixture
def sample_state(sample_crew, sample_products, sample_transactions, report_settings):
    return AppState(
        crew=list(sample_crew),
        products=list(sample_products),
        transactions=list(sample_transactions),
        settings=report_settings,
    )
