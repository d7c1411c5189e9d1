"""Pytest fixtures for testing"""

import os

# Point the app at SQLite before finscore.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finscore.api.main import create_app
from finscore.infrastructure.database.models import Base
from finscore.infrastructure.database.session import get_db
from finscore.domain.models import Transaction, TransactionType


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed evaluation time: mid-July 2026, UTC
NOW = datetime(2026, 7, 15, 12, 0, tzinfo=timezone.utc)


def make_transaction(
    amount,
    when: datetime = NOW,
    description: str | None = None,
    category: str = "general",
    txn_id: str | None = None,
    type: TransactionType | None = None,
) -> Transaction:
    """Build a transaction; type follows the sign unless given"""
    amount = Decimal(str(amount))
    if type is None:
        type = TransactionType.DEPOSIT if amount > 0 else TransactionType.EXPENSE
    return Transaction(
        id=txn_id or f"tx_{when.isoformat()}_{amount}_{description}",
        timestamp=when,
        amount=amount,
        type=type,
        category=category,
        description=description,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def txn() -> Callable[..., Transaction]:
    """Transaction factory"""
    return make_transaction


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db: Session) -> sessionmaker:
    """Open extra sessions on the test database, e.g. for a second concurrent request"""
    return TestingSessionLocal


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Three months of salary, rent and groceries, plus one index fund purchase"""
    transactions = []

    for month in (5, 6, 7):
        transactions.append(
            make_transaction(3000, datetime(2026, month, 1, 9, tzinfo=timezone.utc), "Salary", "income", f"salary_{month}")
        )
        transactions.append(
            make_transaction(-900, datetime(2026, month, 3, 12, tzinfo=timezone.utc), "Rent", "rent", f"rent_{month}")
        )
        transactions.append(
            make_transaction(-300, datetime(2026, month, 10, 18, tzinfo=timezone.utc), "Groceries", "food", f"food_{month}")
        )

    transactions.append(
        make_transaction(
            -500,
            datetime(2026, 7, 5, 8, tzinfo=timezone.utc),
            "[INVESTMENT] Index Fund",
            "savings",
            "invest_1",
            TransactionType.WITHDRAWAL,
        )
    )
    return transactions
