"""Unit tests for the record store client"""

import asyncio
import httpx
import pytest
from datetime import datetime, timezone
from decimal import Decimal
from finscore.domain.exceptions import InvalidRecordError, RecordStoreError
from finscore.domain.models import Frequency, GoalStatus, LiabilityCategory, TransactionType
from finscore.infrastructure.clients.records import RecordStoreClient, parse_liability, parse_transaction

RECORDS = {
    "transactions": [
        {"id": "t1", "created_at": "2026-07-01T09:00:00+00:00", "amount": 2500, "type": "deposit", "category": "income", "description": "Salary"},
        {"id": "t2", "created_at": "2026-07-02T12:00:00+00:00", "amount": -19.99, "type": "expense", "category": "subscriptions"},
        {"id": "t3", "created_at": "2026-07-03T12:00:00+00:00", "amount": 0, "type": "transfer", "category": ""},
    ],
    "assets": [{"id": "a1", "category": "cash", "current_value": 1200, "currency": "EUR"}],
    "liabilities": [],
    "goals": [{"id": "g1", "target_amount": 500, "current_amount": 500, "status": "completed"}],
    "recurring_expenses": [{"id": "r1", "amount": 9.99, "frequency": "monthly"}],
}


def store_transport(records=RECORDS, seen=None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        kind = request.url.path.rsplit("/", 1)[-1]
        if seen is not None:
            seen[kind] = dict(request.url.params)
        return httpx.Response(200, json={kind: records.get(kind, [])})

    return httpx.MockTransport(handler)


def test_parse_transaction():
    transaction = parse_transaction(RECORDS["transactions"][1])

    assert transaction.id == "t2"
    assert transaction.amount == Decimal("-19.99")
    assert transaction.type == TransactionType.EXPENSE
    assert transaction.timestamp == datetime(2026, 7, 2, 12, tzinfo=timezone.utc)
    assert transaction.description is None


def test_parse_transaction_rejects_zero_amount():
    with pytest.raises(InvalidRecordError):
        parse_transaction(RECORDS["transactions"][2])


def test_parse_liability_optional_fields():
    liability = parse_liability({"id": 7, "category": "car_loan", "remaining_amount": "8000.50", "currency": "USD"})

    assert liability.id == "7"
    assert liability.category == LiabilityCategory.CAR_LOAN
    assert liability.remaining_amount == Decimal("8000.50")
    assert liability.monthly_payment is None


def test_get_snapshot_drops_invalid_records():
    seen = {}
    client = RecordStoreClient(base_url="http://store", transport=store_transport(seen=seen))

    snapshot = asyncio.run(client.get_snapshot("user_1", transaction_limit=25))

    assert [t.id for t in snapshot.transactions] == ["t1", "t2"]
    assert snapshot.assets[0].currency == "EUR"
    assert snapshot.goals[0].status == GoalStatus.COMPLETED
    assert snapshot.recurring_expenses[0].frequency == Frequency.MONTHLY
    assert snapshot.liabilities == ()
    assert seen["transactions"] == {"user_id": "user_1", "limit": "25"}
    assert seen["assets"] == {"user_id": "user_1"}


def test_server_error_raises_record_store_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"detail": "boom"}))
    client = RecordStoreClient(base_url="http://store", transport=transport)

    with pytest.raises(RecordStoreError, match="500"):
        asyncio.run(client.get_snapshot("user_1"))


def test_timeout_raises_record_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    client = RecordStoreClient(base_url="http://store", timeout=0.1, transport=httpx.MockTransport(handler))

    with pytest.raises(RecordStoreError, match="timeout"):
        asyncio.run(client.get_snapshot("user_1"))


def test_malformed_record_raises_record_store_error():
    broken = {**RECORDS, "assets": [{"id": "a1", "category": "spaceship", "current_value": 1, "currency": "USD"}]}
    client = RecordStoreClient(base_url="http://store", transport=store_transport(broken))

    with pytest.raises(RecordStoreError, match="assets"):
        asyncio.run(client.get_snapshot("user_1"))
