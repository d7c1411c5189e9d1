"""Record store HTTP client for fetching a user's financial records"""

import asyncio
import logging
import httpx
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, TypeVar
from finscore.domain.models import (
    Asset,
    AssetCategory,
    Frequency,
    GoalStatus,
    Liability,
    LiabilityCategory,
    RecordSnapshot,
    RecurringExpense,
    SavingsGoal,
    Transaction,
    TransactionType,
)
from finscore.domain.exceptions import InvalidRecordError, RecordStoreError
from finscore.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _decimal(value: Any) -> Decimal:
    # str() first so floats from JSON keep their printed value
    return Decimal(str(value))


def _optional_decimal(value: Any) -> Decimal | None:
    return None if value is None else _decimal(value)


def parse_transaction(raw: Dict[str, Any]) -> Transaction:
    amount = _decimal(raw["amount"])
    if amount == 0:
        raise InvalidRecordError(f"Transaction {raw['id']} has zero amount")
    return Transaction(
        id=str(raw["id"]),
        timestamp=datetime.fromisoformat(raw["created_at"]),
        amount=amount,
        type=TransactionType(raw["type"]),
        category=raw.get("category") or "",
        description=raw.get("description"),
    )


def parse_asset(raw: Dict[str, Any]) -> Asset:
    return Asset(
        id=str(raw["id"]),
        category=AssetCategory(raw["category"]),
        current_value=_decimal(raw["current_value"]),
        currency=raw["currency"],
        name=raw.get("name"),
    )


def parse_liability(raw: Dict[str, Any]) -> Liability:
    return Liability(
        id=str(raw["id"]),
        category=LiabilityCategory(raw["category"]),
        remaining_amount=_decimal(raw["remaining_amount"]),
        currency=raw["currency"],
        interest_rate=_optional_decimal(raw.get("interest_rate")),
        monthly_payment=_optional_decimal(raw.get("monthly_payment")),
        name=raw.get("name"),
    )


def parse_goal(raw: Dict[str, Any]) -> SavingsGoal:
    return SavingsGoal(
        id=str(raw["id"]),
        target_amount=_decimal(raw["target_amount"]),
        current_amount=_decimal(raw["current_amount"]),
        status=GoalStatus(raw.get("status", "active")),
    )


def parse_recurring_expense(raw: Dict[str, Any]) -> RecurringExpense:
    return RecurringExpense(
        id=str(raw["id"]),
        amount=_decimal(raw["amount"]),
        frequency=Frequency(raw["frequency"]),
        is_active=bool(raw.get("is_active", True)),
    )


class RecordStoreClient:
    """Client for the external record store (storage collaborator)"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.record_store_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        kind: str,
        user_id: str,
        parse: Callable[[Dict[str, Any]], T],
        limit: int | None = None,
    ) -> List[T]:
        """
        Fetch and parse one record list.

        Raises:
            RecordStoreError: On timeout, HTTP errors, or invalid response
        """
        params: Dict[str, Any] = {"user_id": user_id}
        if limit is not None:
            params["limit"] = limit

        try:
            response = await client.get(f"{self.base_url}/records/{kind}", params=params)
            response.raise_for_status()
            data = response.json()

            records = []
            for raw in data.get(kind, []):
                try:
                    records.append(parse(raw))
                except InvalidRecordError as e:
                    # Bad rows are skipped, the rest of the list is still usable
                    logger.warning(f"Dropping invalid record: {e}", extra={"user_id": user_id, "kind": kind})
            return records

        except httpx.TimeoutException as e:
            raise RecordStoreError(f"Record store timeout after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise RecordStoreError(f"Record store error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise RecordStoreError(f"Record store unreachable: {e}") from e
        except (KeyError, ValueError, TypeError, InvalidOperation) as e:
            raise RecordStoreError(f"Invalid {kind} data from record store: {e}") from e

    async def get_snapshot(self, user_id: str, transaction_limit: int | None = None) -> RecordSnapshot:
        """
        Fetch everything the engine needs for one user.

        Transactions are capped to the most recent `transaction_limit`
        (default from settings); the engine does not need full history.
        """
        limit = transaction_limit or settings.transaction_fetch_limit
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            transactions, assets, liabilities, goals, recurring = await asyncio.gather(
                self._fetch(client, "transactions", user_id, parse_transaction, limit=limit),
                self._fetch(client, "assets", user_id, parse_asset),
                self._fetch(client, "liabilities", user_id, parse_liability),
                self._fetch(client, "goals", user_id, parse_goal),
                self._fetch(client, "recurring_expenses", user_id, parse_recurring_expense),
            )

        return RecordSnapshot(
            transactions=tuple(transactions),
            assets=tuple(assets),
            liabilities=tuple(liabilities),
            goals=tuple(goals),
            recurring_expenses=tuple(recurring),
        )
