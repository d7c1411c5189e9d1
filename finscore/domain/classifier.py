"""Transaction classifier - income / expense / investment"""

from typing import Iterable, List
from finscore.domain.models import Transaction, Classification, ClassifiedTransaction

# The only reliable investment signal; clients prefix outflow descriptions with it
INVESTMENT_TAG = "[INVESTMENT]"

# Best-effort fallback. Known false positives, e.g. "Investment Banking Course".
INVESTMENT_KEYWORD = "invest"


def classify_transaction(txn: Transaction) -> Classification:
    """
    Classify a single transaction.

    Rules, first match wins:
    - amount > 0: income, whatever the category or description says
    - description starts with [INVESTMENT] or contains "invest": investment
    - anything else: expense

    The recorded `type` is not consulted. Zero-amount transactions must be
    rejected before they get here.
    """
    if txn.amount > 0:
        return Classification.INCOME

    description = (txn.description or "").strip().lower()
    if description.startswith(INVESTMENT_TAG.lower()) or INVESTMENT_KEYWORD in description:
        return Classification.INVESTMENT

    return Classification.EXPENSE


def classify_transactions(transactions: Iterable[Transaction]) -> List[ClassifiedTransaction]:
    """Classify every transaction, preserving input order"""
    return [ClassifiedTransaction(transaction=t, classification=classify_transaction(t)) for t in transactions]
