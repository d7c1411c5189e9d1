"""Unit tests for transaction classification"""

from finscore.domain.classifier import classify_transaction, classify_transactions, INVESTMENT_TAG
from finscore.domain.models import Classification, TransactionType


def test_positive_amount_is_always_income(txn):
    """Inflows are income even when tagged or categorised otherwise"""
    assert classify_transaction(txn(1000, description="Salary")) == Classification.INCOME
    assert classify_transaction(txn(50, description="[INVESTMENT] Dividend")) == Classification.INCOME
    assert classify_transaction(txn(10, category="food", type=TransactionType.EXPENSE)) == Classification.INCOME


def test_investment_tag(txn):
    assert classify_transaction(txn(-300, description=f"{INVESTMENT_TAG} Index Fund")) == Classification.INVESTMENT
    assert classify_transaction(txn(-300, description="[investment] lower case tag")) == Classification.INVESTMENT


def test_invest_substring_fallback(txn):
    assert classify_transaction(txn(-100, description="Monthly investing plan")) == Classification.INVESTMENT


def test_invest_substring_false_positive_is_kept(txn):
    """Known limitation: free-text matching misreads some ordinary expenses"""
    course = txn(-350, description="Investment Banking Course", category="education")
    assert classify_transaction(course) == Classification.INVESTMENT


def test_outflow_without_marker_is_expense(txn):
    assert classify_transaction(txn(-200, description="Groceries")) == Classification.EXPENSE
    assert classify_transaction(txn(-200, description=None)) == Classification.EXPENSE


def test_type_field_is_not_authoritative(txn):
    """A 'deposit' with a negative amount is still an outflow"""
    odd = txn(-75, description="Bank fee", type=TransactionType.DEPOSIT)
    assert classify_transaction(odd) == Classification.EXPENSE


def test_classify_transactions_preserves_order(txn):
    transactions = [
        txn(-20, description="Coffee", txn_id="a"),
        txn(500, description="Refund", txn_id="b"),
        txn(-40, description="[INVESTMENT] ETF", txn_id="c"),
    ]

    classified = classify_transactions(transactions)

    assert [c.transaction.id for c in classified] == ["a", "b", "c"]
    assert [c.classification for c in classified] == [
        Classification.EXPENSE,
        Classification.INCOME,
        Classification.INVESTMENT,
    ]
