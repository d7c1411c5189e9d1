"""Unit tests for insights and recurring bills"""

from decimal import Decimal
from finscore.domain.classifier import classify_transactions
from finscore.domain.insights import (
    MAX_INSIGHTS,
    generate_insights,
    monthly_bill_total,
    top_expense_categories,
)
from finscore.domain.models import CategoryAmount, Frequency, InsightType, RecurringExpense, Totals


def bill(amount, frequency, active=True) -> RecurringExpense:
    return RecurringExpense(id=f"r_{amount}_{frequency.value}", amount=Decimal(str(amount)), frequency=frequency, is_active=active)


def test_bills_normalized_to_one_month():
    assert monthly_bill_total([bill(10, Frequency.DAILY)]) == Decimal("300")
    assert monthly_bill_total([bill(12, Frequency.WEEKLY)]) == Decimal("52")
    assert monthly_bill_total([bill(80, Frequency.MONTHLY)]) == Decimal("80")
    assert monthly_bill_total([bill(1200, Frequency.YEARLY)]) == Decimal("100")


def test_inactive_bills_are_ignored():
    bills = [bill(80, Frequency.MONTHLY), bill(500, Frequency.MONTHLY, active=False)]
    assert monthly_bill_total(bills) == Decimal("80")
    assert monthly_bill_total([]) == 0


def test_top_expense_categories(txn):
    classified = classify_transactions([
        txn(-900, category="rent"),
        txn(-120, category="food"),
        txn(-200, category="food"),
        txn(-50, category="fun"),
        txn(-50, category="books"),
        txn(-10, category=""),
        txn(-30, category="Salary"),
        txn(-400, description="[INVESTMENT] ETF", category="savings"),
        txn(3000, category="income"),
    ])

    top = top_expense_categories(classified, limit=3)

    assert top == [
        CategoryAmount("rent", Decimal("900")),
        CategoryAmount("food", Decimal("320")),
        CategoryAmount("books", Decimal("50")),
    ]


def test_no_insights_without_data():
    assert generate_insights(Totals(), 0.0, Decimal("0"), Decimal("0"), []) == []


def test_strong_saver_insights():
    totals = Totals(income=Decimal("9000"), expense=Decimal("3600"), transaction_count=9)

    insights = generate_insights(
        totals, 60.0, Decimal("3000"), Decimal("900"), [CategoryAmount("rent", Decimal("2700"))]
    )

    assert [i.title for i in insights] == [
        "Great Savings Rate!",
        "Bills Under Control",
        "Top: rent",
        "Living Below Means",
    ]
    assert "60%" in insights[0].content
    assert "30%" in insights[1].content
    assert "2,700.00" in insights[2].content
    assert insights[3].type == InsightType.SUCCESS


def test_low_savings_gets_tip():
    totals = Totals(income=Decimal("1000"), expense=Decimal("900"), transaction_count=4)

    insights = generate_insights(totals, 10.0, Decimal("1000"), Decimal("0"), [])

    assert [(i.title, i.type) for i in insights] == [("Boost Your Savings", InsightType.TIP)]


def test_overspending_and_high_fixed_costs_warn():
    totals = Totals(income=Decimal("1000"), expense=Decimal("1400"), transaction_count=6)

    insights = generate_insights(totals, 0.0, Decimal("1000"), Decimal("650"), [])

    assert [i.title for i in insights] == ["Spending Alert", "High Fixed Costs"]
    assert all(i.type == InsightType.WARNING for i in insights)
    assert "65%" in insights[1].content


def test_bills_without_income_this_month_are_not_compared():
    totals = Totals(expense=Decimal("200"), transaction_count=1)

    insights = generate_insights(totals, 0.0, Decimal("0"), Decimal("500"), [])

    assert [i.title for i in insights] == ["Spending Alert"]


def test_insights_are_capped():
    totals = Totals(income=Decimal("5000"), expense=Decimal("1000"), transaction_count=10)
    categories = [CategoryAmount("travel", Decimal("600")), CategoryAmount("food", Decimal("400"))]

    insights = generate_insights(totals, 80.0, Decimal("5000"), Decimal("3000"), categories)

    assert len(insights) == MAX_INSIGHTS


def test_break_even_is_not_an_overspending_alert():
    totals = Totals(income=Decimal("1000"), expense=Decimal("1000"), transaction_count=2)

    insights = generate_insights(totals, 0.0, Decimal("1000"), Decimal("0"), [])

    assert "Spending Alert" not in [i.title for i in insights]


def test_investing_without_income_is_not_an_overspending_alert():
    totals = Totals(investment=Decimal("300"), running_balance=Decimal("-300"), transaction_count=1)

    assert generate_insights(totals, 0.0, Decimal("0"), Decimal("0"), []) == []
