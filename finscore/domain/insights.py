"""Rule-based spending insights and recurring bill normalization"""

from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Sequence
from finscore.domain.models import (
    ZERO,
    CategoryAmount,
    Classification,
    ClassifiedTransaction,
    Frequency,
    Insight,
    InsightType,
    RecurringExpense,
    Totals,
)

# (multiplier, divisor) from one occurrence to a monthly amount
MONTHLY_FACTORS = {
    Frequency.DAILY: (30, 1),
    Frequency.WEEKLY: (52, 12),
    Frequency.MONTHLY: (1, 1),
    Frequency.YEARLY: (1, 12),
}

INCOME_LIKE_CATEGORIES = {"income", "salary", "deposit", "revenue"}
MAX_INSIGHTS = 4


def to_monthly(expense: RecurringExpense) -> Decimal:
    multiplier, divisor = MONTHLY_FACTORS[Frequency(expense.frequency)]
    return expense.amount * multiplier / divisor


def monthly_bill_total(recurring: Sequence[RecurringExpense]) -> Decimal:
    """Active recurring expenses expressed as one month's total"""
    return sum((to_monthly(r) for r in recurring if r.is_active), ZERO)


def top_expense_categories(classified: Sequence[ClassifiedTransaction], limit: int = 5) -> List[CategoryAmount]:
    """Expense totals per category, largest first; ties keep alphabetical order"""
    by_category: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for item in classified:
        category = (item.transaction.category or "").strip()
        if item.classification != Classification.EXPENSE or not category:
            continue
        if category.lower() in INCOME_LIKE_CATEGORIES:
            continue
        by_category[category] += abs(item.transaction.amount)

    ranked = sorted(by_category.items(), key=lambda kv: (-kv[1], kv[0]))
    return [CategoryAmount(category=name, amount=amount) for name, amount in ranked[:limit]]


def _percent(value: Decimal | float) -> str:
    return f"{Decimal(str(value)).quantize(Decimal('1'))}%"


def generate_insights(
    totals: Totals,
    savings_rate: float,
    monthly_income: Decimal,
    monthly_bills: Decimal,
    top_categories: Sequence[CategoryAmount],
) -> List[Insight]:
    """
    Up to four observations about the snapshot.

    Rules:
    - Savings rate: success at 20%+, tip when positive, warning when expenses
      exceed income
    - Recurring bills vs this month's income: warning above 50%, success otherwise
    - Largest expense category: info
    - Spending under half of income: success
    """
    insights = []

    if savings_rate >= 20:
        insights.append(Insight(
            title="Great Savings Rate!",
            content=f"You're saving {_percent(savings_rate)} of your income. Keep building that financial cushion!",
            type=InsightType.SUCCESS,
        ))
    elif savings_rate > 0:
        insights.append(Insight(
            title="Boost Your Savings",
            content=f"Saving {_percent(savings_rate)} is a start. Try the 50/30/20 rule to reach 20%.",
            type=InsightType.TIP,
        ))
    elif totals.expense > totals.income:
        insights.append(Insight(
            title="Spending Alert",
            content="Expenses exceed income. Review and cut non-essential spending.",
            type=InsightType.WARNING,
        ))

    if monthly_income > 0 and monthly_bills > 0:
        bills_percent = monthly_bills / monthly_income * 100
        if bills_percent > 50:
            insights.append(Insight(
                title="High Fixed Costs",
                content=f"{_percent(bills_percent)} goes to recurring bills. Consider renegotiating.",
                type=InsightType.WARNING,
            ))
        else:
            insights.append(Insight(
                title="Bills Under Control",
                content=f"Fixed costs at {_percent(bills_percent)} of income - well managed.",
                type=InsightType.SUCCESS,
            ))

    if top_categories:
        top = top_categories[0]
        insights.append(Insight(
            title=f"Top: {top.category}",
            content=f"{top.category} is your biggest expense at {top.amount:,.2f}.",
            type=InsightType.INFO,
        ))

    if totals.income > 0 and totals.expense / totals.income < Decimal("0.5"):
        insights.append(Insight(
            title="Living Below Means",
            content=f"Spending only {_percent(totals.expense / totals.income * 100)} of income. Excellent discipline!",
            type=InsightType.SUCCESS,
        ))

    return insights[:MAX_INSIGHTS]
