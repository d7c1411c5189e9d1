"""Rate & trend calculator - percentages derived from the monthly series"""

from decimal import Decimal
from typing import Sequence
from finscore.domain.models import MonthlyBucket, RateSnapshot, Totals
from finscore.utils.numbers import clamp, round_half_up, safe_ratio

HUNDRED = Decimal("100")


def savings_rate(income: Decimal, expense: Decimal) -> float:
    """
    Share of income not spent, as a percentage in [0, 100].

    Negative savings (spending more than earned) floor at 0: the score
    consumers treat savings as a non-negative contribution.
    """
    if income <= 0:
        return 0.0
    return float(clamp((income - expense) / income * HUNDRED))


def monthly_rate(amount: Decimal, monthly_income: Decimal) -> int:
    """amount as a whole percentage of this month's income, clamped to [0, 100]"""
    return int(clamp(round_half_up(safe_ratio(amount, monthly_income) * HUNDRED)))


def trend(this_month: Decimal, last_month: Decimal) -> int:
    """Signed month-over-month change in percent; 0 when last month was empty"""
    if last_month <= 0:
        return 0
    return round_half_up((this_month - last_month) / last_month * HUNDRED)


def budget_adherence(monthly_expenses: Sequence[Decimal]) -> float:
    """
    Inverse expense volatility: 100 - clamp(stddev / mean * 100).

    Uses the population variance of the non-empty monthly totals. A steady
    spender lands near 100, a volatile one near 0. No history, one month,
    or a zero mean all count as perfectly steady.
    """
    history = [m for m in monthly_expenses if m > 0]
    if not history:
        return 100.0

    mean = sum(history, Decimal("0")) / len(history)
    variance = sum(((m - mean) ** 2 for m in history), Decimal("0")) / len(history)
    std_dev = variance.sqrt()

    volatility = clamp(safe_ratio(std_dev, mean) * HUNDRED)
    return float(HUNDRED - volatility)


def calculate_rates(
    totals: Totals,
    current: MonthlyBucket,
    previous: MonthlyBucket,
    expense_history: Sequence[Decimal],
) -> RateSnapshot:
    """
    Derive every rate the scores and dashboard need.

    Every denominator is guarded and substitutes 0; this never raises and
    never yields NaN or infinity.
    """
    return RateSnapshot(
        savings_rate=savings_rate(totals.income, totals.expense),
        expense_rate=monthly_rate(current.expense, current.income),
        investment_rate=monthly_rate(current.investment, current.income),
        budget_adherence=budget_adherence(expense_history),
        income_trend=trend(current.income, previous.income),
        expense_trend=trend(current.expense, previous.expense),
        has_monthly_income=current.income > 0,
    )
