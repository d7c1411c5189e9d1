"""Composite health scores - two explicitly named formulas over the same data"""

from datetime import tzinfo
from decimal import Decimal
from typing import Sequence
from finscore.domain.models import (
    Asset,
    Classification,
    ClassifiedTransaction,
    HealthScore,
    PortfolioBreakdown,
    RateSnapshot,
    SavingsGoal,
    ScoreFormula,
    WellnessBreakdown,
)
from finscore.utils.date_utils import local_date
from finscore.utils.numbers import clamp, round_half_up

# Formula A weights
SAVINGS_WEIGHT = 0.30
BUDGET_WEIGHT = 0.25
GOALS_WEIGHT = 0.20
DIVERSIFICATION_WEIGHT = 0.15
CONSISTENCY_WEIGHT = 0.10

NEUTRAL_GOAL_PROGRESS = 50.0

# Formula B caps
SAVINGS_CAP = 40.0
EXPENSE_CAP = 30.0
INVESTMENT_CAP = 30.0


def score_label(score: int) -> str:
    """
    Map a 0-100 score to a qualitative label.

    Bands: 80+ Excellent, 60+ Good, 40+ Fair, below that Needs Work.
    """
    if score >= 80:
        return "Excellent"
    elif score >= 60:
        return "Good"
    elif score >= 40:
        return "Fair"
    else:
        return "Needs Work"


def goal_progress(goals: Sequence[SavingsGoal]) -> float:
    """Mean per-goal completion percentage, each capped at 100; neutral 50 without goals"""
    if not goals:
        return NEUTRAL_GOAL_PROGRESS
    per_goal = [
        float(clamp(g.current_amount / g.target_amount * 100)) if g.target_amount > 0 else 0.0
        for g in goals
    ]
    return sum(per_goal) / len(per_goal)


def distinct_currencies(assets: Sequence[Asset]) -> int:
    return len({a.currency.upper() for a in assets if a.currency})


def distinct_categories(classified: Sequence[ClassifiedTransaction]) -> int:
    return len({c.transaction.category for c in classified if c.transaction.category})


def income_days(classified: Sequence[ClassifiedTransaction], tz: tzinfo | None = None) -> int:
    """Number of distinct local calendar days with at least one income transaction"""
    return len({
        local_date(c.transaction.timestamp, tz)
        for c in classified
        if c.classification == Classification.INCOME
    })


def wellness_breakdown(
    rates: RateSnapshot,
    goals: Sequence[SavingsGoal],
    currency_count: int,
    category_count: int,
    income_day_count: int,
) -> WellnessBreakdown:
    return WellnessBreakdown(
        savings=float(clamp(rates.savings_rate)),
        budget=float(clamp(rates.budget_adherence)),
        goals=goal_progress(goals),
        diversification=float(clamp(currency_count * 15 + category_count * 5)),
        consistency=float(clamp(income_day_count * 10)),
    )


def wellness_score(breakdown: WellnessBreakdown) -> HealthScore:
    """
    Formula A - "Finance Wellness Score", a 5-factor weighted average.

    Weights:
    - 30%: Savings rate
    - 25%: Budget adherence (steady monthly spending)
    - 20%: Goal progress (50 when no goals exist)
    - 15%: Diversification (currencies held and spending categories)
    - 10%: Consistency (days with income)
    """
    weighted = (
        SAVINGS_WEIGHT * breakdown.savings
        + BUDGET_WEIGHT * breakdown.budget
        + GOALS_WEIGHT * breakdown.goals
        + DIVERSIFICATION_WEIGHT * breakdown.diversification
        + CONSISTENCY_WEIGHT * breakdown.consistency
    )
    # Decimal(str()) keeps 80.0 - epsilon float noise from rounding down
    value = int(clamp(round_half_up(Decimal(str(round(weighted, 9))))))
    return HealthScore(formula=ScoreFormula.WELLNESS, value=value, label=score_label(value), breakdown=breakdown)


def portfolio_breakdown(rates: RateSnapshot) -> PortfolioBreakdown:
    savings = clamp(rates.savings_rate * 2, 0, SAVINGS_CAP) if rates.savings_rate > 0 else 0.0
    # Without income this month the expense rate has no basis and earns nothing
    expense = max(EXPENSE_CAP - rates.expense_rate * 0.5, 0.0) if rates.has_monthly_income else 0.0
    investment = clamp(rates.investment_rate * 1.5, 0, INVESTMENT_CAP)
    return PortfolioBreakdown(savings=float(savings), expense=float(expense), investment=float(investment))


def portfolio_health_score(breakdown: PortfolioBreakdown) -> HealthScore:
    """
    Formula B - "Portfolio Health Score", a 3-factor capped sum.

    Caps: savings 40 (2x savings rate), expense 30 (falls by 0.5 per point
    of expense rate), investment 30 (1.5x investment rate). The sum is
    bounded to [0, 100] by construction.
    """
    total = breakdown.savings + breakdown.expense + breakdown.investment
    value = int(clamp(round_half_up(Decimal(str(round(total, 9))))))
    return HealthScore(formula=ScoreFormula.PORTFOLIO, value=value, label=score_label(value), breakdown=breakdown)


def score_by_name(
    formula: ScoreFormula,
    rates: RateSnapshot,
    goals: Sequence[SavingsGoal] = (),
    currency_count: int = 0,
    category_count: int = 0,
    income_day_count: int = 0,
) -> HealthScore:
    """Compute the named formula. There is no default: callers must say which score they mean."""
    if formula == ScoreFormula.WELLNESS:
        return wellness_score(
            wellness_breakdown(rates, goals, currency_count, category_count, income_day_count)
        )
    elif formula == ScoreFormula.PORTFOLIO:
        return portfolio_health_score(portfolio_breakdown(rates))
    raise ValueError(f"Unknown score formula: {formula}")
