"""Dashboard pipeline - classify, aggregate, rate, score and give feedback in one pass"""

import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo
from finscore.config import Settings, settings as default_settings
from finscore.domain.aggregation import aggregate_monthly, monthly_expense_history
from finscore.domain.classifier import classify_transactions
from finscore.domain.feedback import FeedbackThresholds, generate_feedback
from finscore.domain.insights import generate_insights, monthly_bill_total, top_expense_categories
from finscore.domain.models import (
    Classification,
    DashboardSummary,
    FeedbackCounts,
    GoalStatus,
    RecordSnapshot,
)
from finscore.domain.net_worth import calculate_net_worth
from finscore.domain.rates import calculate_rates
from finscore.domain.scoring import (
    distinct_categories,
    distinct_currencies,
    income_days,
    portfolio_breakdown,
    portfolio_health_score,
    wellness_breakdown,
    wellness_score,
)

logger = logging.getLogger(__name__)


def thresholds_from_settings(config: Settings) -> FeedbackThresholds:
    return FeedbackThresholds(
        savings_below=config.savings_tip_below,
        budget_below=config.budget_tip_below,
        goals_below=config.goal_tip_below,
        diversification_below=config.diversification_tip_below,
        consistency_below=config.consistency_tip_below,
        big_saver_total=config.big_saver_threshold,
        consistent_days=config.consistent_deposit_days,
        diversified_currencies=config.diversified_currency_count,
    )


def build_dashboard(
    snapshot: RecordSnapshot,
    now: datetime | None = None,
    config: Settings | None = None,
) -> DashboardSummary:
    """
    Main entry point: run the whole metrics pipeline over one record snapshot.

    Flow:
    1. Classify transactions (income / expense / investment)
    2. Aggregate into monthly buckets, totals and running balance
    3. Derive rates and month-over-month trends
    4. Compute both named scores (wellness and portfolio)
    5. Generate tips and badges from the wellness breakdown
    6. Net worth, recurring bills and insights

    Pure and idempotent: the same snapshot and `now` give the same summary.
    """
    config = config or default_settings
    tz = ZoneInfo(config.display_timezone)
    now = now or datetime.now(timezone.utc)

    classified = classify_transactions(snapshot.transactions)
    series = aggregate_monthly(classified, now, months=config.window_months, tz=tz)
    expense_history = monthly_expense_history(classified, tz)
    rates = calculate_rates(series.totals, series.current, series.previous, expense_history)

    currency_count = distinct_currencies(snapshot.assets)
    deposit_days = income_days(classified, tz)
    breakdown = wellness_breakdown(
        rates,
        snapshot.goals,
        currency_count=currency_count,
        category_count=distinct_categories(classified),
        income_day_count=deposit_days,
    )
    wellness = wellness_score(breakdown)
    portfolio = portfolio_health_score(portfolio_breakdown(rates))

    counts = FeedbackCounts(
        transaction_count=series.totals.transaction_count,
        expense_month_count=len(expense_history),
        goal_count=len(snapshot.goals),
        completed_goal_count=sum(1 for g in snapshot.goals if g.status == GoalStatus.COMPLETED),
        deposit_day_count=deposit_days,
        currency_count=currency_count,
        deposit_total=series.totals.income,
    )
    feedback = generate_feedback(breakdown, counts, thresholds_from_settings(config))

    monthly_bills = monthly_bill_total(snapshot.recurring_expenses)
    insights = generate_insights(
        series.totals,
        rates.savings_rate,
        series.current.income,
        monthly_bills,
        top_expense_categories(classified),
    )

    logger.debug(
        "Dashboard computed",
        extra={
            "transaction_count": series.totals.transaction_count,
            "income_count": sum(1 for c in classified if c.classification == Classification.INCOME),
            "wellness_score": wellness.value,
            "portfolio_score": portfolio.value,
        },
    )

    return DashboardSummary(
        buckets=series.buckets,
        totals=series.totals,
        rates=rates,
        wellness=wellness,
        portfolio=portfolio,
        feedback=feedback,
        net_worth=calculate_net_worth(snapshot.assets, snapshot.liabilities),
        insights=tuple(insights),
        monthly_bills=monthly_bills,
    )
