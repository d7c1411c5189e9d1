"""Feedback generator - threshold tips and badge unlocks"""

from dataclasses import dataclass
from decimal import Decimal
from typing import FrozenSet, List
from finscore.domain.models import Badge, Feedback, FeedbackCounts, WellnessBreakdown

SAVINGS_TIP = "Try setting aside 20% of each deposit into savings"
BUDGET_TIP = "Your spending varies each month. Create a budget to stay consistent"
GOALS_TIP = "Your savings goals are less than halfway funded. Automate a transfer toward them"
DIVERSIFICATION_TIP = "Consider diversifying into multiple currencies"
CONSISTENCY_TIP = "Make regular deposits to build a healthy financial habit"
POSITIVE_MESSAGE = "Great job! Keep up the excellent financial habits!"


@dataclass(frozen=True)
class FeedbackThresholds:
    """Tip cut-offs on wellness sub-factors and badge unlock levels"""

    savings_below: float = 50.0
    budget_below: float = 50.0
    goals_below: float = 50.0
    diversification_below: float = 30.0
    consistency_below: float = 50.0
    big_saver_total: Decimal = Decimal("1000")
    consistent_days: int = 4
    diversified_currencies: int = 3


def generate_tips(
    breakdown: WellnessBreakdown,
    counts: FeedbackCounts,
    thresholds: FeedbackThresholds = FeedbackThresholds(),
) -> List[str]:
    """
    One tip per weak sub-factor, in fixed order.

    A sub-factor is only judged when it has data behind it: an empty
    snapshot is sparse, not bad, and gets the positive message alone.
    """
    has_transactions = counts.transaction_count > 0
    tips = []

    if has_transactions and breakdown.savings < thresholds.savings_below:
        tips.append(SAVINGS_TIP)
    # Volatility needs at least two months to compare
    if counts.expense_month_count >= 2 and breakdown.budget < thresholds.budget_below:
        tips.append(BUDGET_TIP)
    if counts.goal_count > 0 and breakdown.goals < thresholds.goals_below:
        tips.append(GOALS_TIP)
    if (has_transactions or counts.currency_count > 0) and breakdown.diversification < thresholds.diversification_below:
        tips.append(DIVERSIFICATION_TIP)
    if has_transactions and breakdown.consistency < thresholds.consistency_below:
        tips.append(CONSISTENCY_TIP)

    if not tips:
        tips.append(POSITIVE_MESSAGE)
    return tips


def unlocked_badges(
    counts: FeedbackCounts,
    thresholds: FeedbackThresholds = FeedbackThresholds(),
) -> FrozenSet[Badge]:
    """
    Every badge whose predicate holds for the current data.

    Recomputed from scratch on each call; remembering when a badge was
    first seen is the caller's job.
    """
    rules = {
        Badge.FIRST_DEPOSIT: counts.deposit_day_count > 0,
        Badge.GOAL_SETTER: counts.goal_count > 0,
        Badge.GOAL_CRUSHER: counts.completed_goal_count > 0,
        Badge.DIVERSIFIED: counts.currency_count >= thresholds.diversified_currencies,
        Badge.BIG_SAVER: counts.deposit_total >= thresholds.big_saver_total,
        Badge.CONSISTENT: counts.deposit_day_count >= thresholds.consistent_days,
    }
    return frozenset(badge for badge, earned in rules.items() if earned)


def generate_feedback(
    breakdown: WellnessBreakdown,
    counts: FeedbackCounts,
    thresholds: FeedbackThresholds = FeedbackThresholds(),
) -> Feedback:
    return Feedback(
        tips=tuple(generate_tips(breakdown, counts, thresholds)),
        badges=unlocked_badges(counts, thresholds),
    )
