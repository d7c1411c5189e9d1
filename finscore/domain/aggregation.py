"""Monthly aggregation - calendar-month buckets, all-time totals and running balance"""

import logging
from collections import defaultdict
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Dict, List, Sequence
from finscore.domain.models import (
    ZERO,
    Classification,
    ClassifiedTransaction,
    MonthlyBucket,
    MonthlySeries,
    Totals,
)
from finscore.utils.date_utils import month_key, month_window, wall_clock

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MONTHS = 6


def aggregate_monthly(
    classified: Sequence[ClassifiedTransaction],
    now: datetime,
    months: int = DEFAULT_WINDOW_MONTHS,
    tz: tzinfo | None = None,
) -> MonthlySeries:
    """
    Bucket classified transactions into the `months` most recent calendar months.

    Requirements:
    - One bucket per month in the window, oldest first, empty months included
    - Buckets hold abs(amount) per classification; totals cover all transactions
    - Running balance accumulates signed amounts in timestamp order, with the
      last known balance carried forward through months without transactions
    - No rounding here; display rounding happens downstream
    """
    window = month_window(now, months, tz)
    sums: Dict[str, Dict[Classification, Decimal]] = {key: defaultdict(lambda: ZERO) for key in window}
    all_time: Dict[Classification, Decimal] = defaultdict(lambda: ZERO)

    for item in classified:
        amount = abs(item.transaction.amount)
        all_time[item.classification] += amount

        key = month_key(item.transaction.timestamp, tz)
        if key in sums:
            sums[key][item.classification] += amount

    # Month-end balance from the chronological replay
    balance_by_month: Dict[str, Decimal] = {}
    running = ZERO
    for item in sorted(classified, key=lambda c: wall_clock(c.transaction.timestamp, tz)):
        running += item.transaction.amount
        balance_by_month[month_key(item.transaction.timestamp, tz)] = running

    # Carry forward: start from the balance of everything before the window
    first_month = window[0]
    carried = ZERO
    for key in sorted(balance_by_month):
        if key >= first_month:
            break
        carried = balance_by_month[key]

    buckets: List[MonthlyBucket] = []
    for key in window:
        if key in balance_by_month:
            carried = balance_by_month[key]
        buckets.append(
            MonthlyBucket(
                month=key,
                income=sums[key][Classification.INCOME],
                expense=sums[key][Classification.EXPENSE],
                investment=sums[key][Classification.INVESTMENT],
                running_balance=carried,
            )
        )

    totals = Totals(
        income=all_time[Classification.INCOME],
        expense=all_time[Classification.EXPENSE],
        investment=all_time[Classification.INVESTMENT],
        running_balance=running,
        transaction_count=len(classified),
    )

    logger.debug(
        "Aggregated transactions",
        extra={"transaction_count": totals.transaction_count, "window_start": window[0], "window_end": window[-1]},
    )
    return MonthlySeries(buckets=tuple(buckets), totals=totals)


def monthly_expense_history(
    classified: Sequence[ClassifiedTransaction],
    tz: tzinfo | None = None,
) -> List[Decimal]:
    """All-time expense totals per month, non-empty months only, oldest first"""
    by_month: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for item in classified:
        if item.classification == Classification.EXPENSE:
            by_month[month_key(item.transaction.timestamp, tz)] += abs(item.transaction.amount)
    return [by_month[key] for key in sorted(by_month)]
