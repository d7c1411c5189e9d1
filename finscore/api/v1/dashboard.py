"""Dashboard endpoints - evaluate a posted snapshot or a user's stored records"""

import time
import logging
from dataclasses import asdict
from typing import Iterable
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from finscore.api.v1.schemas import (
    CategoryAmountSchema,
    DashboardResponse,
    EvaluateRequest,
    FeedbackSchema,
    InsightSchema,
    MonthlyBucketSchema,
    NetWorthSchema,
    RatesSchema,
    ScoreSchema,
    TotalsSchema,
)
from finscore.api.dependencies import get_record_store_client, get_request_id
from finscore.infrastructure.database.session import get_db
from finscore.infrastructure.database.repositories import BadgeRepository
from finscore.infrastructure.clients.records import RecordStoreClient
from finscore.domain.engine import build_dashboard
from finscore.domain.exceptions import RecordStoreError
from finscore.domain.models import DashboardSummary, HealthScore
from finscore.infrastructure.observability.metrics import (
    record_evaluation,
    record_first_unlocks,
    record_store_failures_counter,
)
from finscore.infrastructure.observability.logging import log_evaluation

router = APIRouter()


def _score(score: HealthScore) -> ScoreSchema:
    return ScoreSchema(
        formula=score.formula.value,
        value=score.value,
        label=score.label,
        breakdown={name: round(value, 2) for name, value in asdict(score.breakdown).items()},
    )


def to_response(
    summary: DashboardSummary,
    user_id: str | None = None,
    new_badges: Iterable[str] = (),
) -> DashboardResponse:
    """Convert engine output to the wire schema. Display rounding happens here, not in the engine."""
    net_worth = summary.net_worth
    return DashboardResponse(
        user_id=user_id,
        buckets=[
            MonthlyBucketSchema(
                month=b.month,
                income=float(b.income),
                expense=float(b.expense),
                investment=float(b.investment),
                running_balance=float(b.running_balance),
            )
            for b in summary.buckets
        ],
        totals=TotalsSchema(
            income=float(summary.totals.income),
            expense=float(summary.totals.expense),
            investment=float(summary.totals.investment),
            running_balance=float(summary.totals.running_balance),
            transaction_count=summary.totals.transaction_count,
        ),
        rates=RatesSchema(
            savings_rate=round(summary.rates.savings_rate, 2),
            expense_rate=summary.rates.expense_rate,
            investment_rate=summary.rates.investment_rate,
            budget_adherence=round(summary.rates.budget_adherence, 2),
            income_trend=summary.rates.income_trend,
            expense_trend=summary.rates.expense_trend,
        ),
        wellness=_score(summary.wellness),
        portfolio=_score(summary.portfolio),
        feedback=FeedbackSchema(
            tips=list(summary.feedback.tips),
            badges=sorted(b.value for b in summary.feedback.badges),
        ),
        net_worth=NetWorthSchema(
            total_assets=float(net_worth.total_assets),
            total_liabilities=float(net_worth.total_liabilities),
            net_worth=float(net_worth.net_worth),
            assets_by_category=[
                CategoryAmountSchema(category=c.category, amount=float(c.amount)) for c in net_worth.assets_by_category
            ],
            liabilities_by_category=[
                CategoryAmountSchema(category=c.category, amount=float(c.amount))
                for c in net_worth.liabilities_by_category
            ],
            monthly_debt_payments=float(net_worth.monthly_debt_payments),
        ),
        insights=[InsightSchema(title=i.title, content=i.content, type=i.type.value) for i in summary.insights],
        monthly_bills=round(float(summary.monthly_bills), 2),
        new_badges=sorted(new_badges),
    )


@router.post("/dashboard/evaluate", response_model=DashboardResponse)
def evaluate_snapshot(request_body: EvaluateRequest, request: Request):
    """
    Run the metrics pipeline over records supplied in the request body.

    Nothing is fetched or persisted; useful for previews and for callers
    that already hold the records.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        summary = build_dashboard(request_body.to_snapshot(), now=request_body.now)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    badges = [b.value for b in summary.feedback.badges]
    duration_ms = (time.time() - start_time) * 1000
    record_evaluation("posted", summary.wellness.value, summary.portfolio.value, badges)
    log_evaluation(request_id, None, "posted", summary.wellness.value, summary.portfolio.value, badges, duration_ms)

    return to_response(summary)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    db: Session = Depends(get_db),
    record_store: RecordStoreClient = Depends(get_record_store_client),
):
    """
    Compute the dashboard for a user from their stored records.

    Flow:
    1. Fetch the record snapshot (most recent transactions only)
    2. Run the metrics pipeline
    3. Remember badges unlocked for the first time
    4. Return the summary
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        snapshot = await record_store.get_snapshot(user_id)
    except RecordStoreError as e:
        record_store_failures_counter.inc()
        logging.error(f"Record store error: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=503, detail="Record store unavailable")

    try:
        summary = build_dashboard(snapshot)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    badges = [b.value for b in summary.feedback.badges]

    try:
        created = BadgeRepository(db).record_unlocks(user_id, badges)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to record badge unlocks: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    new_badges = [u.badge_id for u in created]

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_evaluation("record_store", summary.wellness.value, summary.portfolio.value, badges)
    record_first_unlocks(new_badges)
    log_evaluation(
        request_id, user_id, "record_store", summary.wellness.value, summary.portfolio.value, badges, duration_ms
    )

    return to_response(summary, user_id=user_id, new_badges=new_badges)
