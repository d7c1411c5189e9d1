"""GET /v1/badges - A user's persisted badge unlock history"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finscore.api.v1.schemas import BadgeHistoryResponse, BadgeUnlockSchema
from finscore.infrastructure.database.session import get_db
from finscore.infrastructure.database.repositories import BadgeRepository

router = APIRouter()


@router.get("/badges", response_model=BadgeHistoryResponse)
def get_badge_history(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve badges recorded for a user with the time each was first seen.

    Only dashboard loads through the record store add to this history.
    """
    unlocks = BadgeRepository(db).get_unlocks_by_user(user_id)

    return BadgeHistoryResponse(
        user_id=user_id,
        badges=[
            BadgeUnlockSchema(badge_id=u.badge_id, first_unlocked_at=u.first_unlocked_at.isoformat())
            for u in unlocks
        ],
    )
