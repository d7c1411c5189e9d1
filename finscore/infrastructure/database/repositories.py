"""Data access layer for badge unlocks"""

import logging
from typing import Iterable, List, Set
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from finscore.infrastructure.database.models import BadgeUnlock

logger = logging.getLogger(__name__)


class BadgeRepository:
    """Repository for per-user badge unlock history"""

    def __init__(self, db: Session):
        self.db = db

    def recorded_badge_ids(self, user_id: str) -> Set[str]:
        return {
            row.badge_id
            for row in self.db.query(BadgeUnlock.badge_id).filter(BadgeUnlock.user_id == user_id).all()
        }

    def record_unlocks(self, user_id: str, badge_ids: Iterable[str]) -> List[BadgeUnlock]:
        """
        Insert an unlock row for each badge not already recorded.

        Idempotent: badges seen before keep their original timestamp.
        Each insert runs in its own savepoint, so a row written meanwhile by
        another request for the same user is skipped instead of failing the
        whole batch. Returns only the newly created rows.
        """
        existing = self.recorded_badge_ids(user_id)

        created = []
        for badge_id in sorted(set(badge_ids) - existing):
            unlock = BadgeUnlock(user_id=user_id, badge_id=badge_id)
            try:
                with self.db.begin_nested():
                    self.db.add(unlock)
            except IntegrityError:
                logger.debug("Badge already recorded", extra={"user_id": user_id, "badge_id": badge_id})
                continue
            created.append(unlock)

        return created

    def get_unlocks_by_user(self, user_id: str) -> List[BadgeUnlock]:
        """Fetch a user's unlocks, oldest first"""
        return (
            self.db.query(BadgeUnlock)
            .filter(BadgeUnlock.user_id == user_id)
            .order_by(BadgeUnlock.first_unlocked_at.asc(), BadgeUnlock.badge_id.asc())
            .all()
        )
