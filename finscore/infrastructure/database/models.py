"""SQLAlchemy ORM models for badge unlock history"""

import uuid
from sqlalchemy import Column, DateTime, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class BadgeUnlock(Base):
    """First time a badge was seen unlocked for a user. Computed metrics are never stored."""

    __tablename__ = "badge_unlock"
    __table_args__ = (UniqueConstraint("user_id", "badge_id", name="uq_badge_unlock_user_badge"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    badge_id = Column(Text, nullable=False)
    first_unlocked_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
