"""
License: one row per Stripe subscription.
token is issued on insert and never rewritten; billing events only move
status / current_period_end.
"""
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String

from promptfoundry.db.base import Base


class License(Base):
    __tablename__ = "licenses"

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    token = Column(String, unique=True, nullable=False, index=True)
    customer_id = Column(String, ForeignKey("customers.id"), nullable=False, index=True)
    stripe_subscription_id = Column(String, unique=True, nullable=False)
    status = Column(String, nullable=False)              # mirrors Stripe subscription.status
    current_period_end = Column(DateTime(timezone=True), nullable=True)
    session_id = Column(String, nullable=True, index=True)  # originating checkout session
    tier = Column(String, nullable=False, default="all-access")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
