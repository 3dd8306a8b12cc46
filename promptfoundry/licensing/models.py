"""
DTO licensing: LicenseStatus, SubscriptionChange (event -> column values),
CheckoutCompletion, VerifyResult / SessionLicenseResult (response contracts).
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class LicenseStatus(str, Enum):
    """Stripe subscription states mirrored onto License.status (plus our `deleted`)."""

    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"
    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    PAUSED = "paused"
    DELETED = "deleted"


# ----- Changes derived from billing events (pure, applied unconditionally) -----


class SubscriptionChange(BaseModel):
    """New status (and optionally period end) for the license of one subscription."""

    subscription_id: str
    status: str
    current_period_end: datetime | None = None
    # invoice.payment_failed only moves the status
    touches_period_end: bool = True

    model_config = {"frozen": True}

    def as_values(self) -> dict[str, Any]:
        values: dict[str, Any] = {"status": self.status}
        if self.touches_period_end:
            values["current_period_end"] = self.current_period_end
        return values


class CheckoutCompletion(BaseModel):
    """Everything checkout.session.completed needs to issue a license."""

    session_id: str
    email: str | None = None
    stripe_customer_id: str | None = None
    subscription_id: str
    status: str
    current_period_end: datetime | None = None

    model_config = {"frozen": True}


# ----- Response contracts -----


class VerifyResult(BaseModel):
    ok: bool
    tier: str | None = None
    current_period_end: datetime | None = Field(
        None,
        description="End of the paid period; None when unknown",
    )


class SessionLicenseResult(BaseModel):
    ok: bool
    token: str | None = None
    status: str | None = None
