"""
Entitlement is a pure function of License.status, no I/O.
past_due stays entitled while Stripe retries the payment.
"""
from __future__ import annotations

from promptfoundry.licensing.models import LicenseStatus

ENTITLED_STATUSES = frozenset({
    LicenseStatus.ACTIVE.value,
    LicenseStatus.TRIALING.value,
    LicenseStatus.PAST_DUE.value,
})


def is_entitled(status: str | None) -> bool:
    """True for active, trialing and past_due; every other status (or None) is locked."""
    if not status:
        return False
    return status in ENTITLED_STATUSES
