"""
Licensing core (internal library): entitlement, tokens and billing-event
transitions. Pure logic only; persistence lives in services.licenses.
"""
from promptfoundry.licensing.entitlement import ENTITLED_STATUSES, is_entitled
from promptfoundry.licensing.events import (
    SUBSCRIPTION_LIFECYCLE_EVENTS,
    checkout_completion,
    payment_failed_change,
    subscription_change,
)
from promptfoundry.licensing.models import (
    CheckoutCompletion,
    LicenseStatus,
    SessionLicenseResult,
    SubscriptionChange,
    VerifyResult,
)
from promptfoundry.licensing.tokens import generate_license_token, normalize_token

__all__ = [
    "ENTITLED_STATUSES",
    "SUBSCRIPTION_LIFECYCLE_EVENTS",
    "CheckoutCompletion",
    "LicenseStatus",
    "SessionLicenseResult",
    "SubscriptionChange",
    "VerifyResult",
    "checkout_completion",
    "generate_license_token",
    "is_entitled",
    "normalize_token",
    "payment_failed_change",
    "subscription_change",
]
