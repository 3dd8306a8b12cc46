"""
Stripe payloads -> licensing DTOs. Pure functions, no I/O.

Each billing event becomes a SubscriptionChange that is applied to the
store unconditionally, so redelivered events converge on the same row.
Accepts plain dicts (parsed webhook bodies) and stripe.StripeObject alike.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from promptfoundry.licensing.models import (
    CheckoutCompletion,
    LicenseStatus,
    SubscriptionChange,
)

SUBSCRIPTION_LIFECYCLE_EVENTS = frozenset({
    "customer.subscription.updated",
    "customer.subscription.deleted",
    "customer.subscription.paused",
    "customer.subscription.resumed",
})


def _field(obj: Any, key: str, default: Any = None) -> Any:
    if obj is None:
        return default
    try:
        value = obj[key]
    except (KeyError, TypeError, IndexError):
        return default
    return default if value is None else value


def _ref_id(value: Any) -> str | None:
    """Stripe references are either an id string or an expanded object."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return _field(value, "id")


def _from_epoch(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def period_end_from_subscription(subscription: Any) -> datetime | None:
    """current_period_end; newer API versions only carry it on subscription items."""
    value = _field(subscription, "current_period_end")
    if value is None:
        items = _field(_field(subscription, "items"), "data", [])
        if items:
            value = _field(items[0], "current_period_end")
    return _from_epoch(value)


def subscription_change(subscription: Any) -> SubscriptionChange:
    return SubscriptionChange(
        subscription_id=_field(subscription, "id"),
        status=_field(subscription, "status"),
        current_period_end=period_end_from_subscription(subscription),
    )


def invoice_subscription_id(invoice: Any) -> str | None:
    sub = _field(invoice, "subscription")
    if sub is None:
        details = _field(_field(invoice, "parent"), "subscription_details")
        sub = _field(details, "subscription")
    return _ref_id(sub)


def payment_failed_change(invoice: Any) -> SubscriptionChange | None:
    """invoice.payment_failed -> past_due; None for invoices outside a subscription."""
    subscription_id = invoice_subscription_id(invoice)
    if not subscription_id:
        return None
    return SubscriptionChange(
        subscription_id=subscription_id,
        status=LicenseStatus.PAST_DUE.value,
        touches_period_end=False,
    )


def checkout_completion(session: Any, subscription: Any) -> CheckoutCompletion:
    email = _field(_field(session, "customer_details"), "email") or _field(subscription, "customer_email")
    return CheckoutCompletion(
        session_id=_field(session, "id"),
        email=email.strip().lower() if email else None,
        stripe_customer_id=_ref_id(_field(session, "customer")),
        subscription_id=_field(subscription, "id"),
        status=_field(subscription, "status"),
        current_period_end=period_end_from_subscription(subscription),
    )
