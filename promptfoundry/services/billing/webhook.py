"""
WebhookProcessor: Stripe events -> customer/license writes + license email.

Stripe delivers at least once and redelivers on any non-2xx, so every branch
is idempotent: upserts keyed on email / subscription id, status updates
applied unconditionally (last write wins, terminal states included).
Store and email errors propagate so the route answers 500.
"""
import logging
import time
from typing import Any

from promptfoundry.core.config import Settings
from promptfoundry.licensing import (
    SUBSCRIPTION_LIFECYCLE_EVENTS,
    checkout_completion,
    payment_failed_change,
    subscription_change,
)
from promptfoundry.services.billing.stripe_gateway import StripeGateway
from promptfoundry.services.email.client import EmailClient
from promptfoundry.services.email.templates import license_email_html, license_email_subject
from promptfoundry.services.licenses.service import LicenseService
from promptfoundry.utils.metrics import webhook_events_total, webhook_processing_seconds

logger = logging.getLogger(__name__)

HANDLED = "handled"
IGNORED = "ignored"
DROPPED = "dropped"


class WebhookProcessor:
    def __init__(
        self,
        licenses: LicenseService,
        gateway: StripeGateway,
        mailer: EmailClient,
        settings: Settings,
    ) -> None:
        self.licenses = licenses
        self.gateway = gateway
        self.mailer = mailer
        self.settings = settings

    def process(self, event: dict[str, Any]) -> str:
        """Handle one verified event; returns the outcome label."""
        event_type = event.get("type", "")
        obj = (event.get("data") or {}).get("object") or {}
        start = time.time()
        try:
            if event_type == "checkout.session.completed":
                outcome = self._on_checkout_completed(obj)
            elif event_type in SUBSCRIPTION_LIFECYCLE_EVENTS:
                outcome = self._on_subscription_changed(obj)
            elif event_type == "invoice.payment_failed":
                outcome = self._on_payment_failed(obj)
            else:
                outcome = IGNORED
        except Exception:
            webhook_events_total.labels(event_type=event_type, outcome="failed").inc()
            raise
        finally:
            webhook_processing_seconds.labels(event_type=event_type).observe(time.time() - start)

        webhook_events_total.labels(event_type=event_type, outcome=outcome).inc()
        logger.info(
            "webhook_processed",
            extra={"event_id": event.get("id"), "event_type": event_type, "status": outcome},
        )
        return outcome

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_checkout_completed(self, session: dict[str, Any]) -> str:
        if session.get("mode") != "subscription":
            return IGNORED

        subscription = self.gateway.retrieve_subscription(session.get("subscription"))
        completion = checkout_completion(session, subscription)
        if not completion.email:
            logger.warning(
                "checkout_session_without_email",
                extra={"session_id": completion.session_id, "subscription_id": completion.subscription_id},
            )
            return DROPPED

        customer = self.licenses.upsert_customer(completion.email, completion.stripe_customer_id)
        lic = self.licenses.upsert_license(customer, completion)

        self.mailer.send(
            to=completion.email,
            subject=license_email_subject(self.settings),
            html=license_email_html(self.settings, lic.token),
        )
        return HANDLED

    def _on_subscription_changed(self, subscription: dict[str, Any]) -> str:
        change = subscription_change(subscription)
        return HANDLED if self.licenses.apply_change(change) else DROPPED

    def _on_payment_failed(self, invoice: dict[str, Any]) -> str:
        change = payment_failed_change(invoice)
        if change is None:
            return IGNORED
        return HANDLED if self.licenses.apply_change(change) else DROPPED
