"""
Thin wrapper around the stripe SDK: hosted checkout, subscription lookup and
webhook signature verification. Everything else about billing stays in Stripe.
"""
import json
import logging
from typing import Any

import stripe

from promptfoundry.core.config import Settings

logger = logging.getLogger(__name__)


class WebhookVerificationError(Exception):
    """Webhook body could not be authenticated or parsed; nothing was processed."""


class StripeGateway:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        stripe.api_key = settings.stripe_secret_key
        stripe.api_version = settings.stripe_api_version

    def create_checkout_session(self) -> str:
        """Create a subscription Checkout Session for the configured price; returns its URL."""
        app_url = self._settings.app_url
        session = stripe.checkout.Session.create(
            mode="subscription",
            line_items=[
                {
                    "price": self._settings.stripe_price_id,
                    "quantity": 1,
                },
            ],
            allow_promotion_codes=True,
            # Stripe fills in the real id on redirect
            success_url=f"{app_url}/success.html?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{app_url}#pricing",
            billing_address_collection="auto",
            subscription_data={
                "metadata": {"plan": self._settings.license_tier},
            },
        )
        logger.info("checkout_session_created", extra={"session_id": session.id})
        return session.url

    def retrieve_subscription(self, subscription_id: str) -> Any:
        return stripe.Subscription.retrieve(subscription_id)

    def parse_webhook(self, payload: bytes, sig_header: str | None) -> dict[str, Any]:
        """
        Verify the Stripe-Signature header over the raw body and return the
        decoded event. Raises WebhookVerificationError on any failure.
        """
        secret = self._settings.stripe_webhook_secret
        if not sig_header or not secret:
            raise WebhookVerificationError("Missing webhook secret")
        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body, sig_header, secret, tolerance=self._settings.stripe_webhook_tolerance
            )
            event = json.loads(body)
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError(str(e)) from e
        except (UnicodeDecodeError, ValueError) as e:
            raise WebhookVerificationError(f"Invalid payload: {e}") from e
        if not isinstance(event, dict) or "type" not in event:
            raise WebhookVerificationError("Invalid payload: not a Stripe event")
        return event
