from promptfoundry.services.billing.stripe_gateway import StripeGateway, WebhookVerificationError
from promptfoundry.services.billing.webhook import WebhookProcessor

__all__ = [
    "StripeGateway",
    "WebhookProcessor",
    "WebhookVerificationError",
]
