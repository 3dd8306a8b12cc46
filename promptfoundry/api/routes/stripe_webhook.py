"""
Stripe webhook. Needs the raw body for signature verification, so the
handler reads the request itself and runs the sync processor in a threadpool.
"""
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from promptfoundry.api.deps import get_gateway, get_webhook_processor
from promptfoundry.services.billing import StripeGateway, WebhookProcessor, WebhookVerificationError
from promptfoundry.utils.metrics import webhook_events_total

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stripe", tags=["stripe"])


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    gateway: StripeGateway = Depends(get_gateway),
    processor: WebhookProcessor = Depends(get_webhook_processor),
):
    payload = await request.body()
    try:
        event = gateway.parse_webhook(payload, request.headers.get("stripe-signature"))
    except WebhookVerificationError as e:
        webhook_events_total.labels(event_type="unknown", outcome="rejected").inc()
        logger.warning("webhook_signature_rejected", extra={"error": str(e)})
        return PlainTextResponse(f"Webhook Error: {e}", status_code=status.HTTP_400_BAD_REQUEST)

    try:
        await run_in_threadpool(processor.process, event)
    except Exception:
        logger.exception(
            "webhook_handling_failed",
            extra={"event_id": event.get("id"), "event_type": event.get("type")},
        )
        return PlainTextResponse(
            "Webhook handler failed",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return {"received": True}
