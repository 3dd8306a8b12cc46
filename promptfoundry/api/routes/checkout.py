"""
Hosted checkout redirect. GET so the static site can use a plain link.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from promptfoundry.api.deps import get_gateway
from promptfoundry.services.billing import StripeGateway
from promptfoundry.utils.metrics import checkout_sessions_total

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["checkout"])


@router.get("/checkout")
def checkout(gateway: StripeGateway = Depends(get_gateway)):
    try:
        url = gateway.create_checkout_session()
    except Exception:
        checkout_sessions_total.labels(status="error").inc()
        logger.exception("checkout_session_failed")
        return PlainTextResponse(
            "Failed to create checkout session",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    checkout_sessions_total.labels(status="created").inc()
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
