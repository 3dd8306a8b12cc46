"""
License lookups for the browser gate and the post-checkout success page.
Unknown tokens/sessions are a negative answer, never an error.
"""
import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from promptfoundry.api.deps import get_license_service
from promptfoundry.licensing import SessionLicenseResult, VerifyResult, is_entitled, normalize_token
from promptfoundry.services.licenses.service import LicenseService
from promptfoundry.utils.metrics import license_verifications_total

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/license", tags=["license"])


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"ok": False, "error": message}, status_code=status.HTTP_400_BAD_REQUEST)


def _store_unavailable() -> JSONResponse:
    return JSONResponse(
        {"ok": False, "error": "store unavailable"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@router.get("/verify", response_model=VerifyResult, response_model_exclude_none=True)
def verify(
    token: str | None = Query(None),
    licenses: LicenseService = Depends(get_license_service),
):
    """Used by the unlock modal and on every page load of the gated site."""
    token = normalize_token(token)
    if not token:
        return _bad_request("token required")

    try:
        lic = licenses.get_by_token(token)
    except SQLAlchemyError:
        license_verifications_total.labels(result="error").inc()
        logger.exception("license_verify_failed")
        return _store_unavailable()

    if lic is None:
        license_verifications_total.labels(result="unknown").inc()
        return VerifyResult(ok=False)

    entitled = is_entitled(lic.status)
    license_verifications_total.labels(result="entitled" if entitled else "not_entitled").inc()
    return VerifyResult(ok=entitled, tier=lic.tier, current_period_end=lic.current_period_end)


@router.get("/from-session", response_model=SessionLicenseResult, response_model_exclude_none=True)
def from_session(
    session_id: str | None = Query(None),
    licenses: LicenseService = Depends(get_license_service),
):
    """Shows the key right after checkout, before the email arrives."""
    session_id = (session_id or "").strip()
    if not session_id:
        return _bad_request("session_id required")

    try:
        lic = licenses.get_by_session(session_id)
    except SQLAlchemyError:
        logger.exception("license_from_session_failed", extra={"session_id": session_id})
        return _store_unavailable()

    if lic is None:
        return SessionLicenseResult(ok=False)
    return SessionLicenseResult(ok=True, token=lic.token, status=lic.status)
