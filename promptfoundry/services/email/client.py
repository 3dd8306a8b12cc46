"""
Transactional email via the Resend HTTP API using httpx sync client.
Without an API key sends are logged and reported as stubs.
"""
import logging

import httpx

from promptfoundry.core.config import Settings
from promptfoundry.utils.metrics import license_emails_total


logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """The email provider rejected or failed the send."""


class EmailClient:
    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.resend_api_key
        self._api_url = settings.email_api_url
        self._timeout = settings.http_client_timeout
        self._sender = f"{settings.brand_name} <no-reply@{settings.app_hostname}>"
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Lazy initialization of httpx client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def send(self, to: str, subject: str, html: str) -> dict:
        if not self._api_key:
            logger.info("email_stub", extra={"to": to, "subject": subject})
            license_emails_total.labels(status="stub").inc()
            return {"ok": True, "stub": True}

        try:
            resp = self.client.post(
                self._api_url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={"from": self._sender, "to": to, "subject": subject, "html": html},
            )
        except httpx.HTTPError as e:
            license_emails_total.labels(status="error").inc()
            logger.error("email_send_failed", extra={"to": to, "error": str(e)})
            raise EmailDeliveryError("Email send failed") from e

        if resp.is_error:
            license_emails_total.labels(status="error").inc()
            logger.error(
                "email_send_failed",
                extra={"to": to, "status_code": resp.status_code, "error": resp.text},
            )
            raise EmailDeliveryError("Email send failed")

        license_emails_total.labels(status="sent").inc()
        try:
            return resp.json()
        except ValueError:
            # Accepted; body is not JSON
            return {"ok": True}

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
