"""
FastAPI dependencies: shared Stripe gateway / email client and a per-request
LicenseService. Tests override these through app.dependency_overrides.
"""
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from promptfoundry.core.config import Settings, settings
from promptfoundry.db.session import get_db
from promptfoundry.services.billing import StripeGateway, WebhookProcessor
from promptfoundry.services.email.client import EmailClient
from promptfoundry.services.licenses.service import LicenseService


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_gateway() -> StripeGateway:
    return StripeGateway(settings)


@lru_cache(maxsize=1)
def get_mailer() -> EmailClient:
    return EmailClient(settings)


def get_license_service(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
) -> LicenseService:
    return LicenseService(db, tier=app_settings.license_tier)


def get_webhook_processor(
    licenses: LicenseService = Depends(get_license_service),
    gateway: StripeGateway = Depends(get_gateway),
    mailer: EmailClient = Depends(get_mailer),
    app_settings: Settings = Depends(get_settings),
) -> WebhookProcessor:
    return WebhookProcessor(licenses, gateway, mailer, app_settings)
