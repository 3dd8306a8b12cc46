"""
Shared fixtures: test environment, in-memory SQLite store, app client with
real webhook signature checks and a mocked Stripe API / mailer.
"""
import os
from unittest.mock import MagicMock

# Settings are read at import time; set the environment before any app import.
os.environ["APP_URL"] = "https://shop.example.com"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_123"
os.environ["STRIPE_PRICE_ID"] = "price_test_123"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RESEND_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from promptfoundry.core.config import settings
from promptfoundry.db.base import Base
from promptfoundry.models.customer import Customer  # noqa: F401
from promptfoundry.models.license import License  # noqa: F401
from promptfoundry.services.billing import StripeGateway
from promptfoundry.services.email.client import EmailClient
from tests.factories import make_subscription, sign_payload


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def gateway():
    """Real signature verification; Stripe API calls are mocked."""
    gw = StripeGateway(settings)
    gw.retrieve_subscription = MagicMock(return_value=make_subscription())
    gw.create_checkout_session = MagicMock(return_value="https://checkout.stripe.com/c/pay/cs_test_1")
    return gw


@pytest.fixture
def mailer():
    m = MagicMock(spec=EmailClient)
    m.send.return_value = {"ok": True, "stub": True}
    return m


@pytest.fixture
def client(session_factory, gateway, mailer):
    from promptfoundry.api.deps import get_gateway, get_mailer
    from promptfoundry.db.session import get_db
    from promptfoundry.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def post_event(client):
    """POST a Stripe event to the webhook; signed correctly unless a header is given ("" = none)."""

    def _post(payload: str, signature: str | None = None):
        if signature is None:
            signature = sign_payload(payload)
        headers = {"content-type": "application/json"}
        if signature:
            headers["stripe-signature"] = signature
        return client.post("/api/stripe/webhook", content=payload, headers=headers)

    return _post
