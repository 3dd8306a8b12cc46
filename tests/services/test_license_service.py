"""Tests for LicenseService against an in-memory SQLite store (ON CONFLICT upserts)."""
from datetime import datetime, timezone

import pytest

from promptfoundry.licensing import CheckoutCompletion, SubscriptionChange
from promptfoundry.models.customer import Customer
from promptfoundry.models.license import License
from promptfoundry.services.licenses.service import LicenseService


def _completion(**kwargs) -> CheckoutCompletion:
    values = {
        "session_id": "cs_test_1",
        "email": "buyer@example.com",
        "stripe_customer_id": "cus_123",
        "subscription_id": "sub_123",
        "status": "active",
        "current_period_end": datetime(2026, 1, 1, tzinfo=timezone.utc),
    }
    values.update(kwargs)
    return CheckoutCompletion(**values)


@pytest.fixture
def service(db):
    return LicenseService(db, tier="all-access")


def _issue(service: LicenseService, **kwargs) -> License:
    completion = _completion(**kwargs)
    customer = service.upsert_customer(completion.email, completion.stripe_customer_id)
    return service.upsert_license(customer, completion)


class TestUpsertCustomer:
    def test_creates_customer(self, service, db):
        customer = service.upsert_customer("Buyer@Example.com ", "cus_1")
        assert customer.email == "buyer@example.com"
        assert customer.stripe_customer_id == "cus_1"
        assert db.query(Customer).count() == 1

    def test_same_email_updates_reference(self, service, db):
        first = service.upsert_customer("buyer@example.com", "cus_1")
        second = service.upsert_customer("BUYER@example.com", "cus_2")
        assert second.id == first.id
        assert second.stripe_customer_id == "cus_2"
        assert db.query(Customer).count() == 1


class TestUpsertLicense:
    def test_issues_license(self, service):
        lic = _issue(service)
        assert lic.stripe_subscription_id == "sub_123"
        assert lic.status == "active"
        assert lic.tier == "all-access"
        assert lic.session_id == "cs_test_1"
        assert len(lic.token) == 21

    def test_replay_keeps_single_row_and_token(self, service, db):
        first = _issue(service)
        token = first.token
        second = _issue(service, status="trialing", session_id="cs_test_2")
        assert db.query(License).count() == 1
        assert second.id == first.id
        assert second.token == token
        assert second.status == "trialing"
        assert second.session_id == "cs_test_2"

    def test_distinct_subscriptions_get_distinct_tokens(self, service, db):
        a = _issue(service)
        b = _issue(service, subscription_id="sub_456", session_id="cs_test_9")
        assert db.query(License).count() == 2
        assert a.token != b.token


class TestApplyChange:
    def test_updates_status_and_keeps_token(self, service, db):
        lic = _issue(service)
        token = lic.token
        ok = service.apply_change(SubscriptionChange(
            subscription_id="sub_123",
            status="canceled",
            current_period_end=datetime(2026, 2, 1, tzinfo=timezone.utc),
        ))
        assert ok is True
        db.expire_all()
        refreshed = service.get_by_subscription("sub_123")
        assert refreshed.status == "canceled"
        assert refreshed.token == token
        assert refreshed.current_period_end.replace(tzinfo=None) == datetime(2026, 2, 1)

    def test_status_only_change_keeps_period_end(self, service, db):
        _issue(service)
        service.apply_change(SubscriptionChange(subscription_id="sub_123", status="past_due", touches_period_end=False))
        db.expire_all()
        refreshed = service.get_by_subscription("sub_123")
        assert refreshed.status == "past_due"
        assert refreshed.current_period_end.replace(tzinfo=None) == datetime(2026, 1, 1)

    def test_terminal_state_still_accepts_late_events(self, service, db):
        _issue(service)
        service.apply_change(SubscriptionChange(subscription_id="sub_123", status="canceled"))
        service.apply_change(SubscriptionChange(subscription_id="sub_123", status="active"))
        db.expire_all()
        assert service.get_by_subscription("sub_123").status == "active"

    def test_unknown_subscription_is_dropped(self, service, db):
        ok = service.apply_change(SubscriptionChange(subscription_id="sub_missing", status="canceled"))
        assert ok is False
        assert db.query(License).count() == 0


class TestReads:
    def test_get_by_token(self, service):
        lic = _issue(service)
        assert service.get_by_token(lic.token).id == lic.id
        assert service.get_by_token("ABC123-DEADBEEF") is None

    def test_get_by_session(self, service):
        lic = _issue(service)
        assert service.get_by_session("cs_test_1").token == lic.token
        assert service.get_by_session("cs_unknown") is None
