"""Tests for Stripe payload -> SubscriptionChange / CheckoutCompletion mapping."""
from datetime import datetime, timezone

from promptfoundry.licensing import checkout_completion, payment_failed_change, subscription_change
from promptfoundry.licensing.events import invoice_subscription_id, period_end_from_subscription
from tests.factories import PERIOD_END, make_checkout_session, make_subscription

PERIOD_END_DT = datetime(2026, 1, 1, tzinfo=timezone.utc)


class TestSubscriptionChange:
    def test_maps_status_and_period_end(self):
        change = subscription_change(make_subscription(status="canceled"))
        assert change.subscription_id == "sub_123"
        assert change.status == "canceled"
        assert change.current_period_end == PERIOD_END_DT
        assert change.as_values() == {"status": "canceled", "current_period_end": PERIOD_END_DT}

    def test_period_end_from_items_on_newer_api(self):
        sub = make_subscription()
        del sub["current_period_end"]
        sub["items"] = {"object": "list", "data": [{"id": "si_1", "current_period_end": PERIOD_END}]}
        assert period_end_from_subscription(sub) == PERIOD_END_DT

    def test_period_end_missing_everywhere(self):
        sub = make_subscription()
        del sub["current_period_end"]
        assert period_end_from_subscription(sub) is None


class TestPaymentFailed:
    def test_top_level_subscription(self):
        change = payment_failed_change({"id": "in_1", "subscription": "sub_9"})
        assert change.subscription_id == "sub_9"
        assert change.status == "past_due"
        # period end is left alone
        assert change.as_values() == {"status": "past_due"}

    def test_parent_subscription_details(self):
        invoice = {
            "id": "in_2",
            "parent": {"type": "subscription_details", "subscription_details": {"subscription": "sub_7"}},
        }
        assert invoice_subscription_id(invoice) == "sub_7"

    def test_expanded_subscription_object(self):
        assert invoice_subscription_id({"subscription": {"id": "sub_5", "object": "subscription"}}) == "sub_5"

    def test_one_off_invoice_ignored(self):
        assert payment_failed_change({"id": "in_3", "subscription": None}) is None


class TestCheckoutCompletion:
    def test_email_is_normalized(self):
        completion = checkout_completion(make_checkout_session(email="  Buyer@Example.COM "), make_subscription())
        assert completion.email == "buyer@example.com"
        assert completion.session_id == "cs_test_1"
        assert completion.subscription_id == "sub_123"
        assert completion.status == "active"
        assert completion.current_period_end == PERIOD_END_DT

    def test_email_falls_back_to_subscription(self):
        session = make_checkout_session(email=None)
        sub = make_subscription()
        sub["customer_email"] = "fallback@example.com"
        assert checkout_completion(session, sub).email == "fallback@example.com"

    def test_no_email_at_all(self):
        assert checkout_completion(make_checkout_session(email=None), make_subscription()).email is None

    def test_expanded_customer(self):
        session = make_checkout_session()
        session["customer"] = {"id": "cus_expanded", "object": "customer"}
        assert checkout_completion(session, make_subscription()).stripe_customer_id == "cus_expanded"
