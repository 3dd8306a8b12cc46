"""
LicenseService: customers and licenses in the managed store.

Each write is a single statement committed on its own:
- customer upsert keyed on email
- license upsert keyed on stripe_subscription_id (token only set on insert)
- status / period-end update keyed on stripe_subscription_id
"""
import logging
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from promptfoundry.licensing import CheckoutCompletion, SubscriptionChange, generate_license_token
from promptfoundry.models.customer import Customer
from promptfoundry.models.license import License

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class LicenseService:
    def __init__(self, db: Session, tier: str = "all-access"):
        self.db = db
        self.tier = tier

    def _insert(self, model):
        dialect = self.db.get_bind().dialect.name
        try:
            return _UPSERT_DIALECTS[dialect](model)
        except KeyError:
            raise NotImplementedError(f"No INSERT ... ON CONFLICT support for dialect {dialect!r}") from None

    def _execute_upsert(self, stmt):
        try:
            row = self.db.scalars(stmt, execution_options={"populate_existing": True}).one()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return row

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def upsert_customer(self, email: str, stripe_customer_id: str | None) -> Customer:
        """Insert the customer or refresh its Stripe reference; keyed on email."""
        email = email.strip().lower()
        stmt = self._insert(Customer).values([{
            "id": str(uuid4()),
            "email": email,
            "stripe_customer_id": stripe_customer_id,
            "created_at": datetime.now(timezone.utc),
        }])
        stmt = stmt.on_conflict_do_update(
            index_elements=[Customer.email],
            set_={"stripe_customer_id": stmt.excluded.stripe_customer_id},
        ).returning(Customer)
        customer = self._execute_upsert(stmt)
        logger.info("customer_upserted", extra={"customer_id": customer.id})
        return customer

    def upsert_license(self, customer: Customer, completion: CheckoutCompletion) -> License:
        """
        Create the license for a subscription, or refresh status / period end /
        session of the existing one. A fresh token is offered on every call but
        only lands on insert, so the issued token never changes.
        """
        now = datetime.now(timezone.utc)
        stmt = self._insert(License).values([{
            "id": str(uuid4()),
            "token": generate_license_token(),
            "customer_id": customer.id,
            "stripe_subscription_id": completion.subscription_id,
            "status": completion.status,
            "current_period_end": completion.current_period_end,
            "session_id": completion.session_id,
            "tier": self.tier,
            "created_at": now,
            "updated_at": now,
        }])
        stmt = stmt.on_conflict_do_update(
            index_elements=[License.stripe_subscription_id],
            set_={
                "status": stmt.excluded.status,
                "current_period_end": stmt.excluded.current_period_end,
                "session_id": stmt.excluded.session_id,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(License)
        lic = self._execute_upsert(stmt)
        logger.info(
            "license_upserted",
            extra={
                "license_id": lic.id,
                "subscription_id": lic.stripe_subscription_id,
                "status": lic.status,
            },
        )
        return lic

    def apply_change(self, change: SubscriptionChange) -> bool:
        """Apply a billing-event change to the license of its subscription.

        Returns False when no license exists for the subscription (nothing written).
        """
        values = change.as_values()
        values["updated_at"] = datetime.now(timezone.utc)
        try:
            updated = (
                self.db.query(License)
                .filter(License.stripe_subscription_id == change.subscription_id)
                .update(values, synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        if not updated:
            logger.warning(
                "subscription_event_for_unknown_license",
                extra={"subscription_id": change.subscription_id, "status": change.status},
            )
            return False
        logger.info(
            "license_status_changed",
            extra={"subscription_id": change.subscription_id, "status": change.status},
        )
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_token(self, token: str) -> License | None:
        return self.db.query(License).filter(License.token == token).one_or_none()

    def get_by_session(self, session_id: str) -> License | None:
        return (
            self.db.query(License)
            .filter(License.session_id == session_id)
            .order_by(License.created_at.desc())
            .first()
        )

    def get_by_subscription(self, subscription_id: str) -> License | None:
        return (
            self.db.query(License)
            .filter(License.stripe_subscription_id == subscription_id)
            .one_or_none()
        )
