"""Stale payment expiry: command and handler.

Meant to be triggered periodically by an external scheduler through the
maintenance endpoint. Each payment still pending after the threshold is
failed through ``SettlePayment`` so its order moves to ``payment_failed``.
"""

from datetime import UTC, datetime, timedelta

import structlog
from protean import handle
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Integer
from protean.utils.globals import current_domain

from storefront import config
from storefront.domain import storefront
from storefront.payments.payment.payment import Payment
from storefront.payments.payment.repository import PaymentRepository  # noqa: F401
from storefront.payments.payment.settlement import SettlementOutcome, SettlePayment

logger = structlog.get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


@storefront.command(part_of="Payment")
class ExpireStalePayments:
    max_age_minutes = Integer(min_value=1)
    as_of = DateTime()  # Optional: defaults to now


@storefront.command_handler(part_of=Payment)
class ExpireStalePaymentsHandler:
    @handle(ExpireStalePayments)
    def expire_stale_payments(self, command):
        as_of = _as_utc(command.as_of or datetime.now(UTC))
        max_age = command.max_age_minutes or config.payment_expiry_minutes()
        cutoff = as_of - timedelta(minutes=max_age)

        stale = [
            p
            for p in current_domain.repository_for(Payment).find_pending()
            if p.created_at and _as_utc(p.created_at) <= cutoff
        ]
        if not stale:
            logger.info("No stale payments found", cutoff=cutoff.isoformat())
            return 0

        expired = 0
        for payment in stale:
            try:
                current_domain.process(
                    SettlePayment(
                        intent_id=payment.intent_id,
                        outcome=SettlementOutcome.FAILED.value,
                        reason="Payment expired",
                    ),
                    asynchronous=False,
                )
                expired += 1
            except (ValidationError, InvalidOperationError, ObjectNotFoundError) as exc:
                logger.warning("Failed to expire payment", payment_id=str(payment.id), error=str(exc))

        logger.info("Stale payment expiry complete", expired=expired, max_age_minutes=max_age)
        return expired
