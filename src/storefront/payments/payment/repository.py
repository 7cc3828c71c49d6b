from storefront.domain import storefront
from storefront.payments.payment.payment import Payment, PaymentStatus


@storefront.repository(part_of=Payment)
class PaymentRepository:
    def for_order(self, order_id) -> list[Payment]:
        """All payments for an order, newest first."""
        payments = self._dao.query.filter(order_id=str(order_id)).limit(None).all().items
        return sorted(payments, key=lambda p: p.created_at, reverse=True)

    def pending_for_order(self, order_id) -> Payment | None:
        return next((p for p in self.for_order(order_id) if p.is_pending), None)

    def latest_for_order(self, order_id) -> Payment | None:
        """The pending payment if there is one, else the most recent attempt."""
        payments = self.for_order(order_id)
        return next((p for p in payments if p.is_pending), payments[0] if payments else None)

    def find_by_intent(self, intent_id) -> Payment | None:
        payments = self._dao.query.filter(intent_id=intent_id).all().items
        return payments[0] if payments else None

    def find_pending(self) -> list[Payment]:
        return self._dao.query.filter(status=PaymentStatus.PENDING.value).limit(None).all().items
