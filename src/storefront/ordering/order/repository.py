from storefront.domain import storefront
from storefront.ordering.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def list_orders(self, user_id=None) -> list[Order]:
        """Orders newest first, optionally restricted to one user."""
        query = self._dao.query
        if user_id:
            query = query.filter(user_id=str(user_id))
        orders = query.limit(None).all().items
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def find_by_idempotency_key(self, idempotency_key) -> Order | None:
        orders = self._dao.query.filter(idempotency_key=idempotency_key).all().items
        return orders[0] if orders else None
