"""Administrative order status updates."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        target = OrderStatus(command.status)

        if order.status == target.value:
            return order.status

        if target == OrderStatus.PAID:
            order.mark_paid()
        elif target == OrderStatus.PAYMENT_FAILED:
            order.mark_payment_failed(reason="Set by administrator")
        else:
            raise ValidationError({"status": [f"Cannot transition order from {order.status} to {target.value}"]})

        repo.add(order)
        logger.info("Order status updated by administrator", order_id=str(order.id), status=order.status)
        return order.status
