"""Order creation — command and handler.

Placing an order never clears the cart: the client clears it once payment
is confirmed, so an abandoned payment leaves the cart intact.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class CreateOrder:
    user_id = Identifier(required=True)
    customer_email = String(max_length=254)
    customer_name = String(max_length=100)
    items = Text(required=True)  # JSON: list of item dicts
    total = Float(min_value=0.0)
    currency = String(max_length=3, default="BTN")


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = Order.create(
            user_id=command.user_id,
            items_data=items_data,
            total=command.total,
            customer_email=command.customer_email,
            customer_name=command.customer_name,
            currency=command.currency,
        )
        current_domain.repository_for(Order).add(order)
        logger.info("Order created", order_id=str(order.id), order_number=order.order_number, total=order.total)
        return str(order.id)
