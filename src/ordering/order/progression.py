"""Order progression — command and handler for status and payment status moves."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order

NOT_FOUND_OR_NOT_AUTHORIZED = "Order not found or not authorized"


@ordering.command(part_of="Order")
class AdvanceOrder:
    order_id = Identifier(required=True)
    actor_id = String(required=True, max_length=254)
    actor_email = String(max_length=254)
    actor_role = String(required=True, max_length=20)
    actor_shop_id = Identifier()
    status = String(max_length=20)
    payment_status = String(max_length=20)


def load_for_actor(order_id, keys, role, shop_id=None) -> Order:
    """Load an order the actor may act on.

    Orders outside the actor's reach are reported as missing.
    """
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError(NOT_FOUND_OR_NOT_AUTHORIZED) from None

    if not order.visible_to(keys, role, shop_id):
        raise ObjectNotFoundError(NOT_FOUND_OR_NOT_AUTHORIZED)
    return order


@ordering.command_handler(part_of=Order)
class AdvanceOrderHandler:
    @handle(AdvanceOrder)
    def advance_order(self, command):
        order = load_for_actor(
            command.order_id,
            {command.actor_id, command.actor_email},
            command.actor_role,
            command.actor_shop_id,
        )
        changed = order.advance(
            status=command.status,
            payment_status=command.payment_status,
            updated_by=command.actor_email or command.actor_id,
        )
        if changed:
            current_domain.repository_for(Order).add(order)
            logger.info(
                "Order advanced",
                order_id=str(order.id),
                status=order.status,
                payment_status=order.payment_status,
            )
        return changed
