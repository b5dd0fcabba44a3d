"""Checkout payment — command and handler.

Card fields are validated before anything is touched. Card and PayPal
payments are charged through the payment gateway; cash on delivery only
marks the payment as pending.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order, OrderStatus, PaymentStatus
from ordering.order.progression import load_for_actor
from payments.card import PaymentMethod, parse_method, validate_card
from payments.gateway import get_gateway


@ordering.command(part_of="Order")
class PayForOrder:
    order_id = Identifier(required=True)
    user_id = String(required=True, max_length=254)
    user_email = String(max_length=254)
    method = String(required=True, max_length=20)
    card_number = String(max_length=32)
    card_name = String(max_length=100)
    expiry_date = String(max_length=5)
    cvv = String(max_length=4)


@ordering.command_handler(part_of=Order)
class PayForOrderHandler:
    @handle(PayForOrder)
    def pay_for_order(self, command):
        method = parse_method(command.method)
        card = None
        if method == PaymentMethod.CREDIT_CARD:
            card = validate_card(command.card_number, command.card_name, command.expiry_date, command.cvv)

        order = load_for_actor(command.order_id, {command.user_id, command.user_email}, role="BUYER")
        if order.payment_status == PaymentStatus.PAID.value:
            raise ValidationError({"payment_status": ["Order is already paid"]})
        if order.status == OrderStatus.CANCELLED.value:
            raise ValidationError({"status": ["Cannot pay for a cancelled order"]})

        # Only an order still awaiting processing moves forward with the payment
        next_status = OrderStatus.PROCESSING.value if order.status == OrderStatus.PENDING.value else None

        if method == PaymentMethod.CASH:
            order.record_payment(method.value)
            order.advance(
                payment_status=PaymentStatus.PENDING.value,
                updated_by=command.user_email or command.user_id,
            )
        else:
            result = get_gateway().create_charge(
                amount=order.total,
                currency=order.currency,
                payment_method_type=method.value,
                last4=card.last4 if card else None,
                idempotency_key=str(order.id),
            )
            if not result.success:
                logger.warning("Payment declined", order_id=str(order.id), reason=result.failure_reason)
                raise ValidationError({"payment": [result.failure_reason or "Payment failed"]})

            order.record_payment(method.value, result.gateway_transaction_id)
            order.advance(
                status=next_status,
                payment_status=PaymentStatus.PAID.value,
                updated_by=command.user_email or command.user_id,
            )

        current_domain.repository_for(Order).add(order)
        logger.info("Order paid", order_id=str(order.id), method=method.value, payment_status=order.payment_status)
        return {
            "order_id": str(order.id),
            "status": order.status,
            "payment_status": order.payment_status,
            "transaction_id": order.transaction_id,
        }
