"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderCreated:
    """A buyer placed an order from their cart."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderAdvanced:
    """The order's status or payment status moved."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    previous_payment_status = String(required=True)
    payment_status = String(required=True)
    updated_by = String()
    advanced_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderPaid:
    """A charge (or a cash-on-delivery promise) was recorded against the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_method = String(required=True)
    amount = Float(required=True)
    transaction_id = String()
    paid_at = DateTime(required=True)
