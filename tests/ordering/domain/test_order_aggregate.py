"""Tests for the Order aggregate — creation, the two status axes and visibility."""

import re

import pytest
from ordering.order.events import OrderAdvanced, OrderCreated
from ordering.order.order import Order, generate_order_number
from protean.exceptions import ValidationError

ITEMS = [
    {"product_id": "p-rice", "name": "Red Rice", "quantity": 2, "price": 120.0, "shop_id": "shop-1"},
    {"product_id": "p-chili", "name": "Chili", "quantity": 1, "price": 40.0, "shop_id": "shop-2"},
]


def _order(**overrides):
    fields = {"user_id": "buyer-1", "items_data": ITEMS, "customer_email": "buyer@example.bt"}
    fields.update(overrides)
    return Order.create(**fields)


class TestCreation:
    def test_defaults(self):
        order = _order()
        assert order.status == "pending"
        assert order.payment_status == "unpaid"
        assert order.currency == "BTN"
        assert len(order.items) == 2

    def test_total_is_derived(self):
        assert _order().total == 280.0

    def test_explicit_total_wins(self):
        assert _order(total=250.0).total == 250.0

    def test_empty_items(self):
        with pytest.raises(ValidationError) as exc_info:
            _order(items_data=[])
        assert "items" in exc_info.value.messages

    def test_order_number_format(self):
        assert re.fullmatch(r"ORD-\d{1,8}-\d{1,3}", generate_order_number())
        assert _order().order_number.startswith("ORD-")

    def test_event(self):
        event = next(e for e in _order()._events if isinstance(e, OrderCreated))
        assert event.item_count == 2
        assert event.total == 280.0


class TestStatusAxis:
    def test_forward_moves(self):
        order = _order()
        for status in ("processing", "shipped", "delivered"):
            assert order.advance(status=status) is True
        assert order.status == "delivered"

    def test_skipping_ahead(self):
        order = _order()
        order.advance(status="shipped")
        assert order.status == "shipped"

    def test_backwards_is_rejected(self):
        order = _order()
        order.advance(status="shipped")
        with pytest.raises(ValidationError):
            order.advance(status="processing")

    def test_cancel_from_non_terminal(self):
        order = _order()
        order.advance(status="processing")
        order.advance(status="cancelled")
        assert order.status == "cancelled"

    @pytest.mark.parametrize("terminal", ["delivered", "cancelled"])
    def test_terminal_states_are_final(self, terminal):
        order = _order()
        order.advance(status=terminal)
        with pytest.raises(ValidationError):
            order.advance(status="processing")

    def test_same_status_is_a_no_op(self):
        order = _order()
        order._events.clear()
        assert order.advance(status="pending") is False
        assert order._events == []

    def test_unknown_status(self):
        with pytest.raises(ValidationError) as exc_info:
            _order().advance(status="lost")
        assert "status" in exc_info.value.messages


class TestPaymentAxis:
    def test_independent_of_status(self):
        order = _order()
        order.advance(payment_status="paid")
        assert order.status == "pending"
        assert order.payment_status == "paid"

    def test_backwards_is_rejected(self):
        order = _order()
        order.advance(payment_status="paid")
        with pytest.raises(ValidationError):
            order.advance(payment_status="pending")

    def test_cancelled_order_payment_is_frozen(self):
        order = _order()
        order.advance(status="cancelled")
        with pytest.raises(ValidationError):
            order.advance(payment_status="paid")

    def test_cancelling_and_paying_at_once_is_rejected(self):
        order = _order()
        with pytest.raises(ValidationError) as exc_info:
            order.advance(status="cancelled", payment_status="paid")
        assert "payment_status" in exc_info.value.messages
        assert (order.status, order.payment_status) == ("pending", "unpaid")

    def test_both_axes_validated_before_applying(self):
        order = _order()
        order.advance(payment_status="paid")
        with pytest.raises(ValidationError):
            order.advance(status="processing", payment_status="unpaid")
        assert order.status == "pending"

    def test_event_carries_both_axes(self):
        order = _order()
        order.advance(status="processing", payment_status="paid", updated_by="buyer@example.bt")

        event = next(e for e in order._events if isinstance(e, OrderAdvanced))
        assert (event.previous_status, event.status) == ("pending", "processing")
        assert (event.previous_payment_status, event.payment_status) == ("unpaid", "paid")

    def test_record_payment_twice(self):
        order = _order()
        order.record_payment("credit_card", "txn-1")
        order.advance(payment_status="paid")
        with pytest.raises(ValidationError):
            order.record_payment("credit_card", "txn-2")


class TestVisibility:
    def test_owner(self):
        assert _order().visible_to({"buyer-1"}, "BUYER")

    def test_stranger(self):
        assert not _order().visible_to({"buyer-2"}, "BUYER")

    def test_seller_with_matching_line(self):
        order = _order()
        assert order.visible_to({"seller-1"}, "SELLER", shop_id="shop-2")
        assert not order.visible_to({"seller-1"}, "SELLER", shop_id="shop-9")
        assert not order.visible_to({"seller-1"}, "SELLER")

    def test_admin(self):
        assert _order().visible_to({"admin-1"}, "ADMIN")
