"""Order aggregate — an immutable snapshot of a purchase with two status axes.

Status:          pending → processing → shipped → delivered
                 cancelled from any non-terminal status
PaymentStatus:   unpaid → pending → paid

Both axes only move forward; skipping ahead is allowed and re-applying the
current value is a no-op. Items and total never change after creation.
"""

import random
import time
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.events import OrderAdvanced, OrderCreated, OrderPaid


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    UNPAID = "unpaid"
    PENDING = "pending"
    PAID = "paid"


_STATUS_SEQUENCE = [
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
]

_PAYMENT_SEQUENCE = [PaymentStatus.UNPAID, PaymentStatus.PENDING, PaymentStatus.PAID]

_TERMINAL_STATES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


def generate_order_number() -> str:
    """``ORD-<last 8 digits of epoch ms>-<0..999>``: readable, not guaranteed unique."""
    millis = str(int(time.time() * 1000))
    return f"ORD-{millis[-8:]}-{random.randint(0, 999)}"


def _parse(enum_cls, value, field):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError({field: [f"Must be one of: {allowed}"]}) from None


@ordering.entity(part_of="Order")
class OrderItem:
    """A purchased line, priced at the moment the order was placed."""

    product_id = String(required=True, max_length=64)
    name = String(max_length=200)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    shop_id = Identifier()

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=40)
    user_id = Identifier(required=True)
    customer_email = String(max_length=254)
    customer_name = String(max_length=100)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="BTN")
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.UNPAID.value)
    payment_method = String(max_length=20)
    transaction_id = String(max_length=64)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, items_data, total=None, customer_email=None, customer_name=None, currency="BTN"):
        """Place an order.

        Args:
            items_data: List of dicts with product_id, name, quantity, price
                        and optionally shop_id.
            total: Charged amount; derived as sum(price * quantity) when None.
        """
        if not items_data:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=str(item.get("product_id") or ""),
                name=item.get("name"),
                quantity=item.get("quantity"),
                unit_price=item.get("price", item.get("unit_price")),
                shop_id=item.get("shop_id"),
            )
            for item in items_data
        ]
        if total is None:
            total = round(sum(item.line_total for item in items), 2)

        order = cls(
            order_number=generate_order_number(),
            user_id=user_id,
            customer_email=customer_email,
            customer_name=customer_name,
            total=total,
            currency=currency or "BTN",
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.UNPAID.value,
            created_at=now,
            updated_at=now,
        )
        for item in items:
            order.add_items(item)

        order.raise_(
            OrderCreated(
                order_id=order.id,
                order_number=order.order_number,
                user_id=user_id,
                item_count=len(items),
                total=total,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------
    def is_owned_by(self, keys) -> bool:
        return str(self.user_id) in {str(k) for k in keys if k}

    def has_items_from(self, shop_id) -> bool:
        return bool(shop_id) and any(str(item.shop_id) == str(shop_id) for item in self.items if item.shop_id)

    def visible_to(self, keys, role, shop_id=None) -> bool:
        """Admins see everything, buyers their own orders, sellers orders with their shop's items."""
        if role == "ADMIN" or self.is_owned_by(keys):
            return True
        return role == "SELLER" and self.has_items_from(shop_id)

    # -------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------
    def _assert_status_move(self, current: OrderStatus, target: OrderStatus):
        if current in _TERMINAL_STATES:
            raise ValidationError({"status": [f"Cannot change status of a {current.value} order"]})
        if target == OrderStatus.CANCELLED:
            return
        if _STATUS_SEQUENCE.index(target) < _STATUS_SEQUENCE.index(current):
            raise ValidationError({"status": [f"Cannot move order from {current.value} back to {target.value}"]})

    def _assert_payment_move(self, current: PaymentStatus, target: PaymentStatus, target_status: OrderStatus):
        if target_status == OrderStatus.CANCELLED:
            raise ValidationError({"payment_status": ["Cannot change payment of a cancelled order"]})
        if _PAYMENT_SEQUENCE.index(target) < _PAYMENT_SEQUENCE.index(current):
            raise ValidationError(
                {"payment_status": [f"Cannot move payment from {current.value} back to {target.value}"]}
            )

    def advance(self, status=None, payment_status=None, updated_by=None) -> bool:
        """Move either axis forward. Returns False when nothing changed.

        Both moves are validated before either is applied.
        """
        current_status = OrderStatus(self.status)
        current_payment = PaymentStatus(self.payment_status)
        target_status = _parse(OrderStatus, status, "status") if status else current_status
        target_payment = _parse(PaymentStatus, payment_status, "payment_status") if payment_status else current_payment

        if target_status != current_status:
            self._assert_status_move(current_status, target_status)
        if target_payment != current_payment:
            self._assert_payment_move(current_payment, target_payment, target_status)

        if target_status == current_status and target_payment == current_payment:
            return False

        now = datetime.now(UTC)
        self.status = target_status.value
        self.payment_status = target_payment.value
        self.updated_at = now
        self.raise_(
            OrderAdvanced(
                order_id=self.id,
                previous_status=current_status.value,
                status=self.status,
                previous_payment_status=current_payment.value,
                payment_status=self.payment_status,
                updated_by=updated_by,
                advanced_at=now,
            )
        )
        return True

    def record_payment(self, method: str, transaction_id=None):
        if PaymentStatus(self.payment_status) == PaymentStatus.PAID:
            raise ValidationError({"payment_status": ["Order is already paid"]})

        now = datetime.now(UTC)
        self.payment_method = method
        self.transaction_id = transaction_id
        self.updated_at = now
        self.raise_(
            OrderPaid(
                order_id=self.id,
                payment_method=method,
                amount=self.total,
                transaction_id=transaction_id,
                paid_at=now,
            )
        )


@ordering.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        return self._dao.query.filter(user_id=user_id).limit(None).all().items

    def everything(self) -> list[Order]:
        return self._dao.query.limit(None).all().items
