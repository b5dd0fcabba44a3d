"""Cart aggregate — one per user, created lazily on the first add.

Each line keeps a snapshot of the product as it was when last added. The
cart total is always derived from those snapshots and never stored.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.cart.events import CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering


@ordering.value_object(part_of="Cart")
class ProductSnapshot:
    """Product fields copied into a cart line; later product edits do not reach it."""

    name = String(max_length=200)
    price = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="BTN")
    image_url = String(max_length=500)
    shop_id = Identifier()
    category = String(max_length=20)

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            name=data.get("name"),
            price=data.get("price", 0.0),
            currency=data.get("currency") or "BTN",
            image_url=data.get("image_url"),
            shop_id=data.get("shop_id"),
            category=data.get("category"),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "price": self.price,
            "currency": self.currency,
            "image_url": self.image_url,
            "shop_id": str(self.shop_id) if self.shop_id else None,
            "category": self.category,
        }


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = String(required=True, max_length=64)
    quantity = Integer(required=True, min_value=1)
    snapshot = ValueObject(ProductSnapshot)
    added_at = DateTime()

    @property
    def unit_price(self) -> float:
        return self.snapshot.price if self.snapshot else 0.0

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@ordering.aggregate
class Cart:
    user_id = Identifier(identifier=True, required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def total(self) -> float:
        return round(sum(item.line_total for item in self.items), 2)

    @property
    def line_count(self) -> int:
        return len(self.items)

    def line_for(self, product_id):
        return next((i for i in self.items if i.product_id == str(product_id)), None)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, snapshot: dict | None = None):
        """Add ``quantity`` of a product, merging into an existing line.

        A merge increments the quantity and replaces the snapshot when a new
        one is supplied.
        """
        if not product_id or not str(product_id).strip():
            raise ValidationError({"product_id": ["Product id is required"]})
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        snapshot_vo = ProductSnapshot.from_dict(snapshot) if snapshot else None
        existing = self.line_for(product_id)

        if existing:
            existing.quantity += quantity
            if snapshot_vo is not None:
                existing.snapshot = snapshot_vo
            line_quantity = existing.quantity
        else:
            if snapshot_vo is None:
                raise ValidationError({"product": ["Product details are required for a new cart line"]})
            self.add_items(
                CartItem(product_id=str(product_id), quantity=quantity, snapshot=snapshot_vo, added_at=now)
            )
            line_quantity = quantity

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                user_id=self.user_id,
                product_id=str(product_id),
                quantity_added=quantity,
                line_quantity=line_quantity,
            )
        )

    def set_quantity(self, product_id, quantity):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self.line_for(product_id)
        if item is None:
            raise ObjectNotFoundError({"product_id": ["Item not found in cart"]})

        previous = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartQuantityUpdated(
                user_id=self.user_id,
                product_id=str(product_id),
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id) -> bool:
        """Remove the line for ``product_id``. Removing an absent product is a no-op."""
        item = self.line_for(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(user_id=self.user_id, product_id=str(product_id)))
        return True

    def to_order_items(self) -> list[dict]:
        return [
            {
                "product_id": item.product_id,
                "name": item.snapshot.name if item.snapshot else None,
                "quantity": item.quantity,
                "price": item.unit_price,
                "shop_id": str(item.snapshot.shop_id) if item.snapshot and item.snapshot.shop_id else None,
            }
            for item in self.items
        ]


@ordering.repository(part_of=Cart)
class CartRepository:
    def find_for(self, user_id) -> Cart | None:
        try:
            return self.get(user_id)
        except ObjectNotFoundError:
            return None
