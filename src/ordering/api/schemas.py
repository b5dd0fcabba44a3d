"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Bodies are camelCase on the wire.
"""

from pydantic import Field

from shared.schemas import CamelModel


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ProductSnapshotSchema(CamelModel):
    name: str | None = None
    price: float = Field(ge=0)
    currency: str = "BTN"
    image_url: str | None = None
    shop_id: str | None = None
    category: str | None = None


class OrderItemSchema(CamelModel):
    product_id: str
    name: str | None = None
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)
    shop_id: str | None = None


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "productId": "6f1c0a4e-2b7d-4c52-9a51-0d1f2c3b4a5e",
                    "quantity": 2,
                }
            ]
        }
    }

    product_id: str
    quantity: int = 1
    product: ProductSnapshotSchema | None = None


class UpdateCartQuantityRequest(CamelModel):
    product_id: str
    quantity: int


# ---------------------------------------------------------------------------
# Wishlist Request Schemas
# ---------------------------------------------------------------------------
class WishlistRequest(CamelModel):
    product_id: str
    action: str | None = None


class WishlistRemoveRequest(CamelModel):
    product_id: str


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "productId": "6f1c0a4e-2b7d-4c52-9a51-0d1f2c3b4a5e",
                            "name": "Red Rice",
                            "quantity": 2,
                            "price": 120.0,
                            "shopId": "b2f0e6c1-7a4d-4e2b-8c3f-1a2b3c4d5e6f",
                        }
                    ],
                    "total": 240.0,
                }
            ]
        }
    }

    items: list[OrderItemSchema] = Field(default_factory=list)
    total: float | None = Field(None, ge=0)


class AdvanceOrderRequest(CamelModel):
    order_id: str
    status: str | None = None
    payment_status: str | None = None


class PaymentRequest(CamelModel):
    method: str
    card_number: str | None = None
    card_name: str | None = None
    expiry_date: str | None = None
    cvv: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PaymentResponse(CamelModel):
    order_id: str
    status: str
    payment_status: str
    transaction_id: str | None = None


class WishlistMembershipResponse(CamelModel):
    product_id: str
    in_wishlist: bool


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------
def _iso(value):
    return value.isoformat() if value else None


def snapshot_to_dict(snapshot) -> dict | None:
    if snapshot is None:
        return None
    return {
        "name": snapshot.get("name"),
        "price": snapshot.get("price"),
        "currency": snapshot.get("currency"),
        "imageUrl": snapshot.get("image_url"),
        "shopId": snapshot.get("shop_id"),
        "category": snapshot.get("category"),
    }


def cart_to_dict(cart) -> dict:
    if cart is None:
        return {"items": [], "total": 0.0, "itemCount": 0}
    return {
        "items": [
            {
                "productId": item.product_id,
                "quantity": item.quantity,
                "product": snapshot_to_dict(item.snapshot.to_dict() if item.snapshot else None),
                "lineTotal": round(item.line_total, 2),
                "addedAt": _iso(item.added_at),
            }
            for item in cart.items
        ],
        "total": cart.total,
        "itemCount": cart.line_count,
    }


def order_to_dict(order) -> dict:
    return {
        "id": str(order.id),
        "orderNumber": order.order_number,
        "user": str(order.user_id),
        "customerEmail": order.customer_email,
        "customerName": order.customer_name,
        "items": [
            {
                "productId": item.product_id,
                "name": item.name,
                "quantity": item.quantity,
                "price": item.unit_price,
                "shopId": str(item.shop_id) if item.shop_id else None,
            }
            for item in order.items
        ],
        "total": order.total,
        "currency": order.currency,
        "status": order.status,
        "paymentStatus": order.payment_status,
        "paymentMethod": order.payment_method,
        "transactionId": order.transaction_id,
        "createdAt": _iso(order.created_at),
        "updatedAt": _iso(order.updated_at),
    }
