"""FastAPI routes for the Ordering domain — carts, wishlists and orders."""

import json

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.product.search import product_snapshot, product_snapshots
from identity.api.dependencies import get_principal, require_role
from identity.principal import Principal
from ordering.api.schemas import (
    AddToCartRequest,
    AdvanceOrderRequest,
    CreateOrderRequest,
    PaymentRequest,
    PaymentResponse,
    UpdateCartQuantityRequest,
    WishlistMembershipResponse,
    WishlistRemoveRequest,
    WishlistRequest,
    cart_to_dict,
    order_to_dict,
    snapshot_to_dict,
)
from ordering.cart.cart import Cart
from ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from ordering.order.creation import CreateOrder
from ordering.order.order import Order
from ordering.order.payment import PayForOrder
from ordering.order.progression import AdvanceOrder
from ordering.order.queries import orders_for_buyer, orders_for_seller
from ordering.wishlist.membership import AddToWishlist, RemoveFromWishlist
from ordering.wishlist.wishlist import Wishlist
from shared.errors import AuthorizationError
from shops.shop.ownership import shop_for_owner

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_for(principal: Principal):
    return current_domain.repository_for(Cart).find_for(principal.id)


@cart_router.get("")
async def get_cart(principal: Principal = Depends(get_principal)):
    return cart_to_dict(_cart_for(principal))


@cart_router.get("/count")
async def get_cart_count(principal: Principal = Depends(get_principal)):
    cart = _cart_for(principal)
    return {"count": cart.line_count if cart else 0}


@cart_router.post("")
async def add_to_cart(body: AddToCartRequest, principal: Principal = Depends(get_principal)):
    """Add a product, using the catalogue's snapshot when the client sends none.

    A product already in the cart merges even when the catalogue no longer
    lists it; the line keeps its earlier snapshot.
    """
    if body.product is not None:
        snapshot = body.product.model_dump()
    else:
        snapshot = product_snapshot(body.product_id)
        cart = _cart_for(principal)
        in_cart = cart is not None and cart.line_for(body.product_id) is not None
        if snapshot is None and not in_cart:
            raise ObjectNotFoundError("Product not found")

    current_domain.process(
        AddToCart(
            user_id=principal.id,
            product_id=body.product_id,
            quantity=body.quantity,
            snapshot=json.dumps(snapshot) if snapshot else None,
        ),
        asynchronous=False,
    )
    return cart_to_dict(_cart_for(principal))


@cart_router.put("")
async def update_cart_quantity(body: UpdateCartQuantityRequest, principal: Principal = Depends(get_principal)):
    current_domain.process(
        UpdateCartQuantity(user_id=principal.id, product_id=body.product_id, quantity=body.quantity),
        asynchronous=False,
    )
    return cart_to_dict(_cart_for(principal))


@cart_router.delete("")
async def remove_from_cart(
    product_id: str | None = Query(None, alias="productId"),
    principal: Principal = Depends(get_principal),
):
    """Remove one line, or clear the whole cart when no product is named."""
    if product_id:
        current_domain.process(RemoveFromCart(user_id=principal.id, product_id=product_id), asynchronous=False)
    else:
        current_domain.process(ClearCart(user_id=principal.id), asynchronous=False)
    return cart_to_dict(_cart_for(principal))


# ---------------------------------------------------------------------------
# Wishlist Router
# ---------------------------------------------------------------------------
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def _wishlist_to_dict(wishlist) -> dict:
    if wishlist is None:
        return {"items": [], "count": 0}

    snapshots = product_snapshots(wishlist.product_ids)
    return {
        "items": [
            {
                "productId": entry.product_id,
                "addedAt": entry.added_at.isoformat() if entry.added_at else None,
                "product": snapshot_to_dict(snapshots.get(entry.product_id)),
            }
            for entry in wishlist.entries
        ],
        "count": len(wishlist.entries),
    }


def _wishlist_for(principal: Principal):
    return current_domain.repository_for(Wishlist).find_for(principal.id)


@wishlist_router.get("")
async def get_wishlist(principal: Principal = Depends(get_principal)):
    return _wishlist_to_dict(_wishlist_for(principal))


@wishlist_router.post("", response_model=WishlistMembershipResponse)
async def update_wishlist(body: WishlistRequest, principal: Principal = Depends(get_principal)):
    if body.action == "remove":
        command = RemoveFromWishlist(user_id=principal.id, product_id=body.product_id)
    else:
        command = AddToWishlist(user_id=principal.id, product_id=body.product_id)
    in_wishlist = current_domain.process(command, asynchronous=False)
    return WishlistMembershipResponse(product_id=body.product_id, in_wishlist=in_wishlist)


@wishlist_router.post("/remove", response_model=WishlistMembershipResponse)
async def remove_from_wishlist(body: WishlistRemoveRequest, principal: Principal = Depends(get_principal)):
    current_domain.process(RemoveFromWishlist(user_id=principal.id, product_id=body.product_id), asynchronous=False)
    return WishlistMembershipResponse(product_id=body.product_id, in_wishlist=False)


@wishlist_router.delete("/{product_id}", response_model=WishlistMembershipResponse)
async def delete_from_wishlist(product_id: str, principal: Principal = Depends(get_principal)):
    current_domain.process(RemoveFromWishlist(user_id=principal.id, product_id=product_id), asynchronous=False)
    return WishlistMembershipResponse(product_id=product_id, in_wishlist=False)


@wishlist_router.get("/{product_id}", response_model=WishlistMembershipResponse)
async def wishlist_contains(product_id: str, principal: Principal = Depends(get_principal)):
    wishlist = _wishlist_for(principal)
    return WishlistMembershipResponse(
        product_id=product_id,
        in_wishlist=bool(wishlist and wishlist.contains(product_id)),
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _seller_shop_id(principal: Principal):
    if not principal.is_seller:
        return None
    shop = shop_for_owner(principal)
    return str(shop.id) if shop else None


@order_router.post("", status_code=201)
async def create_order(body: CreateOrderRequest, principal: Principal = Depends(get_principal)):
    """Place an order from explicit items, or from the caller's cart.

    The cart is left untouched; clients clear it after payment.
    """
    if body.items:
        items = [item.model_dump() for item in body.items]
        total = body.total
    else:
        cart = _cart_for(principal)
        if cart is None or not cart.items:
            raise ValidationError({"items": ["Order must contain at least one item"]})
        items = cart.to_order_items()
        total = None

    order_id = current_domain.process(
        CreateOrder(
            user_id=principal.id,
            customer_email=principal.email,
            customer_name=principal.display_name,
            items=json.dumps(items),
            total=total,
        ),
        asynchronous=False,
    )
    order = current_domain.repository_for(Order).get(order_id)
    return {"order": order_to_dict(order)}


@order_router.get("")
async def list_my_orders(principal: Principal = Depends(get_principal)):
    return {"orders": [order_to_dict(o) for o in orders_for_buyer(principal.id)]}


@order_router.get("/seller")
async def list_seller_orders(
    status: str | None = None,
    date_range: str | None = Query(None, alias="dateRange"),
    search: str | None = None,
    principal: Principal = Depends(require_role("SELLER")),
):
    shop = shop_for_owner(principal)
    if shop is None:
        raise ObjectNotFoundError("Shop not found")
    orders = orders_for_seller(str(shop.id), status=status, date_range=date_range, search=search)
    return {"orders": [order_to_dict(o) for o in orders]}


@order_router.put("")
async def advance_order(body: AdvanceOrderRequest, principal: Principal = Depends(get_principal)):
    current_domain.process(
        AdvanceOrder(
            order_id=body.order_id,
            actor_id=principal.id,
            actor_email=principal.email,
            actor_role=principal.role,
            actor_shop_id=_seller_shop_id(principal),
            status=body.status,
            payment_status=body.payment_status,
        ),
        asynchronous=False,
    )
    order = current_domain.repository_for(Order).get(body.order_id)
    return {"order": order_to_dict(order)}


@order_router.get("/{order_id}")
async def get_order(order_id: str, principal: Principal = Depends(get_principal)):
    order = current_domain.repository_for(Order).get(order_id)
    if not order.visible_to(principal.owner_keys(), principal.role, _seller_shop_id(principal)):
        raise AuthorizationError("Not authorized to view this order")
    return {"order": order_to_dict(order)}


@order_router.post("/{order_id}/payment", response_model=PaymentResponse)
async def pay_for_order(order_id: str, body: PaymentRequest, principal: Principal = Depends(get_principal)):
    result = current_domain.process(
        PayForOrder(
            order_id=order_id,
            user_id=principal.id,
            user_email=principal.email,
            method=body.method,
            card_number=body.card_number,
            card_name=body.card_name,
            expiry_date=body.expiry_date,
            cvv=body.cvv,
        ),
        asynchronous=False,
    )
    return PaymentResponse(**result)
