"""Live shop statistics, read from the catalogue and ordering contexts."""

from catalogue.domain import catalogue
from catalogue.product.product import Product
from ordering.domain import ordering
from ordering.order.order import OrderStatus
from ordering.order.queries import orders_for_seller

RECENT_ORDER_COUNT = 5


def product_count(shop_id) -> int:
    with catalogue.domain_context():
        return len(catalogue.repository_for(Product).for_shop(str(shop_id)))


def shop_statistics(shop_id) -> dict:
    """Products, orders and sales for one shop.

    Sales count only this shop's lines, and skip cancelled orders.
    """
    with ordering.domain_context():
        orders = orders_for_seller(str(shop_id))

    def shop_share(order) -> float:
        return sum(item.line_total for item in order.items if str(item.shop_id) == str(shop_id))

    live_orders = [o for o in orders if o.status != OrderStatus.CANCELLED.value]
    return {
        "totalProducts": product_count(shop_id),
        "totalOrders": len(orders),
        "totalSales": round(sum(shop_share(o) for o in live_orders), 2),
        "recentOrders": [
            {
                "id": str(o.id),
                "orderNumber": o.order_number,
                "total": round(shop_share(o), 2),
                "status": o.status,
                "paymentStatus": o.payment_status,
                "createdAt": o.created_at.isoformat() if o.created_at else None,
            }
            for o in orders[:RECENT_ORDER_COUNT]
        ],
    }
