"""Order listings for buyers and sellers."""

from datetime import UTC, datetime, timedelta

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.order.order import Order

_DATE_RANGES = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}


def _created(order) -> datetime:
    created = order.created_at or datetime.min.replace(tzinfo=UTC)
    return created if created.tzinfo else created.replace(tzinfo=UTC)


def _newest_first(orders):
    return sorted(orders, key=_created, reverse=True)


def _range_start(date_range: str, now: datetime) -> datetime:
    if date_range == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_range in _DATE_RANGES:
        return now - _DATE_RANGES[date_range]
    raise ValidationError({"date_range": ["Must be one of: today, week, month"]})


def orders_for_buyer(user_id) -> list[Order]:
    return _newest_first(current_domain.repository_for(Order).for_user(user_id))


def orders_for_seller(
    shop_id,
    status: str | None = None,
    date_range: str | None = None,
    search: str | None = None,
    now: datetime | None = None,
) -> list[Order]:
    """Orders containing at least one line from ``shop_id``, newest first."""
    orders = [o for o in current_domain.repository_for(Order).everything() if o.has_items_from(shop_id)]

    if status:
        orders = [o for o in orders if o.status == status]
    if date_range:
        start = _range_start(date_range, now or datetime.now(UTC))
        orders = [o for o in orders if _created(o) >= start]
    if search:
        needle = search.strip().lower()
        orders = [
            o
            for o in orders
            if any(needle in (value or "").lower() for value in (o.order_number, o.customer_name, o.customer_email))
            or needle in str(o.id).lower()
        ]
    return _newest_first(orders)
