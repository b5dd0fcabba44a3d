"""Shop lookup by owner, for callers in any context."""

from shops.domain import shops
from shops.shop.shop import Shop


def shop_for_owner(principal) -> Shop | None:
    """The principal's non-deleted shop, matched on id or e-mail."""
    with shops.domain_context():
        owned = shops.repository_for(Shop).owned_by(principal.owner_keys())
    if not owned:
        return None
    return max(owned, key=lambda shop: shop.created_at.timestamp() if shop.created_at else 0)
