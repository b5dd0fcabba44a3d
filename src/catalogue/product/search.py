"""Read side of the catalogue: listing, search and snapshot lookup.

Filtering runs in memory over the repository's results; the catalogue is
small enough that a scan is the whole query plan.
"""

import math

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product

SEARCH_LIMIT = 20
DEFAULT_PAGE_SIZE = 12


def _newest_first(products):
    return sorted(products, key=lambda p: p.created_at.timestamp() if p.created_at else 0, reverse=True)


def list_products(
    category: str | None = None,
    search: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> dict:
    """Active products, filtered and paginated."""
    if page < 1 or limit < 1:
        raise ValidationError({"pagination": ["page and limit must be positive"]})

    products = current_domain.repository_for(Product).active()
    if category:
        products = [p for p in products if p.category == category.upper()]
    if search:
        products = [p for p in products if p.matches(search)]
    if min_price is not None:
        products = [p for p in products if p.pricing.base_price >= min_price]
    if max_price is not None:
        products = [p for p in products if p.pricing.base_price <= max_price]

    products = _newest_first(products)
    total = len(products)
    start = (page - 1) * limit
    return {
        "products": products[start : start + limit],
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "pages": math.ceil(total / limit) if total else 0,
        },
    }


def search_products(query: str | None, limit: int = SEARCH_LIMIT) -> dict:
    if not query or not query.strip():
        raise ValidationError({"q": ["Search query is required"]})

    matches = [p for p in current_domain.repository_for(Product).active() if p.matches(query)]
    matches = _newest_first(matches)
    return {"products": matches[:limit], "total": len(matches), "query": query}


def products_for_review(status: str | None = None) -> list[Product]:
    repo = current_domain.repository_for(Product)
    products = repo.with_status(status) if status else repo.everything()
    return _newest_first(products)


def product_snapshot(product_id: str) -> dict | None:
    """Snapshot of an active product, for callers in other contexts.

    Returns None when the product is missing or not on sale.
    """
    with catalogue.domain_context():
        try:
            product = catalogue.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            return None
        return product.snapshot() if product.is_visible else None


def product_snapshots(product_ids) -> dict[str, dict]:
    """Best-effort snapshots keyed by product id; unknown ids are left out."""
    snapshots = {}
    for product_id in product_ids:
        snapshot = product_snapshot(product_id)
        if snapshot is not None:
            snapshots[str(product_id)] = snapshot
    return snapshots
