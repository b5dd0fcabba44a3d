"""Seller ownership of products."""

from shared.errors import AuthorizationError


def ensure_seller_owns(product, actor_keys, actor_role=None) -> None:
    """Admins pass; a seller must be the product's seller (by id or e-mail)."""
    if actor_role == "ADMIN":
        return
    owners = {str(key) for key in (product.seller_id, product.seller_email) if key}
    if not owners & set(actor_keys):
        raise AuthorizationError("Not authorized to modify this product")
