"""Domain events for the Shop aggregate."""

from protean.fields import DateTime, Identifier, String

from shops.domain import shops


@shops.event(part_of="Shop")
class ShopRegistered:
    """A seller submitted a shop for admin review."""

    __version__ = 1

    shop_id = Identifier(required=True)
    name = String(required=True)
    owner_id = String(required=True)
    owner_email = String()
    registered_at = DateTime(required=True)


@shops.event(part_of="Shop")
class ShopStatusChanged:
    """An admin moved the shop, or its owner deleted it."""

    __version__ = 1

    shop_id = Identifier(required=True)
    owner_id = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    message = String()
    updated_by = String()
    changed_at = DateTime(required=True)


@shops.event(part_of="Shop")
class ShopProfileUpdated:
    __version__ = 1

    shop_id = Identifier(required=True)
    name = String(required=True)
    updated_at = DateTime(required=True)
