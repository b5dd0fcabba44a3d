"""Wishlist aggregate — a per-user set of product ids."""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Wishlist")
class WishlistItemAdded:
    __version__ = 1

    user_id = Identifier(required=True)
    product_id = String(required=True)
    added_at = DateTime(required=True)


@ordering.event(part_of="Wishlist")
class WishlistItemRemoved:
    __version__ = 1

    user_id = Identifier(required=True)
    product_id = String(required=True)


@ordering.entity(part_of="Wishlist")
class WishlistEntry:
    product_id = String(required=True, max_length=64)
    added_at = DateTime()


@ordering.aggregate
class Wishlist:
    user_id = Identifier(identifier=True, required=True)
    entries = HasMany(WishlistEntry)
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id, updated_at=datetime.now(UTC))

    def contains(self, product_id) -> bool:
        return any(e.product_id == str(product_id) for e in self.entries)

    @property
    def product_ids(self) -> list[str]:
        return [e.product_id for e in self.entries]

    def add(self, product_id) -> bool:
        """Set-add; returns False when the product was already listed."""
        if not product_id or not str(product_id).strip():
            raise ValidationError({"product_id": ["Product id is required"]})
        if self.contains(product_id):
            return False

        now = datetime.now(UTC)
        self.add_entries(WishlistEntry(product_id=str(product_id), added_at=now))
        self.updated_at = now
        self.raise_(WishlistItemAdded(user_id=self.user_id, product_id=str(product_id), added_at=now))
        return True

    def remove(self, product_id) -> bool:
        entry = next((e for e in self.entries if e.product_id == str(product_id)), None)
        if entry is None:
            return False

        self.remove_entries(entry)
        self.updated_at = datetime.now(UTC)
        self.raise_(WishlistItemRemoved(user_id=self.user_id, product_id=str(product_id)))
        return True


@ordering.repository(part_of=Wishlist)
class WishlistRepository:
    def find_for(self, user_id) -> Wishlist | None:
        try:
            return self.get(user_id)
        except ObjectNotFoundError:
            return None
