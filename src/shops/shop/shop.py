"""Shop aggregate root with StatusHistoryEntry entity and Address, Verification,
Statistics and Rating value objects.

Status moves (admin only):

    inactive (pending review) → active | rejected
    active    → inactive | suspended
    rejected  → inactive
    suspended → active | inactive

``deleted`` is reachable from any status by the owner and never left.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, ValueObject

from shops.domain import shops
from shops.shop.events import ShopProfileUpdated, ShopRegistered, ShopStatusChanged


class ShopStatus(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    DELETED = "deleted"


_VALID_TRANSITIONS = {
    ShopStatus.INACTIVE: {ShopStatus.ACTIVE, ShopStatus.REJECTED},
    ShopStatus.ACTIVE: {ShopStatus.INACTIVE, ShopStatus.SUSPENDED},
    ShopStatus.REJECTED: {ShopStatus.INACTIVE},
    ShopStatus.SUSPENDED: {ShopStatus.ACTIVE, ShopStatus.INACTIVE},
    ShopStatus.DELETED: set(),
}


def validate_profile(name, description, address) -> None:
    """Check registration fields, reporting every failing field at once."""
    errors: dict[str, list[str]] = {}

    if not name or not 3 <= len(name.strip()) <= 50:
        errors["name"] = ["Name must be between 3 and 50 characters"]
    if not description or not 10 <= len(description.strip()) <= 500:
        errors["description"] = ["Description must be between 10 and 500 characters"]

    if not address:
        errors["address"] = ["Address is required"]
    else:
        required = {
            "street": "Street address is required",
            "city": "City is required",
            "state": "State is required",
            "zip_code": "ZIP code is required",
        }
        for field, message in required.items():
            if not (address.get(field) or "").strip():
                errors[f"address.{field}"] = [message]

    if errors:
        raise ValidationError(errors)


@shops.value_object(part_of="Shop")
class Address:
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)

    def to_dict(self) -> dict:
        return {"street": self.street, "city": self.city, "state": self.state, "zipCode": self.zip_code}


@shops.value_object(part_of="Shop")
class Verification:
    is_verified = Boolean(default=False)
    verified_at = DateTime()
    verified_by = String(max_length=254)


@shops.value_object(part_of="Shop")
class Statistics:
    total_sales = Float(default=0.0)
    total_orders = Integer(default=0)
    total_products = Integer(default=0)


@shops.value_object(part_of="Shop")
class Rating:
    average = Float(default=0.0)
    count = Integer(default=0)


@shops.entity(part_of="Shop")
class StatusHistoryEntry:
    status = String(required=True, max_length=20)
    message = String(max_length=500)
    updated_by = String(max_length=254)
    timestamp = DateTime()


@shops.aggregate
class Shop:
    """A seller's storefront.

    ``owner_id`` is the owner's principal id; ``owner_email`` is kept so
    seed accounts, whose id is their e-mail, match either way.
    """

    name = String(required=True, max_length=100)
    description = String(max_length=1000)
    owner_id = String(required=True, max_length=254)
    owner_email = String(max_length=254)
    owner_name = String(max_length=100)
    address = ValueObject(Address)
    phone = String(max_length=20)
    email = String(max_length=254)
    status = String(choices=ShopStatus, default=ShopStatus.INACTIVE.value)
    is_active = Boolean(default=False)
    verification = ValueObject(Verification)
    status_history = HasMany(StatusHistoryEntry)
    statistics = ValueObject(Statistics)
    rating = ValueObject(Rating)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, owner_id, name, description, address: dict, owner_email=None, owner_name=None, phone=None):
        validate_profile(name, description, address)

        now = datetime.now(UTC)
        shop = cls(
            name=name.strip(),
            description=description.strip(),
            owner_id=owner_id,
            owner_email=owner_email,
            owner_name=owner_name,
            address=Address(**{k: address[k].strip() for k in ("street", "city", "state", "zip_code")}),
            phone=phone,
            email=owner_email,
            status=ShopStatus.INACTIVE.value,
            is_active=False,
            verification=Verification(is_verified=False, verified_at=None, verified_by=None),
            statistics=Statistics(total_sales=0.0, total_orders=0, total_products=0),
            rating=Rating(average=0.0, count=0),
            created_at=now,
            updated_at=now,
        )
        shop._record(ShopStatus.INACTIVE, "Shop registration submitted for admin review", owner_email or owner_id, now)
        shop.raise_(
            ShopRegistered(
                shop_id=shop.id,
                name=shop.name,
                owner_id=owner_id,
                owner_email=owner_email,
                registered_at=now,
            )
        )
        return shop

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _record(self, status: ShopStatus, message, updated_by, timestamp):
        self.add_status_history(
            StatusHistoryEntry(status=status.value, message=message, updated_by=updated_by, timestamp=timestamp)
        )

    def _transition(self, target: ShopStatus, message, updated_by, now):
        previous = self.status
        self.status = target.value
        self.is_active = target == ShopStatus.ACTIVE
        self.updated_at = now
        self._record(target, message, updated_by, now)
        self.raise_(
            ShopStatusChanged(
                shop_id=self.id,
                owner_id=self.owner_id,
                previous_status=previous,
                new_status=target.value,
                message=message,
                updated_by=updated_by,
                changed_at=now,
            )
        )

    @property
    def is_deleted(self) -> bool:
        return self.status == ShopStatus.DELETED.value

    def is_owned_by(self, keys) -> bool:
        owners = {str(k) for k in (self.owner_id, self.owner_email) if k}
        return bool(owners & {str(k) for k in keys if k})

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def set_status(self, status: str, message=None, admin_id=None, admin_email=None):
        """Admin move. Approval marks the shop verified; any other status clears it."""
        try:
            target = ShopStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown shop status '{status}'"]}) from None

        current = ShopStatus(self.status)
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot move shop from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        approved = target == ShopStatus.ACTIVE
        self.verification = Verification(
            is_verified=approved,
            verified_at=now if approved else None,
            verified_by=admin_id if approved else None,
        )
        self._transition(target, message or f"Shop {target.value} by admin", admin_email or admin_id, now)

    def soft_delete(self, deleted_by=None):
        if self.is_deleted:
            raise ValidationError({"status": ["Shop is already deleted"]})
        self._transition(ShopStatus.DELETED, "Shop deleted by owner", deleted_by, datetime.now(UTC))

    # -------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------
    def update_profile(self, name=None, description=None, address=None, phone=None, email=None):
        """Partial update; None leaves a field unchanged."""
        if self.is_deleted:
            raise ValidationError({"status": ["A deleted shop cannot be edited"]})

        new_name = name if name is not None else self.name
        new_description = description if description is not None else self.description
        new_address = address if address is not None else {
            "street": self.address.street,
            "city": self.address.city,
            "state": self.address.state,
            "zip_code": self.address.zip_code,
        }
        validate_profile(new_name, new_description, new_address)

        now = datetime.now(UTC)
        self.name = new_name.strip()
        self.description = new_description.strip()
        self.address = Address(**{k: new_address[k].strip() for k in ("street", "city", "state", "zip_code")})
        if phone is not None:
            self.phone = phone
        if email is not None:
            self.email = email
        self.updated_at = now
        self.raise_(ShopProfileUpdated(shop_id=self.id, name=self.name, updated_at=now))


@shops.repository(part_of=Shop)
class ShopRepository:
    def owned_by(self, keys) -> list[Shop]:
        """Non-deleted shops whose owner id or owner e-mail is one of ``keys``."""
        found = {}
        for key in {str(k) for k in keys if k}:
            for field in ("owner_id", "owner_email"):
                for shop in self._dao.query.filter(**{field: key}).limit(None).all().items:
                    found[str(shop.id)] = shop
        return [shop for shop in found.values() if not shop.is_deleted]

    def with_status(self, status: str) -> list[Shop]:
        return self._dao.query.filter(status=status).limit(None).all().items

    def everything(self) -> list[Shop]:
        return self._dao.query.limit(None).all().items
