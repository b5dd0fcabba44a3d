"""Product aggregate root with StatusEntry and Review entities, Pricing and Rating value objects."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from catalogue.domain import catalogue


class ProductStatus(Enum):
    DRAFT = "draft"
    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"
    ARCHIVED = "archived"


class ProductCategory(Enum):
    VEGETABLES = "VEGETABLES"
    FRUITS = "FRUITS"
    HERBS = "HERBS"
    GRAINS = "GRAINS"
    OTHER = "OTHER"


_VALID_TRANSITIONS = {
    ProductStatus.DRAFT: {ProductStatus.PENDING},
    ProductStatus.PENDING: {ProductStatus.ACTIVE, ProductStatus.REJECTED},
    ProductStatus.ACTIVE: {ProductStatus.ARCHIVED},
    ProductStatus.REJECTED: {ProductStatus.PENDING},
    ProductStatus.ARCHIVED: {ProductStatus.ACTIVE},
}

# Targets an admin may set; resubmission is the seller's move
MODERATION_TARGETS = {ProductStatus.ACTIVE, ProductStatus.REJECTED, ProductStatus.ARCHIVED}


@catalogue.value_object(part_of="Product")
class Pricing:
    base_price: Float(required=True, min_value=0.0)
    currency: String(max_length=3, default="BTN")


@catalogue.value_object(part_of="Product")
class Rating:
    average: Float(default=0.0)
    count: Integer(default=0)


@catalogue.entity(part_of="Product")
class StatusEntry:
    status: String(required=True, max_length=20)
    message: String(max_length=500)
    updated_by: String(max_length=254)
    timestamp: DateTime()


@catalogue.entity(part_of="Product")
class Review:
    user_id: String(required=True, max_length=254)
    user_name: String(max_length=100)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: String(max_length=500)
    created_at: DateTime()


@catalogue.aggregate
class Product:
    """A piece of produce offered by a shop.

    Sellers edit content; admins move the status. Buyers only ever see
    ``active`` products.
    """

    name: String(required=True, max_length=200)
    short_description: String(max_length=300)
    full_description: Text()
    category: String(choices=ProductCategory, default=ProductCategory.OTHER.value)
    pricing: ValueObject(Pricing, required=True)
    stock_count: Integer(min_value=0, default=0)
    images: Text()  # JSON array of image URLs
    shop_id: Identifier()
    seller_id: String(max_length=254)
    seller_email: String(max_length=254)
    status: String(choices=ProductStatus, default=ProductStatus.DRAFT.value)
    status_history: HasMany(StatusEntry)
    rating: ValueObject(Rating)
    reviews: HasMany(Review)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if not (self.name or "").strip():
            raise ValidationError({"name": ["Product name is required"]})

    @classmethod
    def create(
        cls,
        name,
        base_price,
        seller_id,
        seller_email=None,
        shop_id=None,
        category=None,
        short_description=None,
        full_description=None,
        currency=None,
        stock_count=0,
        images=None,
        submit=False,
    ):
        from catalogue.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            short_description=short_description,
            full_description=full_description,
            category=(category or ProductCategory.OTHER.value).upper(),
            pricing=Pricing(base_price=base_price, currency=currency or "BTN"),
            stock_count=stock_count or 0,
            images=json.dumps(list(images or [])),
            shop_id=shop_id,
            seller_id=seller_id,
            seller_email=seller_email,
            status=ProductStatus.DRAFT.value,
            rating=Rating(average=0.0, count=0),
            created_at=now,
            updated_at=now,
        )
        product._record_status(ProductStatus.DRAFT, "Product created", seller_email or seller_id, now)
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                shop_id=shop_id,
                seller_id=seller_id,
                base_price=product.pricing.base_price,
                created_at=now,
            )
        )
        if submit:
            product.submit_for_review(seller_email or seller_id)
        return product

    # -------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------
    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    def update_details(
        self,
        name=None,
        short_description=None,
        full_description=None,
        category=None,
        base_price=None,
        stock_count=None,
        images=None,
    ):
        from catalogue.product.events import ProductDetailsUpdated

        if name is not None:
            self.name = name
        if short_description is not None:
            self.short_description = short_description
        if full_description is not None:
            self.full_description = full_description
        if category is not None:
            self.category = category.upper()
        if base_price is not None:
            self.pricing = Pricing(base_price=base_price, currency=self.pricing.currency)
        if stock_count is not None:
            self.stock_count = stock_count
        if images is not None:
            self.images = json.dumps(list(images))

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                base_price=self.pricing.base_price,
                stock_count=self.stock_count,
            )
        )

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target: ProductStatus):
        current = ProductStatus(self.status)
        if target not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot move product from {current.value} to {target.value}"]})

    def _record_status(self, status: ProductStatus, message, updated_by, timestamp):
        self.add_status_history(
            StatusEntry(status=status.value, message=message, updated_by=updated_by, timestamp=timestamp)
        )

    def _change_status(self, target: ProductStatus, message, updated_by):
        from catalogue.product.events import ProductStatusChanged

        self._assert_can_transition(target)
        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        self._record_status(target, message, updated_by, now)
        self.raise_(
            ProductStatusChanged(
                product_id=self.id,
                previous_status=previous,
                new_status=target.value,
                message=message,
                updated_by=updated_by,
                changed_at=now,
            )
        )

    def submit_for_review(self, submitted_by):
        self._change_status(ProductStatus.PENDING, "Submitted for review", submitted_by)

    def moderate(self, status: str, message=None, admin=None):
        try:
            target = ProductStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown product status '{status}'"]}) from None
        if target not in MODERATION_TARGETS:
            raise ValidationError({"status": [f"Admins cannot set a product to {target.value}"]})
        self._change_status(target, message or f"Product {target.value} by admin", admin)

    @property
    def is_visible(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def add_review(self, user_id, rating, comment=None, user_name=None):
        from catalogue.product.events import ProductReviewed

        if any(r.user_id == str(user_id) for r in self.reviews):
            raise ValidationError({"review": ["You have already reviewed this product"]})

        now = datetime.now(UTC)
        self.add_reviews(
            Review(user_id=str(user_id), user_name=user_name, rating=rating, comment=comment, created_at=now)
        )
        total = sum(r.rating for r in self.reviews)
        count = len(self.reviews)
        self.rating = Rating(average=round(total / count, 2), count=count)
        self.updated_at = now

        self.raise_(
            ProductReviewed(
                product_id=self.id,
                user_id=str(user_id),
                rating=rating,
                average=self.rating.average,
                count=count,
            )
        )

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    def matches(self, query: str) -> bool:
        """Case-insensitive match on name, descriptions and category."""
        needle = query.strip().lower()
        haystacks = (self.name, self.short_description, self.full_description, self.category)
        return any(needle in (h or "").lower() for h in haystacks)

    def snapshot(self) -> dict:
        """The product fields a cart, wishlist or order line keeps a copy of."""
        urls = self.image_urls
        return {
            "product_id": str(self.id),
            "name": self.name,
            "price": self.pricing.base_price,
            "currency": self.pricing.currency,
            "image_url": urls[0] if urls else None,
            "shop_id": str(self.shop_id) if self.shop_id else None,
            "category": self.category,
        }


@catalogue.repository(part_of=Product)
class ProductRepository:
    def with_status(self, status: str) -> list[Product]:
        return self._dao.query.filter(status=status).limit(None).all().items

    def active(self) -> list[Product]:
        return self.with_status(ProductStatus.ACTIVE.value)

    def everything(self) -> list[Product]:
        return self._dao.query.limit(None).all().items

    def for_shop(self, shop_id: str) -> list[Product]:
        return self._dao.query.filter(shop_id=shop_id).limit(None).all().items
