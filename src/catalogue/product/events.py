"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A seller added a product; it starts as a draft."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    shop_id: Identifier()
    seller_id: String()
    base_price: Float(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    base_price: Float()
    stock_count: Integer()


@catalogue.event(part_of="Product")
class ProductStatusChanged:
    """A product moved through review: submitted, approved, rejected or archived."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    message: String()
    updated_by: String()
    changed_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductReviewed:
    __version__ = 1

    product_id: Identifier(required=True)
    user_id: String(required=True)
    rating: Integer(required=True)
    average: Float(required=True)
    count: Integer(required=True)
