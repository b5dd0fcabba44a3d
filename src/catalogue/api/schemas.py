"""Pydantic request/response schemas for the Catalogue API."""

from pydantic import Field

from shared.schemas import CamelModel


class CreateProductRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Organic Tomato",
                    "shortDescription": "Vine-ripened tomatoes from Paro",
                    "fullDescription": "Grown without pesticides on terraced fields.",
                    "category": "VEGETABLES",
                    "basePrice": 65.0,
                    "stockCount": 40,
                    "images": ["https://cdn.example.bt/tomato.jpg"],
                    "submit": True,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    short_description: str | None = Field(None, max_length=300)
    full_description: str | None = None
    category: str | None = Field(None, max_length=20)
    base_price: float = Field(..., ge=0)
    currency: str | None = Field(None, max_length=3)
    stock_count: int = Field(0, ge=0)
    images: list[str] = Field(default_factory=list)
    submit: bool = False


class UpdateProductRequest(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    short_description: str | None = Field(None, max_length=300)
    full_description: str | None = None
    category: str | None = Field(None, max_length=20)
    base_price: float | None = Field(None, ge=0)
    stock_count: int | None = Field(None, ge=0)
    images: list[str] | None = None


class ModerateProductRequest(CamelModel):
    product_id: str
    status: str
    message: str | None = Field(None, max_length=500)


class ReviewRequest(CamelModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(None, max_length=500)


class ProductIdResponse(CamelModel):
    product_id: str


def product_to_dict(product) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "shortDescription": product.short_description,
        "fullDescription": product.full_description,
        "category": product.category,
        "pricing": {"basePrice": product.pricing.base_price, "currency": product.pricing.currency},
        "stockCount": product.stock_count,
        "images": product.image_urls,
        "shopId": str(product.shop_id) if product.shop_id else None,
        "sellerId": product.seller_id,
        "status": product.status,
        "rating": {
            "average": product.rating.average if product.rating else 0.0,
            "count": product.rating.count if product.rating else 0,
        },
        "reviews": [
            {
                "userId": r.user_id,
                "userName": r.user_name,
                "rating": r.rating,
                "comment": r.comment,
                "createdAt": r.created_at.isoformat() if r.created_at else None,
            }
            for r in product.reviews
        ],
        "statusHistory": [
            {
                "status": h.status,
                "message": h.message,
                "updatedBy": h.updated_by,
                "timestamp": h.timestamp.isoformat() if h.timestamp else None,
            }
            for h in product.status_history
        ],
        "createdAt": product.created_at.isoformat() if product.created_at else None,
        "updatedAt": product.updated_at.isoformat() if product.updated_at else None,
    }
