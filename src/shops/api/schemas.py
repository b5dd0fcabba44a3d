"""Pydantic request/response schemas for the Shops API.

Length and presence rules for shop fields live on the aggregate, so the
request models accept missing values and let the domain report them.
"""

from pydantic import Field

from shared.schemas import CamelModel


class AddressSchema(CamelModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None

    def to_domain(self) -> dict:
        return {
            "street": self.street or "",
            "city": self.city or "",
            "state": self.state or "",
            "zip_code": self.zip_code or "",
        }


class RegisterShopRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Green Valley Farm",
                    "description": "Organic veggies from the valley",
                    "address": {"street": "Main St", "city": "Thimphu", "state": "Thimphu", "zipCode": "11001"},
                    "phone": "+975-17-123456",
                }
            ]
        }
    }

    name: str | None = None
    description: str | None = None
    address: AddressSchema | None = None
    phone: str | None = Field(None, max_length=20)


class UpdateShopRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    address: AddressSchema | None = None
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=254)


class SetShopStatusRequest(CamelModel):
    shop_id: str
    status: str
    message: str | None = Field(None, max_length=500)
    notify_seller: bool = True


class ShopIdResponse(CamelModel):
    message: str
    shop_id: str


def _iso(value):
    return value.isoformat() if value else None


def shop_to_dict(shop) -> dict:
    verification = shop.verification
    statistics = shop.statistics
    return {
        "id": str(shop.id),
        "name": shop.name,
        "description": shop.description,
        "owner": shop.owner_id,
        "ownerEmail": shop.owner_email,
        "ownerName": shop.owner_name,
        "address": shop.address.to_dict() if shop.address else None,
        "phone": shop.phone,
        "email": shop.email,
        "status": shop.status,
        "isActive": bool(shop.is_active),
        "verification": {
            "isVerified": bool(verification and verification.is_verified),
            "verifiedAt": _iso(verification.verified_at) if verification else None,
            "verifiedBy": verification.verified_by if verification else None,
        },
        "statusHistory": [
            {
                "status": entry.status,
                "message": entry.message,
                "updatedBy": entry.updated_by,
                "timestamp": _iso(entry.timestamp),
            }
            for entry in sorted(shop.status_history, key=lambda e: _iso(e.timestamp) or "")
        ],
        "statistics": {
            "totalSales": statistics.total_sales if statistics else 0.0,
            "totalOrders": statistics.total_orders if statistics else 0,
            "totalProducts": statistics.total_products if statistics else 0,
        },
        "rating": {
            "average": shop.rating.average if shop.rating else 0.0,
            "count": shop.rating.count if shop.rating else 0,
        },
        "createdAt": _iso(shop.created_at),
        "updatedAt": _iso(shop.updated_at),
    }
