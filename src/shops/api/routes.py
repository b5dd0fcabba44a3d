"""FastAPI endpoints for the Shops domain — owner self-service and admin moderation."""

import json

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.api.dependencies import get_principal, require_role
from identity.domain import identity
from identity.principal import Principal
from identity.user.promotion import PromoteToSeller
from shared.schemas import StatusResponse
from shops.api.schemas import (
    RegisterShopRequest,
    SetShopStatusRequest,
    ShopIdResponse,
    UpdateShopRequest,
    shop_to_dict,
)
from shops.shop.moderation import SetShopStatus
from shops.shop.profile import DeleteShop, UpdateShopProfile
from shops.shop.registration import RegisterShop
from shops.shop.shop import Shop, ShopStatus
from shops.shop.statistics import product_count, shop_statistics

shop_router = APIRouter(prefix="/shops", tags=["shops"])
admin_shop_router = APIRouter(prefix="/admin/shops", tags=["admin"])


def _own_shop(principal: Principal) -> Shop:
    owned = current_domain.repository_for(Shop).owned_by(principal.owner_keys())
    if not owned:
        raise ObjectNotFoundError("Shop not found")
    return owned[0]


# --- Owner endpoints ---


@shop_router.post("", status_code=201, response_model=ShopIdResponse)
async def register_shop(body: RegisterShopRequest, principal: Principal = Depends(get_principal)) -> ShopIdResponse:
    command = RegisterShop(
        owner_id=principal.id,
        owner_email=principal.email,
        owner_name=principal.display_name,
        owner_role=principal.role,
        name=body.name,
        description=body.description,
        address=json.dumps(body.address.to_domain()) if body.address else None,
        phone=body.phone,
    )
    shop_id = current_domain.process(command, asynchronous=False)
    return ShopIdResponse(message="Shop registered successfully and pending admin approval", shop_id=shop_id)


@shop_router.get("")
async def list_shops(principal: Principal = Depends(get_principal)):
    """Admins see every shop, sellers their own, everyone else the active ones."""
    repo = current_domain.repository_for(Shop)
    if principal.is_admin:
        shops_found = repo.everything()
    elif principal.is_seller:
        shops_found = repo.owned_by(principal.owner_keys())
    else:
        shops_found = repo.with_status(ShopStatus.ACTIVE.value)
    return {"shops": [shop_to_dict(shop) for shop in shops_found]}


@shop_router.get("/me")
async def my_shop(principal: Principal = Depends(get_principal)):
    shop = _own_shop(principal)
    return {"shop": shop_to_dict(shop), "stats": shop_statistics(shop.id)}


async def _update_my_shop(body: UpdateShopRequest, principal: Principal):
    command = UpdateShopProfile(
        owner_id=principal.id,
        owner_email=principal.email,
        name=body.name,
        description=body.description,
        address=json.dumps(body.address.to_domain()) if body.address else None,
        phone=body.phone,
        email=body.email,
    )
    shop_id = current_domain.process(command, asynchronous=False)
    return {"shop": shop_to_dict(current_domain.repository_for(Shop).get(shop_id))}


@shop_router.put("/me")
async def update_my_shop(body: UpdateShopRequest, principal: Principal = Depends(get_principal)):
    return await _update_my_shop(body, principal)


@shop_router.patch("")
async def patch_my_shop(body: UpdateShopRequest, principal: Principal = Depends(get_principal)):
    return await _update_my_shop(body, principal)


@shop_router.delete("/me", response_model=StatusResponse)
async def delete_my_shop(principal: Principal = Depends(get_principal)) -> StatusResponse:
    current_domain.process(DeleteShop(owner_id=principal.id, owner_email=principal.email), asynchronous=False)
    return StatusResponse()


# --- Admin endpoints ---


@admin_shop_router.get("")
async def admin_list_shops(principal: Principal = Depends(require_role("ADMIN"))):
    """Every shop, those awaiting review first, then newest first."""
    shops_found = current_domain.repository_for(Shop).everything()
    shops_found.sort(key=lambda s: s.created_at.timestamp() if s.created_at else 0, reverse=True)
    shops_found.sort(key=lambda s: s.status != ShopStatus.INACTIVE.value)

    results = []
    for shop in shops_found:
        data = shop_to_dict(shop)
        data["productCount"] = product_count(shop.id)
        data["isVerified"] = data["verification"]["isVerified"]
        results.append(data)
    return {"shops": results}


@admin_shop_router.patch("")
async def admin_set_shop_status(
    body: SetShopStatusRequest,
    principal: Principal = Depends(require_role("ADMIN")),
):
    command = SetShopStatus(
        shop_id=body.shop_id,
        status=body.status,
        message=body.message,
        notify_seller=body.notify_seller,
        admin_id=principal.id,
        admin_email=principal.email,
        admin_role=principal.role,
    )
    current_domain.process(command, asynchronous=False)
    shop = current_domain.repository_for(Shop).get(body.shop_id)

    if shop.status == ShopStatus.ACTIVE.value:
        with identity.domain_context():
            identity.process(PromoteToSeller(user_id=shop.owner_id), asynchronous=False)

    return {"message": f"Shop {shop.status}", "shop": shop_to_dict(shop)}
