"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    CreateProductRequest,
    ModerateProductRequest,
    ProductIdResponse,
    ReviewRequest,
    UpdateProductRequest,
    product_to_dict,
)
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProductDetails
from catalogue.product.moderation import ModerateProduct, SubmitProduct
from catalogue.product.product import Product
from catalogue.product.reviews import AddProductReview
from catalogue.product.search import list_products, products_for_review, search_products
from identity.api.dependencies import get_principal, require_role
from identity.principal import Principal
from shared.schemas import StatusResponse
from shops.shop.ownership import shop_for_owner

product_router = APIRouter(prefix="/products", tags=["products"])
admin_product_router = APIRouter(prefix="/admin/products", tags=["admin"])


# --- Public reads ---


@product_router.get("")
async def get_products(
    category: str | None = None,
    search: str | None = None,
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
):
    result = list_products(category, search, min_price, max_price, page, limit)
    return {
        "products": [product_to_dict(p) for p in result["products"]],
        "pagination": result["pagination"],
    }


@product_router.get("/search")
async def search(q: str | None = None):
    result = search_products(q)
    return {
        "products": [product_to_dict(p) for p in result["products"]],
        "total": result["total"],
        "query": result["query"],
    }


@product_router.get("/mine")
async def my_products(principal: Principal = Depends(require_role("SELLER"))):
    repo = current_domain.repository_for(Product)
    products = [p for p in repo.everything() if principal.owns(p.seller_id, p.seller_email)]
    return {"products": [product_to_dict(p) for p in products]}


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    product = current_domain.repository_for(Product).get(product_id)
    if not product.is_visible:
        raise ObjectNotFoundError("Product not found")
    return product_to_dict(product)


# --- Seller writes ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(
    body: CreateProductRequest,
    principal: Principal = Depends(require_role("SELLER")),
) -> ProductIdResponse:
    shop = shop_for_owner(principal)
    if shop is None:
        raise ObjectNotFoundError("Shop not found")

    command = CreateProduct(
        name=body.name,
        short_description=body.short_description,
        full_description=body.full_description,
        category=body.category,
        base_price=body.base_price,
        currency=body.currency,
        stock_count=body.stock_count,
        images=json.dumps(body.images),
        shop_id=str(shop.id),
        seller_id=principal.id,
        seller_email=principal.email,
        submit=body.submit,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    principal: Principal = Depends(require_role("SELLER", "ADMIN")),
) -> StatusResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        actor_id=principal.id,
        actor_email=principal.email,
        actor_role=principal.role,
        name=body.name,
        short_description=body.short_description,
        full_description=body.full_description,
        category=body.category,
        base_price=body.base_price,
        stock_count=body.stock_count,
        images=json.dumps(body.images) if body.images is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/submit", response_model=StatusResponse)
async def submit_product(
    product_id: str,
    principal: Principal = Depends(require_role("SELLER")),
) -> StatusResponse:
    command = SubmitProduct(
        product_id=product_id,
        actor_id=principal.id,
        actor_email=principal.email,
        actor_role=principal.role,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/reviews", status_code=201)
async def review_product(
    product_id: str,
    body: ReviewRequest,
    principal: Principal = Depends(get_principal),
):
    command = AddProductReview(
        product_id=product_id,
        user_id=principal.id,
        user_name=principal.display_name,
        rating=body.rating,
        comment=body.comment,
    )
    rating = current_domain.process(command, asynchronous=False)
    return {"rating": rating}


# --- Admin moderation ---


@admin_product_router.get("")
async def admin_list_products(
    status: str | None = None,
    principal: Principal = Depends(require_role("ADMIN")),
):
    return {"products": [product_to_dict(p) for p in products_for_review(status)]}


@admin_product_router.patch("")
async def admin_moderate_product(
    body: ModerateProductRequest,
    principal: Principal = Depends(require_role("ADMIN")),
):
    command = ModerateProduct(
        product_id=body.product_id,
        status=body.status,
        message=body.message,
        admin_email=principal.email,
    )
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(body.product_id)
    return product_to_dict(product)
