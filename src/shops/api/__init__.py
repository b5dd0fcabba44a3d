"""Shops domain API package."""

from shops.api.routes import admin_shop_router, shop_router

__all__ = ["shop_router", "admin_shop_router"]
