"""Bhutan Fresh Market FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# DATABASE_URL selects the backing store for every domain.
from catalogue.domain import catalogue  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity  # noqa: E402
from ordering.domain import ordering  # noqa: E402
from shared.errors import register_exception_handlers
from shared.store import configure_store
from shops.domain import shops  # noqa: E402

DOMAINS = (identity, catalogue, ordering, shops)

for _domain in DOMAINS:
    configure_store(_domain)
    _domain.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/products": catalogue,
    "/admin/products": catalogue,
    "/cart": ordering,
    "/wishlist": ordering,
    "/orders": ordering,
    "/shops": shops,
    "/admin/shops": shops,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Bhutan Fresh Market API",
    description="Marketplace for local produce from Bhutanese sellers",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match: health check and docs pass through
    return await call_next(request)


@app.on_event("startup")
async def seed_accounts():
    from identity.user.seed import ensure_seed_accounts

    ensure_seed_accounts()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from catalogue.api import admin_product_router, product_router  # noqa: E402
from identity.api import router as identity_router  # noqa: E402
from ordering.api import cart_router, order_router, wishlist_router  # noqa: E402
from shops.api import admin_shop_router, shop_router  # noqa: E402

app.include_router(identity_router)
app.include_router(product_router)
app.include_router(admin_product_router)
app.include_router(cart_router)
app.include_router(wishlist_router)
app.include_router(order_router)
app.include_router(shop_router)
app.include_router(admin_shop_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {domain.name: {"name": domain.name} for domain in DOMAINS},
        }
    )
