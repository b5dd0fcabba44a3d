import pytest


@pytest.fixture()
def client(client_for):
    from ordering.api import cart_router, order_router, wishlist_router

    return client_for(cart_router, wishlist_router, order_router)


@pytest.fixture()
def active_product():
    """An approved product in the catalogue, returned as its snapshot."""
    from catalogue.domain import catalogue
    from catalogue.product.product import Product

    with catalogue.domain_context():
        product = Product.create(
            name="Red Rice",
            base_price=120.0,
            seller_id="seller-1",
            shop_id="shop-1",
            category="GRAINS",
            images=["https://cdn.example.bt/rice.jpg"],
            submit=True,
        )
        product.moderate("active", admin="admin@example.bt")
        catalogue.repository_for(Product).add(product)
        return product.snapshot()


@pytest.fixture()
def seller_shop(seller):
    """The seller's approved shop."""
    from shops.domain import shops
    from shops.shop.shop import Shop

    _, principal = seller
    with shops.domain_context():
        shop = Shop.register(
            owner_id=principal.id,
            owner_email=principal.email,
            name="Paro Greens",
            description="Fresh vegetables from Paro valley",
            address={"street": "Norzin Lam", "city": "Thimphu", "state": "Thimphu", "zip_code": "11001"},
        )
        shop.set_status("active", admin_email="admin@example.bt")
        shops.repository_for(Shop).add(shop)
        return str(shop.id)
