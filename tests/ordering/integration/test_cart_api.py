"""Integration tests for the cart and wishlist endpoints."""

import pytest
from catalogue.domain import catalogue
from catalogue.product.product import Product

SNAPSHOT = {"name": "Chili", "price": 40.0, "shopId": "shop-2", "category": "VEGETABLES"}


@pytest.fixture()
def token(buyer):
    return buyer[0]


class TestCartEndpoints:
    def test_requires_session(self, client):
        response = client.get("/cart")
        assert response.status_code == 401

    def test_empty_cart(self, client, auth, token):
        response = client.get("/cart", headers=auth(token))
        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0.0, "itemCount": 0}

    def test_add_with_client_snapshot(self, client, auth, token):
        response = client.post(
            "/cart",
            json={"productId": "p-chili", "quantity": 3, "product": SNAPSHOT},
            headers=auth(token),
        )
        assert response.status_code == 200
        cart = response.json()
        assert cart["total"] == 120.0
        assert cart["itemCount"] == 1
        assert cart["items"][0]["product"]["shopId"] == "shop-2"
        assert cart["items"][0]["lineTotal"] == 120.0

    def test_add_uses_catalogue_snapshot(self, client, auth, token, active_product):
        response = client.post("/cart", json={"productId": active_product["product_id"]}, headers=auth(token))
        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["quantity"] == 1
        assert item["product"]["name"] == "Red Rice"
        assert item["product"]["price"] == 120.0

    def test_add_unknown_product(self, client, auth, token):
        response = client.post("/cart", json={"productId": "missing"}, headers=auth(token))
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_add_again_after_product_leaves_catalogue(self, client, auth, token, active_product):
        product_id = active_product["product_id"]
        client.post("/cart", json={"productId": product_id}, headers=auth(token))
        with catalogue.domain_context():
            product = catalogue.repository_for(Product).get(product_id)
            product.moderate("archived", admin="admin@example.bt")
            catalogue.repository_for(Product).add(product)

        response = client.post("/cart", json={"productId": product_id}, headers=auth(token))
        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["quantity"] == 2
        assert item["product"]["price"] == 120.0

    def test_add_merges_lines(self, client, auth, token):
        body = {"productId": "p-chili", "quantity": 1, "product": SNAPSHOT}
        client.post("/cart", json=body, headers=auth(token))
        response = client.post("/cart", json=body, headers=auth(token))
        assert response.json()["items"][0]["quantity"] == 2

    def test_count(self, client, auth, token):
        client.post("/cart", json={"productId": "p-chili", "product": SNAPSHOT}, headers=auth(token))
        client.post(
            "/cart",
            json={"productId": "p-beans", "product": {**SNAPSHOT, "name": "Beans"}},
            headers=auth(token),
        )
        assert client.get("/cart/count", headers=auth(token)).json() == {"count": 2}

    def test_update_quantity(self, client, auth, token):
        client.post("/cart", json={"productId": "p-chili", "product": SNAPSHOT}, headers=auth(token))
        response = client.put("/cart", json={"productId": "p-chili", "quantity": 5}, headers=auth(token))
        assert response.status_code == 200
        assert response.json()["total"] == 200.0

    def test_update_absent_line(self, client, auth, token):
        response = client.put("/cart", json={"productId": "p-chili", "quantity": 5}, headers=auth(token))
        assert response.status_code == 404

    def test_update_to_zero_is_rejected(self, client, auth, token):
        client.post("/cart", json={"productId": "p-chili", "product": SNAPSHOT}, headers=auth(token))
        response = client.put("/cart", json={"productId": "p-chili", "quantity": 0}, headers=auth(token))
        assert response.status_code == 400

    def test_remove_line(self, client, auth, token):
        client.post("/cart", json={"productId": "p-chili", "product": SNAPSHOT}, headers=auth(token))
        response = client.delete("/cart", params={"productId": "p-chili"}, headers=auth(token))
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_clear(self, client, auth, token):
        client.post("/cart", json={"productId": "p-chili", "product": SNAPSHOT}, headers=auth(token))
        response = client.delete("/cart", headers=auth(token))
        assert response.json() == {"items": [], "total": 0.0, "itemCount": 0}

    def test_carts_are_private(self, client, auth, token, make_account):
        other_token, _ = make_account("BUYER")
        client.post("/cart", json={"productId": "p-chili", "product": SNAPSHOT}, headers=auth(token))
        assert client.get("/cart", headers=auth(other_token)).json()["itemCount"] == 0


class TestWishlistEndpoints:
    def test_empty(self, client, auth, token):
        assert client.get("/wishlist", headers=auth(token)).json() == {"items": [], "count": 0}

    def test_add_and_check(self, client, auth, token, active_product):
        product_id = active_product["product_id"]
        response = client.post("/wishlist", json={"productId": product_id}, headers=auth(token))
        assert response.json() == {"productId": product_id, "inWishlist": True}

        assert client.get(f"/wishlist/{product_id}", headers=auth(token)).json()["inWishlist"] is True

        wishlist = client.get("/wishlist", headers=auth(token)).json()
        assert wishlist["count"] == 1
        assert wishlist["items"][0]["product"]["name"] == "Red Rice"

    def test_unknown_product_is_listed_without_details(self, client, auth, token):
        client.post("/wishlist", json={"productId": "gone"}, headers=auth(token))
        wishlist = client.get("/wishlist", headers=auth(token)).json()
        assert wishlist["items"][0]["productId"] == "gone"
        assert wishlist["items"][0]["product"] is None

    def test_remove_action(self, client, auth, token):
        client.post("/wishlist", json={"productId": "p-1"}, headers=auth(token))
        response = client.post("/wishlist", json={"productId": "p-1", "action": "remove"}, headers=auth(token))
        assert response.json() == {"productId": "p-1", "inWishlist": False}

    def test_remove_route(self, client, auth, token):
        client.post("/wishlist", json={"productId": "p-1"}, headers=auth(token))
        response = client.post("/wishlist/remove", json={"productId": "p-1"}, headers=auth(token))
        assert response.json()["inWishlist"] is False
        assert client.get("/wishlist/p-1", headers=auth(token)).json()["inWishlist"] is False

    def test_delete_route(self, client, auth, token):
        client.post("/wishlist", json={"productId": "p-1"}, headers=auth(token))
        response = client.delete("/wishlist/p-1", headers=auth(token))
        assert response.status_code == 200
        assert client.get("/wishlist", headers=auth(token)).json()["count"] == 0
