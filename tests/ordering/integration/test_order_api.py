"""Integration tests for the order endpoints, including checkout payment."""

import pytest

ITEMS = [
    {"productId": "p-rice", "name": "Red Rice", "quantity": 2, "price": 120.0, "shopId": "shop-1"},
    {"productId": "p-chili", "name": "Chili", "quantity": 1, "price": 40.0, "shopId": "shop-2"},
]
CARD = {
    "method": "credit_card",
    "cardNumber": "4242 4242 4242 4242",
    "cardName": "Karma Buyer",
    "expiryDate": "12/99",
    "cvv": "123",
}


def _place(client, auth, token, items=ITEMS, **extra):
    return client.post("/orders", json={"items": items, **extra}, headers=auth(token))


class TestCreateOrder:
    def test_create_from_items(self, client, auth, buyer):
        token, principal = buyer
        response = _place(client, auth, token)

        assert response.status_code == 201
        order = response.json()["order"]
        assert order["total"] == 280.0
        assert order["status"] == "pending"
        assert order["paymentStatus"] == "unpaid"
        assert order["user"] == principal.id
        assert order["customerEmail"] == principal.email
        assert order["orderNumber"].startswith("ORD-")

    def test_create_from_cart_keeps_cart(self, client, auth, buyer):
        token, _ = buyer
        client.post(
            "/cart",
            json={"productId": "p-chili", "quantity": 2, "product": {"name": "Chili", "price": 40.0}},
            headers=auth(token),
        )
        response = client.post("/orders", json={}, headers=auth(token))

        assert response.status_code == 201
        assert response.json()["order"]["total"] == 80.0
        assert client.get("/cart/count", headers=auth(token)).json() == {"count": 1}

    def test_order_is_a_snapshot_of_the_cart(self, client, auth, buyer, admin):
        token, _ = buyer
        for product_id, quantity, price in (("p-chili", 2, 65.0), ("p-rice", 1, 120.0)):
            client.post(
                "/cart",
                json={"productId": product_id, "quantity": quantity, "product": {"name": product_id, "price": price}},
                headers=auth(token),
            )
        cart = client.get("/cart", headers=auth(token)).json()
        order = client.post("/orders", json={}, headers=auth(token)).json()["order"]

        client.put("/cart", json={"productId": "p-chili", "quantity": 9}, headers=auth(token))
        client.delete("/cart", headers=auth(token))
        client.put(
            "/orders",
            json={"orderId": order["id"], "status": "delivered", "paymentStatus": "paid"},
            headers=auth(admin[0]),
        )
        stored = client.get(f"/orders/{order['id']}", headers=auth(token)).json()["order"]

        assert (stored["status"], stored["paymentStatus"]) == ("delivered", "paid")
        assert [(i["productId"], i["quantity"], i["price"]) for i in stored["items"]] == [
            (line["productId"], line["quantity"], line["product"]["price"]) for line in cart["items"]
        ]
        assert stored["total"] == cart["total"] == 250.0

    def test_empty_cart(self, client, auth, buyer):
        response = client.post("/orders", json={}, headers=auth(buyer[0]))
        assert response.status_code == 400
        assert "items" in response.json()["details"]

    def test_invalid_quantity(self, client, auth, buyer):
        response = _place(client, auth, buyer[0], items=[{**ITEMS[0], "quantity": 0}])
        assert response.status_code == 400


class TestReadOrders:
    def test_list_mine(self, client, auth, buyer, make_account):
        token, _ = buyer
        other_token, _ = make_account("BUYER")
        _place(client, auth, token)
        _place(client, auth, other_token)

        orders = client.get("/orders", headers=auth(token)).json()["orders"]
        assert len(orders) == 1

    def test_detail_for_owner(self, client, auth, buyer):
        token, _ = buyer
        order_id = _place(client, auth, token).json()["order"]["id"]
        response = client.get(f"/orders/{order_id}", headers=auth(token))
        assert response.json()["order"]["id"] == order_id

    def test_detail_for_stranger(self, client, auth, buyer, make_account):
        order_id = _place(client, auth, buyer[0]).json()["order"]["id"]
        stranger, _ = make_account("BUYER")
        response = client.get(f"/orders/{order_id}", headers=auth(stranger))
        assert response.status_code == 403
        assert response.json() == {"error": "Not authorized to view this order"}

    def test_detail_for_admin(self, client, auth, buyer, admin):
        order_id = _place(client, auth, buyer[0]).json()["order"]["id"]
        assert client.get(f"/orders/{order_id}", headers=auth(admin[0])).status_code == 200

    def test_missing_order(self, client, auth, buyer):
        assert client.get("/orders/missing", headers=auth(buyer[0])).status_code == 404


class TestSellerOrders:
    def test_seller_sees_orders_with_shop_items(self, client, auth, buyer, seller, seller_shop):
        _place(client, auth, buyer[0], items=[{**ITEMS[0], "shopId": seller_shop}])
        _place(client, auth, buyer[0])

        response = client.get("/orders/seller", headers=auth(seller[0]))
        assert response.status_code == 200
        assert len(response.json()["orders"]) == 1

    def test_seller_without_shop(self, client, auth, seller):
        response = client.get("/orders/seller", headers=auth(seller[0]))
        assert response.status_code == 404
        assert response.json() == {"error": "Shop not found"}

    def test_buyer_is_forbidden(self, client, auth, buyer):
        assert client.get("/orders/seller", headers=auth(buyer[0])).status_code == 403

    def test_seller_ships(self, client, auth, buyer, seller, seller_shop):
        order_id = _place(client, auth, buyer[0], items=[{**ITEMS[0], "shopId": seller_shop}]).json()["order"]["id"]
        response = client.put("/orders", json={"orderId": order_id, "status": "shipped"}, headers=auth(seller[0]))

        assert response.status_code == 200
        assert response.json()["order"]["status"] == "shipped"


class TestAdvanceOrder:
    def test_buyer_cancels(self, client, auth, buyer):
        token, _ = buyer
        order_id = _place(client, auth, token).json()["order"]["id"]
        response = client.put("/orders", json={"orderId": order_id, "status": "cancelled"}, headers=auth(token))
        assert response.json()["order"]["status"] == "cancelled"

    def test_backwards_move(self, client, auth, buyer, admin):
        order_id = _place(client, auth, buyer[0]).json()["order"]["id"]
        client.put("/orders", json={"orderId": order_id, "status": "delivered"}, headers=auth(admin[0]))
        response = client.put("/orders", json={"orderId": order_id, "status": "processing"}, headers=auth(admin[0]))
        assert response.status_code == 400

    def test_stranger(self, client, auth, buyer, make_account):
        order_id = _place(client, auth, buyer[0]).json()["order"]["id"]
        stranger, _ = make_account("BUYER")
        response = client.put("/orders", json={"orderId": order_id, "status": "cancelled"}, headers=auth(stranger))
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found or not authorized"}


class TestPayment:
    @pytest.fixture()
    def order_id(self, client, auth, buyer):
        return _place(client, auth, buyer[0]).json()["order"]["id"]

    def test_card(self, client, auth, buyer, order_id):
        response = client.post(f"/orders/{order_id}/payment", json=CARD, headers=auth(buyer[0]))

        assert response.status_code == 200
        body = response.json()
        assert body["orderId"] == order_id
        assert body["status"] == "processing"
        assert body["paymentStatus"] == "paid"
        assert body["transactionId"]

    def test_cash(self, client, auth, buyer, order_id):
        response = client.post(f"/orders/{order_id}/payment", json={"method": "cash"}, headers=auth(buyer[0]))
        assert response.json()["paymentStatus"] == "pending"
        assert response.json()["status"] == "pending"

    def test_invalid_card(self, client, auth, buyer, order_id):
        response = client.post(
            f"/orders/{order_id}/payment",
            json={**CARD, "cardNumber": "4242", "cvv": "12"},
            headers=auth(buyer[0]),
        )
        assert response.status_code == 400
        assert set(response.json()["details"]) == {"card_number", "cvv"}

    def test_declined(self, client, auth, buyer, order_id, fake_gateway):
        fake_gateway.configure(should_succeed=False, failure_reason="Insufficient funds")
        response = client.post(f"/orders/{order_id}/payment", json=CARD, headers=auth(buyer[0]))

        assert response.status_code == 400
        assert response.json()["error"] == "Insufficient funds"
        detail = client.get(f"/orders/{order_id}", headers=auth(buyer[0])).json()["order"]
        assert detail["paymentStatus"] == "unpaid"

    def test_other_buyer(self, client, auth, order_id, make_account):
        stranger, _ = make_account("BUYER")
        response = client.post(f"/orders/{order_id}/payment", json=CARD, headers=auth(stranger))
        assert response.status_code == 404
