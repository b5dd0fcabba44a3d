"""Authenticated journeys: a seller opening a shop, and a buyer checking out.

Both are SequentialTaskSets; every step depends on the one before it.
Approval steps sign in with the seeded admin account.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import TEST_CARD, product_data, registration, shop_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import BuyerState, SellerState

SEED_ADMIN = {"email": "admin@blocal.bt", "password": "admin123"}


def sign_in(client, credentials: dict) -> str | None:
    with client.post("/auth/session", json=credentials, catch_response=True, name="POST /auth/session") as resp:
        if resp.status_code != 200:
            resp.failure(f"Sign-in failed: {resp.status_code} — {extract_error_detail(resp)}")
            return None
        return resp.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class SellerOnboardingJourney(SequentialTaskSet):
    """Register -> Open shop -> Admin approves -> List products -> Admin approves them."""

    def on_start(self):
        self.state = SellerState()
        self.admin_token = sign_in(self.client, SEED_ADMIN)

    @task
    def register(self):
        account = registration("SELLER")
        resp = self.client.post("/auth/register", json=account, name="POST /auth/register")
        if resp.status_code != 201:
            self.interrupt()
        self.state.token = sign_in(self.client, {"email": account["email"], "password": account["password"]})

    @task
    def open_shop(self):
        with self.client.post(
            "/shops", json=shop_data(), headers=bearer(self.state.token), catch_response=True, name="POST /shops"
        ) as resp:
            if resp.status_code == 201:
                self.state.shop_id = resp.json()["shopId"]
            else:
                resp.failure(f"Shop registration failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def approve_shop(self):
        self.client.patch(
            "/admin/shops",
            json={"shopId": self.state.shop_id, "status": "active", "notifySeller": False},
            headers=bearer(self.admin_token),
            name="PATCH /admin/shops",
        )

    @task
    def list_products(self):
        for _ in range(random.randint(1, 3)):
            resp = self.client.post(
                "/products", json=product_data(), headers=bearer(self.state.token), name="POST /products"
            )
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["productId"])

    @task
    def approve_products(self):
        for product_id in self.state.product_ids:
            self.client.patch(
                "/admin/products",
                json={"productId": product_id, "status": "active"},
                headers=bearer(self.admin_token),
                name="PATCH /admin/products",
            )

    @task
    def check_dashboard(self):
        self.client.get("/shops/me", headers=bearer(self.state.token), name="GET /shops/me")
        self.client.get("/orders/seller", headers=bearer(self.state.token), name="GET /orders/seller")
        self.interrupt()


class BuyerCheckoutJourney(SequentialTaskSet):
    """Register -> Browse -> Wishlist -> Cart -> Order -> Pay."""

    def on_start(self):
        self.state = BuyerState()

    @task
    def register(self):
        account = registration("BUYER")
        resp = self.client.post("/auth/register", json=account, name="POST /auth/register")
        if resp.status_code != 201:
            self.interrupt()
        self.state.token = sign_in(self.client, {"email": account["email"], "password": account["password"]})

    @task
    def browse(self):
        resp = self.client.get("/products", params={"limit": 24}, name="GET /products")
        if resp.status_code == 200:
            self.state.product_ids = [p["id"] for p in resp.json()["products"]]
        if not self.state.product_ids:
            self.interrupt()

    @task
    def wishlist(self):
        self.client.post(
            "/wishlist",
            json={"productId": random.choice(self.state.product_ids)},
            headers=bearer(self.state.token),
            name="POST /wishlist",
        )

    @task
    def fill_cart(self):
        picks = random.sample(self.state.product_ids, k=min(3, len(self.state.product_ids)))
        for product_id in picks:
            self.client.post(
                "/cart",
                json={"productId": product_id, "quantity": random.randint(1, 4)},
                headers=bearer(self.state.token),
                name="POST /cart",
            )

    @task
    def place_order(self):
        with self.client.post(
            "/orders", json={}, headers=bearer(self.state.token), catch_response=True, name="POST /orders"
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order"]["id"]
            else:
                resp.failure(f"Order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def pay(self):
        payment = TEST_CARD if random.random() < 0.8 else {"method": "cash"}
        with self.client.post(
            f"/orders/{self.state.order_id}/payment",
            json=payment,
            headers=bearer(self.state.token),
            catch_response=True,
            name="POST /orders/{id}/payment",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Payment failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def clear_cart(self):
        self.client.delete("/cart", headers=bearer(self.state.token), name="DELETE /cart")
        self.interrupt()


class ShoppingUser(HttpUser):
    tasks = {BuyerCheckoutJourney: 4, SellerOnboardingJourney: 1}
    wait_time = between(1, 3)
