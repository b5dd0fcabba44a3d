"""Anonymous catalogue browsing: listings, filters, search and product detail."""

import random

from locust import HttpUser, TaskSet, between, task

from loadtests.data_generators import CATEGORIES, search_term


class CatalogueBrowsing(TaskSet):
    """Unauthenticated reads; product ids are picked up from listings."""

    def on_start(self):
        self.product_ids: list[str] = []

    @task(5)
    def list_products(self):
        with self.client.get("/products", params={"limit": 24}, catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.product_ids = [p["id"] for p in resp.json()["products"]]
            else:
                resp.failure(f"Listing failed: {resp.status_code}")

    @task(3)
    def filter_by_category(self):
        self.client.get(
            "/products",
            params={"category": random.choice(CATEGORIES), "maxPrice": 500},
            name="GET /products?category",
        )

    @task(3)
    def search(self):
        self.client.get("/products/search", params={"q": search_term()}, name="GET /products/search")

    @task(2)
    def product_detail(self):
        if self.product_ids:
            self.client.get(f"/products/{random.choice(self.product_ids)}", name="GET /products/{id}")

    @task(1)
    def shops(self):
        self.client.get("/shops", name="GET /shops")


class BrowsingUser(HttpUser):
    tasks = [CatalogueBrowsing]
    wait_time = between(0.5, 2)
