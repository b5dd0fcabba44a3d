"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's request schemas
and the domain's validation rules.
"""

import random
import uuid

from faker import Faker

fake = Faker()

DZONGKHAGS = ["Thimphu", "Paro", "Punakha", "Wangdue", "Bumthang", "Trongsa"]
CATEGORIES = ["VEGETABLES", "FRUITS", "HERBS", "GRAINS", "OTHER"]
PRODUCE = ["Red Rice", "Chili", "Asparagus", "Buckwheat", "Apples", "Mushrooms", "Cheese", "Turnip"]

TEST_CARD = {
    "method": "credit_card",
    "cardNumber": "4242 4242 4242 4242",
    "cardName": "Load Test",
    "expiryDate": "12/99",
    "cvv": "123",
}


def unique_email(role: str = "buyer") -> str:
    return f"{role}.{uuid.uuid4().hex[:10]}@loadtest.bt"


def registration(role: str = "BUYER") -> dict:
    return {
        "name": fake.name()[:100],
        "email": unique_email(role.lower()),
        "password": "loadtest-pass",
        "role": role,
    }


def shop_data() -> dict:
    city = random.choice(DZONGKHAGS)
    return {
        "name": f"{fake.last_name()} {random.choice(['Farm', 'Greens', 'Market', 'Orchard'])}"[:100],
        "description": fake.sentence(nb_words=10)[:500],
        "address": {
            "street": fake.street_name()[:200],
            "city": city,
            "state": city,
            "zipCode": f"{random.randint(11001, 17999)}",
        },
        "phone": f"+975-17-{random.randint(100000, 999999)}",
    }


def product_data() -> dict:
    name = random.choice(PRODUCE)
    return {
        "name": f"{name} {fake.word()}"[:200],
        "shortDescription": fake.sentence(nb_words=8)[:300],
        "category": random.choice(CATEGORIES),
        "basePrice": round(random.uniform(20, 900), 2),
        "stockCount": random.randint(1, 200),
        "images": [f"https://cdn.example.bt/{uuid.uuid4().hex[:8]}.jpg"],
        "submit": True,
    }


def search_term() -> str:
    return random.choice(PRODUCE).split()[0].lower()
