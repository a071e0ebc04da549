"""Faker-based data generators for Locust load test scenarios.

Payloads match the camelCase field names expected by the API's Pydantic
request schemas.
"""

import random

from faker import Faker

fake = Faker()

# Catalogue ids served by GET /api/products
PRODUCT_IDS = ["p1", "p2", "p3", "p4", "p5", "p6"]


def cart_line_data() -> dict:
    """Generate AddToCartRequest payload."""
    return {
        "productId": random.choice(PRODUCT_IDS),
        "qty": random.randint(1, 3),
    }


def quantity_data() -> dict:
    """Generate UpdateCartQuantityRequest payload."""
    return {"qty": random.randint(1, 5)}


def checkout_data() -> dict:
    """Generate CheckoutRequest payload (server-side cart, no cartItems)."""
    return {
        "name": fake.name(),
        "email": fake.email(),
    }
