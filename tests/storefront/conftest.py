import os
import uuid

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def cart_id():
    """A fresh cart key per test, so line ids always start at 1."""
    return f"cart-{uuid.uuid4().hex[:12]}"


@pytest.fixture()
def store(cart_id):
    from storefront.cart.store import CartStore

    return CartStore(cart_id)


@pytest.fixture()
def client(store):
    from storefront.api import get_cart_store
    from storefront.app import create_app

    app = create_app()
    app.dependency_overrides[get_cart_store] = lambda: store
    return TestClient(app)
