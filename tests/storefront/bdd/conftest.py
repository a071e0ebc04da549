"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Mutable container capturing the exception raised by a When step."""
    return {}


@pytest.fixture()
def checkout_result():
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart")
def empty_cart(store):
    assert store.snapshot()["items"] == []


@given(parsers.cfparse('a cart holding {qty:d} of product "{product_id}"'))
def cart_holding(store, qty, product_id):
    store.add_line(product_id, qty)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.re(r"the cart has (?P<count>\d+) lines?"), converters={"count": int})
def cart_has_n_lines(store, count):
    assert len(store.snapshot()["items"]) == count


@then("the request is rejected as invalid input")
def rejected_as_invalid(error):
    assert isinstance(error.get("exc"), ValidationError)


@then("the request is rejected as not found")
def rejected_as_not_found(error):
    assert isinstance(error.get("exc"), ObjectNotFoundError)
