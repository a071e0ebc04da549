"""Application tests for the cart store and the cart line commands."""

import random
import threading

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.cart.cart import ShoppingCart
from storefront.cart.lines import AddToCart, RemoveFromCart
from storefront.cart.store import CartStore
from storefront.domain import storefront

EMPTY_CART = {"items": [], "subtotal": 0.0, "total": 0.0}


class TestAddLine:
    def test_add_returns_recomputed_cart(self, store):
        cart = store.add_line("p1", 2)
        assert cart == {
            "items": [{"id": "1", "product_id": "p1", "name": "Widget", "price": 9.99, "qty": 2, "line_total": 19.98}],
            "subtotal": 19.98,
            "total": 19.98,
        }

    def test_add_persists_cart(self, store):
        store.add_line("p1", 2)
        store.add_line("p2", 1)
        cart = current_domain.repository_for(ShoppingCart).get(store.cart_id)
        assert len(cart.items) == 2
        assert cart.next_line_id == 3

    def test_unknown_product(self, store):
        with pytest.raises(ObjectNotFoundError):
            store.add_line("p404", 1)
        assert store.snapshot() == EMPTY_CART

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity(self, store, qty):
        with pytest.raises(ValidationError):
            store.add_line("p1", qty)
        assert store.snapshot() == EMPTY_CART

    @pytest.mark.parametrize("product_id", [None, ""])
    def test_missing_product_id(self, store, product_id):
        with pytest.raises(ValidationError):
            store.add_line(product_id, 1)

    def test_failed_add_does_not_consume_an_id(self, store):
        with pytest.raises(ObjectNotFoundError):
            store.add_line("p404", 1)
        assert store.add_line("p1", 1)["items"][0]["id"] == "1"


class TestUpdateQty:
    def test_update_changes_the_same_line(self, store):
        store.add_line("p1", 3)
        cart = store.update_qty("1", 5)
        assert len(cart["items"]) == 1
        assert cart["items"][0]["qty"] == 5

    def test_update_unknown_line(self, store):
        store.add_line("p1", 3)
        with pytest.raises(ObjectNotFoundError):
            store.update_qty("9", 5)
        assert store.snapshot()["items"][0]["qty"] == 3

    def test_update_invalid_quantity(self, store):
        store.add_line("p1", 3)
        with pytest.raises(ValidationError):
            store.update_qty("1", 0)
        assert store.snapshot()["items"][0]["qty"] == 3


class TestRemoveLine:
    def test_remove_line(self, store):
        store.add_line("p1", 1)
        store.add_line("p2", 1)
        cart = store.remove_line("1")
        assert [item["id"] for item in cart["items"]] == ["2"]

    def test_remove_unknown_line_leaves_cart_unchanged(self, store):
        store.add_line("p1", 1)
        before = store.snapshot()
        with pytest.raises(ObjectNotFoundError):
            store.remove_line("99")
        assert store.snapshot() == before


class TestSnapshotAndClear:
    def test_snapshot_of_unused_cart_is_empty(self, store):
        assert store.snapshot() == EMPTY_CART

    def test_snapshot_does_not_mutate(self, store):
        store.add_line("p1", 1)
        assert store.snapshot() == store.snapshot()

    def test_clear(self, store):
        store.add_line("p1", 1)
        store.add_line("p2", 4)
        assert store.clear() == EMPTY_CART
        assert store.snapshot() == EMPTY_CART


class TestCommandsThroughDomain:
    def test_process_add_to_cart(self, cart_id):
        cart = current_domain.process(AddToCart(cart_id=cart_id, product_id="p2", qty=2), asynchronous=False)
        assert cart["total"] == 49.0

    def test_process_remove_from_unknown_cart(self, cart_id):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveFromCart(cart_id=cart_id, line_id="1"), asynchronous=False)

    def test_command_rejects_zero_quantity(self, cart_id):
        with pytest.raises(ValidationError):
            AddToCart(cart_id=cart_id, product_id="p1", qty=0)


class TestStoreIsolation:
    def test_stores_with_different_keys_are_independent(self, cart_id):
        first = CartStore(f"{cart_id}-a")
        second = CartStore(f"{cart_id}-b")

        first.add_line("p1", 1)
        first.add_line("p2", 1)
        cart = second.add_line("p3", 1)

        assert [item["id"] for item in cart["items"]] == ["1"]
        assert len(first.snapshot()["items"]) == 2

    def test_stores_with_the_same_key_share_a_cart(self, cart_id):
        CartStore(cart_id).add_line("p1", 1)
        assert len(CartStore(cart_id).snapshot()["items"]) == 1


class TestTotalsInvariant:
    def test_totals_match_lines_after_random_operations(self, store):
        rng = random.Random(20261019)
        product_ids = ["p1", "p2", "p3", "p4", "p5", "p6"]

        for _ in range(40):
            cart = store.snapshot()
            line_ids = [item["id"] for item in cart["items"]]
            action = rng.choice(["add", "update", "remove"]) if line_ids else "add"

            if action == "add":
                cart = store.add_line(rng.choice(product_ids), rng.randint(1, 5))
            elif action == "update":
                cart = store.update_qty(rng.choice(line_ids), rng.randint(1, 5))
            else:
                cart = store.remove_line(rng.choice(line_ids))

            expected = round(sum(item["price"] * item["qty"] for item in cart["items"]), 2)
            assert cart["subtotal"] == pytest.approx(expected)
            assert cart["total"] == cart["subtotal"]
            assert cart["subtotal"] >= 0
            assert all(item["qty"] > 0 for item in cart["items"])


class TestConcurrentMutations:
    def test_concurrent_adds_get_unique_ids(self, store):
        errors = []

        def add_many():
            try:
                with storefront.domain_context():
                    for _ in range(5):
                        store.add_line("p1", 1)
            except Exception as exc:  # pragma: no cover - surfaced by the assertion below
                errors.append(exc)

        threads = [threading.Thread(target=add_many) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        ids = [item["id"] for item in store.snapshot()["items"]]
        assert sorted(ids, key=int) == [str(n) for n in range(1, 21)]
