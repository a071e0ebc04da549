"""Storefront load test scenarios.

Two journeys against the shared cart: a browsing shopper who adds, edits and
removes lines, and a buyer who goes all the way through checkout. Lines can
disappear under a user when another user checks out, so 404s on edit and
remove are expected and counted as successes.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_line_data, checkout_data, quantity_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CartState


class BrowseAndEditJourney(SequentialTaskSet):
    """List Products -> Add Line x2 -> Update Quantity -> Remove Line -> View Cart."""

    def on_start(self):
        self.state = CartState()

    @task
    def list_products(self):
        with self.client.get("/api/products", catch_response=True, name="GET /api/products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_line_1(self):
        self._add_line()

    @task
    def add_line_2(self):
        self._add_line()

    @task
    def update_quantity(self):
        if not self.state.line_ids:
            return
        with self.client.put(
            f"/api/cart/{self.state.line_ids[0]}",
            json=quantity_data(),
            catch_response=True,
            name="PUT /api/cart/{id}",
        ) as resp:
            if resp.status_code in (200, 404):
                resp.success()
            else:
                resp.failure(f"Update quantity failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def remove_line(self):
        if not self.state.line_ids:
            return
        line_id = self.state.line_ids.pop()
        with self.client.delete(f"/api/cart/{line_id}", catch_response=True, name="DELETE /api/cart/{id}") as resp:
            if resp.status_code in (200, 404):
                resp.success()
            else:
                resp.failure(f"Remove line failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        with self.client.get("/api/cart", catch_response=True, name="GET /api/cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()

    def _add_line(self):
        with self.client.post("/api/cart", json=cart_line_data(), catch_response=True, name="POST /api/cart") as resp:
            if resp.status_code == 201:
                items = resp.json()["items"]
                if items:
                    self.state.line_ids.append(items[-1]["id"])
            else:
                resp.failure(f"Add line failed: {resp.status_code} — {extract_error_detail(resp)}")


class CheckoutJourney(SequentialTaskSet):
    """Add Line -> Checkout -> Verify Receipt."""

    def on_start(self):
        self.state = CartState()

    @task
    def add_line(self):
        with self.client.post("/api/cart", json=cart_line_data(), catch_response=True, name="POST /api/cart") as resp:
            if resp.status_code != 201:
                resp.failure(f"Add line failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def checkout(self):
        with self.client.post(
            "/api/checkout",
            json=checkout_data(),
            catch_response=True,
            name="POST /api/checkout",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                return
            receipt = resp.json().get("receipt") or {}
            if "total" not in receipt or "timestamp" not in receipt:
                resp.failure(f"Checkout returned an incomplete receipt: {receipt}")
                return
            self.state.receipts += 1

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Mostly browsing, some buying."""

    wait_time = between(0.5, 2)
    tasks = {BrowseAndEditJourney: 3, CheckoutJourney: 1}
