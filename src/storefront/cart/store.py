"""Cart store — serialized entry point to one shopping cart.

A store is bound to a single cart key. The application runs one store on the
shared key, so every client sees and changes the same cart; separate keys give
fully independent carts, each with its own line-id counter.

Every operation runs the whole load, mutate and save cycle under the store's
lock, including the unit of work commit inside ``domain.process``, with
``cart_id`` bound to the log context.
"""

import json
import threading

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.cart.cart import SHARED_CART_ID, load_cart, validate_quantity
from storefront.cart.lines import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.checkout.checkout import Checkout
from storefront.utils.logging import cart_context


class CartStore:
    def __init__(self, cart_id: str = SHARED_CART_ID):
        self.cart_id = cart_id
        self._lock = threading.RLock()

    def add_line(self, product_id, qty) -> dict:
        validate_quantity(qty)
        if not product_id:
            raise ValidationError({"product_id": ["Product id is required"]})
        return self._process(AddToCart(cart_id=self.cart_id, product_id=product_id, qty=qty))

    def remove_line(self, line_id) -> dict:
        return self._process(RemoveFromCart(cart_id=self.cart_id, line_id=str(line_id)))

    def update_qty(self, line_id, qty) -> dict:
        validate_quantity(qty)
        return self._process(UpdateCartQuantity(cart_id=self.cart_id, line_id=str(line_id), qty=qty))

    def snapshot(self) -> dict:
        with self._lock:
            return load_cart(self.cart_id).summary()

    def clear(self) -> dict:
        return self._process(ClearCart(cart_id=self.cart_id))

    def checkout(self, name=None, email=None, cart_items=None):
        """Check out and return the ``Receipt``.

        ``cart_items`` is only forwarded when it is a list; anything else means
        "use the server-side cart".
        """
        command = Checkout(
            cart_id=self.cart_id,
            name=name,
            email=email,
            cart_items=json.dumps(cart_items) if isinstance(cart_items, list) else None,
        )
        return self._process(command)

    def _process(self, command):
        with self._lock, cart_context(self.cart_id):
            return current_domain.process(command, asynchronous=False)
