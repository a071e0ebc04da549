"""Checkout — turn the cart into a receipt and empty it.

Lines come from the server-side cart unless the client supplies its own
list and client carts are trusted (``STOREFRONT_TRUST_CLIENT_CART``). A
supplied list is taken as-is: prices and quantities are not checked against
the catalogue. The cart is cleared either way.
"""

import json
from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart, load_cart
from storefront.cart.totals import order_total
from storefront.config import trust_client_cart
from storefront.domain import logger, storefront


@storefront.value_object
class Receipt:
    """Immutable record of a completed checkout. Returned once, never stored."""

    name: Text(sanitize=False)
    email: Text(sanitize=False)
    total: Float(required=True)
    timestamp: DateTime(required=True)
    items: Text(sanitize=False)  # JSON: snapshot of the purchased lines

    @property
    def lines(self):
        return json.loads(self.items) if self.items else []


@storefront.command(part_of="ShoppingCart")
class Checkout:
    cart_id = Identifier(required=True)
    name = Text(sanitize=False)
    email = Text(sanitize=False)
    cart_items = Text(sanitize=False)  # JSON: client-supplied list of lines, if any


def _client_lines(raw):
    lines = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(lines, list):
        raise ValidationError({"cart_items": ["Expected a list of cart lines"]})
    for line in lines:
        if not isinstance(line, dict):
            raise ValidationError({"cart_items": ["Each cart line must be an object"]})
    return lines


@storefront.command_handler(part_of=ShoppingCart)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        cart = load_cart(command.cart_id)

        if command.cart_items is not None and trust_client_cart():
            snapshot = _client_lines(command.cart_items)
            logger.warning(
                "Checkout using client-supplied cart lines",
                line_count=len(snapshot),
            )
        else:
            snapshot = [line.to_snapshot() for line in cart.lines]

        total = order_total(snapshot)
        timestamp = datetime.now(UTC)

        cart.check_out(total, len(snapshot))
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info(
            "Checkout completed",
            line_count=len(snapshot),
            total=total,
        )
        return Receipt(
            name=command.name or None,
            email=command.email or None,
            total=total,
            timestamp=timestamp,
            items=json.dumps(snapshot),
        )
