"""Shopping Cart aggregate (CQRS) — the single shared cart behind the storefront.

Lines copy the product's name and price when they are added, so later
catalogue changes never reach lines already in the cart. Each line gets a
numeric public id from a counter owned by the cart itself; the counter
survives ``clear()`` so ids stay unique across checkouts.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartLineAdded,
    CartLineQuantityUpdated,
    CartLineRemoved,
)
from storefront.cart.totals import summarize
from storefront.domain import storefront

SHARED_CART_ID = "shared"


def validate_quantity(qty):
    """Quantities must be positive integers. Booleans and floats are rejected."""
    if isinstance(qty, bool) or not isinstance(qty, int) or qty <= 0:
        raise ValidationError({"qty": ["Quantity must be a positive integer"]})


@storefront.entity(part_of="ShoppingCart")
class CartLine:
    line_id = String(required=True, max_length=20)  # Public id, e.g. "1"
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    qty = Integer(required=True, min_value=1)

    def to_snapshot(self):
        """Line in its wire shape, as stored on a receipt."""
        return {
            "id": str(self.line_id),
            "productId": str(self.product_id),
            "name": self.name,
            "price": self.price,
            "qty": self.qty,
        }


@storefront.aggregate
class ShoppingCart:
    items = HasMany(CartLine)
    next_line_id = Integer(default=1, min_value=1)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, cart_id=SHARED_CART_ID):
        now = datetime.now(UTC)
        return cls(
            id=cart_id,
            next_line_id=1,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def lines(self):
        """Lines in insertion order (ids are handed out monotonically)."""
        return sorted(self.items, key=lambda line: int(line.line_id))

    def get_line(self, line_id):
        line = next((i for i in self.items if str(i.line_id) == str(line_id)), None)
        if line is None:
            raise ObjectNotFoundError({"line_id": [f"Cart item {line_id} not found"]})
        return line

    def summary(self):
        return summarize(self.lines)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_line(self, product, qty):
        """Add ``qty`` of ``product`` as a new line and return the line's id.

        Adding a product that is already in the cart creates a second line.
        """
        validate_quantity(qty)

        line_id = str(self.next_line_id)
        self.add_items(
            CartLine(
                line_id=line_id,
                product_id=product.product_id,
                name=product.name,
                price=product.price,
                qty=qty,
            )
        )
        self.next_line_id += 1
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                line_id=line_id,
                product_id=str(product.product_id),
                price=product.price,
                qty=qty,
            )
        )
        return line_id

    def update_line_quantity(self, line_id, qty):
        validate_quantity(qty)

        line = self.get_line(line_id)
        previous_qty = line.qty
        line.qty = qty
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineQuantityUpdated(
                cart_id=str(self.id),
                line_id=str(line_id),
                previous_qty=previous_qty,
                new_qty=qty,
            )
        )

    def remove_line(self, line_id):
        line = self.get_line(line_id)
        self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartLineRemoved(cart_id=str(self.id), line_id=str(line_id)))

    def clear(self):
        """Drop every line. The id counter is left untouched."""
        line_count = self._drop_lines()
        self.raise_(CartCleared(cart_id=str(self.id), line_count=line_count))

    def check_out(self, total, line_count):
        """Empty the cart after a checkout of ``line_count`` lines worth ``total``.

        The counts describe what was purchased, which may be a client-supplied
        list rather than this cart's own lines.
        """
        self._drop_lines()
        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                line_count=line_count,
                total=total,
                checked_out_at=self.updated_at,
            )
        )

    def _drop_lines(self):
        lines = list(self.items)
        for line in lines:
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)
        return len(lines)


def load_cart(cart_id):
    """Fetch the cart from its repository, or start a fresh one if it was never saved."""
    repo = current_domain.repository_for(ShoppingCart)
    try:
        return repo.get(cart_id)
    except ObjectNotFoundError:
        return ShoppingCart.create(cart_id)
