"""Domain events for the ShoppingCart aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="ShoppingCart")
class CartLineAdded:
    """A product was added to the cart as a new line."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = String(required=True, max_length=20)
    product_id = Identifier(required=True)
    price = Float(required=True)
    qty = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartLineQuantityUpdated:
    """The quantity of a cart line was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = String(required=True, max_length=20)
    previous_qty = Integer(required=True)
    new_qty = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartLineRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = String(required=True, max_length=20)


@storefront.event(part_of="ShoppingCart")
class CartCleared:
    """Every line was dropped from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_count = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartCheckedOut:
    """The cart was checked out and emptied."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_count = Integer(required=True)
    total = Float(required=True)
    checked_out_at = DateTime(required=True)
