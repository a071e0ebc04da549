"""Cart line management — commands and handler.

Every handler returns the recomputed cart view so callers never need a
second read after a mutation.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart, load_cart
from storefront.catalogue.product import get_product
from storefront.domain import logger, storefront


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    qty = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    qty = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    cart_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = get_product(command.product_id)

        cart = load_cart(command.cart_id)
        line_id = cart.add_line(product, command.qty)
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info(
            "Cart line added",
            line_id=line_id,
            product_id=product.product_id,
            qty=command.qty,
        )
        return cart.summary()

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = load_cart(command.cart_id)
        cart.update_line_quantity(command.line_id, command.qty)
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info(
            "Cart line quantity updated",
            line_id=str(command.line_id),
            qty=command.qty,
        )
        return cart.summary()

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = load_cart(command.cart_id)
        cart.remove_line(command.line_id)
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info("Cart line removed", line_id=str(command.line_id))
        return cart.summary()

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = load_cart(command.cart_id)
        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)

        logger.info("Cart cleared")
        return cart.summary()
