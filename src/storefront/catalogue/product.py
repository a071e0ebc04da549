"""Product catalogue — a fixed, read-only list of products defined at startup."""

from functools import cache

from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, String

from storefront.domain import storefront

# (product_id, name, price)
CATALOGUE_ENTRIES = (
    ("p1", "Widget", 9.99),
    ("p2", "Gadget", 24.5),
    ("p3", "Gizmo", 14.25),
    ("p4", "Doohickey", 4.75),
    ("p5", "Thingamajig", 39.0),
    ("p6", "Whatchamacallit", 99.99),
)


@storefront.value_object
class Product:
    """Value object for a catalogue entry. Lines copy name and price from it at add-time."""

    product_id: String(required=True, max_length=50)
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)


@cache
def _catalogue() -> tuple[Product, ...]:
    return tuple(Product(product_id=product_id, name=name, price=price) for product_id, name, price in CATALOGUE_ENTRIES)


def list_products() -> list[Product]:
    return list(_catalogue())


def get_product(product_id) -> Product:
    product = next((p for p in _catalogue() if p.product_id == str(product_id)), None)
    if product is None:
        raise ObjectNotFoundError({"product_id": [f"Product {product_id} not found"]})
    return product
