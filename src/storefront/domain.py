"""Storefront bounded context — product catalogue, shared shopping cart and checkout.

The catalogue is a fixed set of value objects. The cart is a CQRS aggregate
held in the memory provider; checkout turns its lines into a receipt and
empties it.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
