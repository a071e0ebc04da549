"""Storefront API package."""

from storefront.api.errors import register_exception_handlers
from storefront.api.routes import get_cart_store, router

__all__ = ["router", "get_cart_store", "register_exception_handlers"]
