"""Runtime settings, read from the environment at call time."""

import os

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4000

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def get_host() -> str:
    return os.getenv("HOST", DEFAULT_HOST)


def get_port() -> int:
    """Port the HTTP server binds to. Falls back to the default on garbage input."""
    raw = os.getenv("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_PORT


def trust_client_cart() -> bool:
    """Whether checkout honours a cart-lines list supplied by the client."""
    return os.getenv("STOREFRONT_TRUST_CLIENT_CART", "true").strip().lower() in _TRUTHY
