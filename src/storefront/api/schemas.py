"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. The wire format is camelCase.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductSchema(CamelModel):
    id: str
    name: str
    price: float


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(CamelModel):
    product_id: str = Field(min_length=1)
    qty: int = Field(gt=0, strict=True)

    model_config = ConfigDict(json_schema_extra={"examples": [{"productId": "p1", "qty": 2}]})


class UpdateCartQuantityRequest(CamelModel):
    qty: int = Field(gt=0, strict=True)


class CheckoutRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    # Anything other than a list falls back to the server-side cart
    cart_items: Any = None

    model_config = ConfigDict(json_schema_extra={"examples": [{"name": "Jane", "email": "jane@example.com"}]})


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartLineSchema(CamelModel):
    id: str
    product_id: str
    name: str
    price: float
    qty: int
    line_total: float


class CartResponse(CamelModel):
    items: list[CartLineSchema] = []
    subtotal: float = 0.0
    total: float = 0.0


class ReceiptSchema(CamelModel):
    name: str | None = None
    email: str | None = None
    total: float
    timestamp: datetime
    items: list[dict[str, Any]] = []


class CheckoutResponse(CamelModel):
    receipt: ReceiptSchema


class ErrorResponse(CamelModel):
    error: str
