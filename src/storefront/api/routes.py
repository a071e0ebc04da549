"""FastAPI routes for the Storefront — catalogue, cart and checkout."""

from functools import cache

from fastapi import APIRouter, Depends

from storefront.api.schemas import (
    AddToCartRequest,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    ProductSchema,
    ReceiptSchema,
    UpdateCartQuantityRequest,
)
from storefront.cart.store import CartStore
from storefront.catalogue.product import list_products


@cache
def get_cart_store() -> CartStore:
    """The one store every client shares. Overridden in tests with per-test keys."""
    return CartStore()


router = APIRouter(prefix="/api", tags=["storefront"])


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@router.get("/products", response_model=list[ProductSchema])
async def get_products() -> list[ProductSchema]:
    return [ProductSchema(id=p.product_id, name=p.name, price=p.price) for p in list_products()]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@router.get("/cart", response_model=CartResponse)
async def get_cart(store: CartStore = Depends(get_cart_store)) -> CartResponse:
    return CartResponse(**store.snapshot())


@router.post("/cart", status_code=201, response_model=CartResponse)
async def add_cart_line(body: AddToCartRequest, store: CartStore = Depends(get_cart_store)) -> CartResponse:
    return CartResponse(**store.add_line(body.product_id, body.qty))


@router.put("/cart/{line_id}", response_model=CartResponse)
async def update_cart_line(
    line_id: str, body: UpdateCartQuantityRequest, store: CartStore = Depends(get_cart_store)
) -> CartResponse:
    return CartResponse(**store.update_qty(line_id, body.qty))


@router.delete("/cart/{line_id}", response_model=CartResponse)
async def remove_cart_line(line_id: str, store: CartStore = Depends(get_cart_store)) -> CartResponse:
    return CartResponse(**store.remove_line(line_id))


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(
    body: CheckoutRequest | None = None, store: CartStore = Depends(get_cart_store)
) -> CheckoutResponse:
    body = body or CheckoutRequest()
    receipt = store.checkout(name=body.name, email=body.email, cart_items=body.cart_items)
    return CheckoutResponse(
        receipt=ReceiptSchema(
            name=receipt.name,
            email=receipt.email,
            total=receipt.total,
            timestamp=receipt.timestamp,
            items=receipt.lines,
        )
    )
