"""Cart totals — derived money figures, recomputed on every read.

Amounts are summed as decimals and rounded to cents before they leave this
module, so ``9.99 x 3`` is reported as ``29.97``.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean.exceptions import ValidationError

CENTS = Decimal("0.01")


def to_money(value, field="price") -> Decimal:
    """Coerce a price-like value to a finite ``Decimal``. ``None`` counts as zero."""
    try:
        amount = Decimal(str(value if value is not None else 0))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError({field: [f"Not a number: {value!r}"]}) from exc
    if not amount.is_finite():
        raise ValidationError({field: [f"Not a number: {value!r}"]})
    return amount


def line_total(price, qty) -> Decimal:
    return (to_money(price) * to_money(qty, field="qty")).quantize(CENTS, rounding=ROUND_HALF_UP)


def summarize(lines) -> dict:
    """Compute the cart view for ``lines`` (``CartLine`` entities, in display order).

    Returns ``{"items": [...], "subtotal": float, "total": float}``; no tax,
    shipping or discounts are modelled, so ``total == subtotal``.
    """
    items = []
    subtotal = Decimal("0")
    for line in lines:
        total = line_total(line.price, line.qty)
        subtotal += total
        items.append(
            {
                "id": str(line.line_id),
                "product_id": str(line.product_id),
                "name": line.name,
                "price": line.price,
                "qty": line.qty,
                "line_total": float(total),
            }
        )

    subtotal = subtotal.quantize(CENTS, rounding=ROUND_HALF_UP)
    return {"items": items, "subtotal": float(subtotal), "total": float(subtotal)}


def coerce_amount(value) -> Decimal:
    """Lenient number coercion for client-supplied checkout lines.

    Booleans count as 1 and 0, numeric strings are parsed, and anything else
    that is not a finite number counts as zero.
    """
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip() or 0)
        except InvalidOperation:
            return Decimal("0")
        if amount.is_finite():
            return amount
    return Decimal("0")


def order_total(snapshot: list[dict]) -> float:
    """Total of a checkout snapshot — dicts carrying ``price`` and ``qty``.

    Snapshot lines may come straight from the client, so amounts are coerced
    with ``coerce_amount`` rather than validated.
    """
    total = sum(
        (coerce_amount(line.get("price")) * coerce_amount(line.get("qty")) for line in snapshot),
        Decimal("0"),
    )
    return float(total.quantize(CENTS, rounding=ROUND_HALF_UP))
