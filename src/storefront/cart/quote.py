"""Price quote for a cart: subtotal, flat shipping, sales tax and total."""

from dataclasses import dataclass
from decimal import Decimal

from storefront.shared.money import quantize, to_decimal

TAX_RATE = Decimal("0.08")
SHIPPING_FEE = Decimal("9.99")


@dataclass(frozen=True)
class CartQuote:
    item_count: int
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


def quote(lines) -> CartQuote:
    """Quote a list of ``CartLine``s. An empty cart costs nothing, not even shipping."""
    subtotal = sum(
        (to_decimal(line.product.price) * line.item.quantity for line in lines),
        Decimal("0"),
    )
    shipping = SHIPPING_FEE if lines else Decimal("0")
    tax = quantize(subtotal * TAX_RATE)
    return CartQuote(
        item_count=sum(line.item.quantity for line in lines),
        subtotal=quantize(subtotal),
        shipping=quantize(shipping),
        tax=tax,
        total=quantize(subtotal + shipping + tax),
    )
