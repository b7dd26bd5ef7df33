"""Cart lines joined with their products."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.cart.cart_item import CartItem
from storefront.catalogue.product import Product
from storefront.exceptions import MissingProductError


@dataclass(frozen=True)
class CartLine:
    item: CartItem
    product: Product


def cart_lines(user_id) -> list[CartLine]:
    """The user's cart, oldest line first, each line with its product.

    Raises ``MissingProductError`` when a line points at a product that no
    longer exists.
    """
    products = current_domain.repository_for(Product)
    lines = []
    for item in current_domain.repository_for(CartItem).for_user(user_id):
        product = products.find(item.product_id)
        if product is None:
            raise MissingProductError(item.product_id, line_kind="cart")
        lines.append(CartLine(item=item, product=product))
    return lines
