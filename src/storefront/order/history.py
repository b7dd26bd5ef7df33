"""Order reads joined with their items and products."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.exceptions import MissingProductError
from storefront.order.order import Order, OrderItem


@dataclass(frozen=True)
class OrderLine:
    item: OrderItem
    product: Product


@dataclass(frozen=True)
class OrderDetails:
    order: Order
    lines: list[OrderLine]


def order_details(order: Order) -> OrderDetails:
    products = current_domain.repository_for(Product)
    lines = []
    for item in current_domain.repository_for(OrderItem).for_order(order.id):
        product = products.find(item.product_id)
        if product is None:
            raise MissingProductError(item.product_id, line_kind="order")
        lines.append(OrderLine(item=item, product=product))
    return OrderDetails(order=order, lines=lines)


def orders_for_user(user_id) -> list[OrderDetails]:
    """Every order of ``user_id``, oldest first, with items and products."""
    return [order_details(order) for order in current_domain.repository_for(Order).for_user(user_id)]


def order_for_user(order_id, user_id) -> OrderDetails | None:
    """The order ``order_id`` if it belongs to ``user_id``, else None."""
    order = current_domain.repository_for(Order).find(order_id)
    if order is None or order.user_id != user_id:
        return None
    return order_details(order)
