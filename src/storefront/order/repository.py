"""Repositories for the Order and OrderItem aggregates."""

from storefront.domain import storefront
from storefront.order.order import Order, OrderItem
from storefront.utils.queries import fetch_all


@storefront.repository(part_of=Order)
class OrderRepository:
    def find(self, order_id) -> Order | None:
        return self._dao.query.filter(id=order_id).all().first

    def for_user(self, user_id) -> list[Order]:
        """The user's orders, oldest first."""
        orders = fetch_all(self._dao.query.filter(user_id=user_id), "orders")
        return sorted(orders, key=lambda order: order.id)

    def paid_with(self, payment_intent_id) -> Order | None:
        """The order that already cites ``payment_intent_id``, if any."""
        return self._dao.query.filter(payment_intent_id=payment_intent_id).all().first


@storefront.repository(part_of=OrderItem)
class OrderItemRepository:
    def for_order(self, order_id) -> list[OrderItem]:
        items = fetch_all(self._dao.query.filter(order_id=order_id), "order items")
        return sorted(items, key=lambda item: item.id)
