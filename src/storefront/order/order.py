"""Order and OrderItem aggregates.

An order is created from a user's cart at checkout and is immutable from
then on, apart from its status. Each order item carries the product price
as it was at checkout time.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.shared.money import is_amount
from storefront.utils.sequence import next_id


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Statuses an order may be placed with
INITIAL_STATUSES = {OrderStatus.PENDING, OrderStatus.COMPLETED}


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships to, captured at checkout.

    Later profile changes on the User do not touch it.
    """

    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(required=True, max_length=20)


@storefront.aggregate
class Order:
    id = Integer(identifier=True)
    user_id = Integer(required=True)
    total = String(required=True, max_length=20)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    shipping_address = ValueObject(ShippingAddress)
    payment_intent_id = String(max_length=255)
    created_at = DateTime()

    @invariant.post
    def total_must_be_an_amount(self):
        if not is_amount(self.total):
            raise ValidationError({"total": [f"Invalid order total: {self.total!r}"]})

    @classmethod
    def place(cls, user_id, total, status, shipping_address, payment_intent_id=None):
        if status not in {initial.value for initial in INITIAL_STATUSES}:
            raise ValidationError({"status": [f"An order cannot be placed as {status}"]})

        return cls(
            id=next_id("orders"),
            user_id=user_id,
            total=total,
            status=status,
            shipping_address=shipping_address,
            payment_intent_id=payment_intent_id,
            created_at=datetime.now(UTC),
        )

    def change_status(self, target_status: OrderStatus):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})
        self.status = target_status.value


@storefront.aggregate
class OrderItem:
    """One line of an order: product, quantity and the price paid per unit."""

    id = Integer(identifier=True)
    order_id = Integer(required=True)
    product_id = Integer(required=True)
    quantity = Integer(required=True, min_value=1)
    price = String(required=True, max_length=20)

    @classmethod
    def snapshot(cls, order_id, product, quantity):
        """Record ``quantity`` units of ``product`` at its current price."""
        return cls(
            id=next_id("order_items"),
            order_id=order_id,
            product_id=product.id,
            quantity=quantity,
            price=product.price,
        )
