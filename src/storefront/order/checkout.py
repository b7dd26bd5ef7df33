"""Checkout — turns a user's cart into an order.

The whole conversion runs in the handler's unit of work: the order header,
one price-snapshotted item per cart line and the emptied cart are committed
together or not at all. Every cart line is resolved against the catalogue
before the first write.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart_item import CartItem
from storefront.cart.lines import cart_lines
from storefront.cart.quote import quote
from storefront.domain import logger, storefront
from storefront.exceptions import EmptyCartError
from storefront.order.order import Order, OrderItem, ShippingAddress
from storefront.shared.money import format_amount, is_amount, to_decimal


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Integer(required=True)
    total = String(required=True, max_length=20)
    status = String(required=True, max_length=20)
    shipping_address = Text(required=True, sanitize=False)  # JSON: address dict
    payment_intent_id = String(max_length=255)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = cart_lines(command.user_id)
        if not lines:
            raise EmptyCartError(command.user_id)

        if not is_amount(command.total):
            raise ValidationError({"total": [f"Invalid order total: {command.total!r}"]})
        total = format_amount(command.total)

        if command.payment_intent_id and current_domain.repository_for(Order).paid_with(command.payment_intent_id):
            raise ValidationError({"payment_intent_id": ["Payment has already been used for another order"]})

        server_quote = quote(lines)
        if to_decimal(total) != server_quote.total:
            logger.warning(
                "order_total_mismatch",
                user_id=command.user_id,
                submitted_total=total,
                quoted_total=format_amount(server_quote.total),
            )

        order = Order.place(
            user_id=command.user_id,
            total=total,
            status=command.status,
            shipping_address=ShippingAddress(**json.loads(command.shipping_address)),
            payment_intent_id=command.payment_intent_id,
        )
        current_domain.repository_for(Order).add(order)

        item_repo = current_domain.repository_for(OrderItem)
        for line in lines:
            item_repo.add(OrderItem.snapshot(order.id, line.product, line.item.quantity))

        current_domain.repository_for(CartItem).clear(command.user_id)

        logger.info(
            "order_placed",
            order_id=order.id,
            user_id=command.user_id,
            total=total,
            item_count=len(lines),
        )
        return order.id
