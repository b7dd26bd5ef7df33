"""CartItem aggregate — one product line in a user's shopping cart."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer

from storefront.domain import storefront
from storefront.utils.sequence import next_id


@storefront.aggregate
class CartItem:
    """A (user, product) pair with a quantity.

    A user holds at most one line per product; adding the same product again
    increases the quantity of the existing line.
    """

    id: Integer(identifier=True)
    user_id: Integer(required=True)
    product_id: Integer(required=True)
    quantity: Integer(required=True, min_value=1)
    created_at: DateTime()

    @classmethod
    def create(cls, user_id, product_id, quantity):
        return cls(
            id=next_id("cart_items"),
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            created_at=datetime.now(UTC),
        )

    def increase(self, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self.quantity = self.quantity + quantity

    def set_quantity(self, quantity):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self.quantity = quantity
