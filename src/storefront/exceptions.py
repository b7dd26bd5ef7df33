"""Storefront-specific failures.

Validation problems use Protean's ``ValidationError`` (and subclasses of it)
so they surface as 400 responses. The classes below cover the failures that
are not about the caller's input.
"""

from protean.exceptions import ValidationError


class EmptyCartError(ValidationError):
    """Checkout was attempted with no cart lines."""

    def __init__(self, user_id):
        super().__init__({"cart": ["Cart is empty"]})
        self.user_id = user_id


class MissingProductError(Exception):
    """A cart or order line references a product that is no longer stored.

    The line carries a price (or will need one) that can no longer be
    displayed or checked out, so the read fails instead of skipping it.
    """

    def __init__(self, product_id, line_kind="cart"):
        super().__init__(f"Product {product_id} referenced by a {line_kind} line does not exist")
        self.product_id = product_id
        self.line_kind = line_kind


class PaymentNotConfiguredError(Exception):
    """No payment gateway is configured for this process."""

    def __init__(self):
        super().__init__("Payment processing is not configured. Please contact support.")


class PaymentGatewayError(Exception):
    """The payment gateway could not be reached or rejected the call."""


class RowLimitExceededError(Exception):
    """A read matched more rows than a single query may return."""

    def __init__(self, what, limit):
        super().__init__(f"More than {limit} {what} matched a single read")
        self.what = what
        self.limit = limit
