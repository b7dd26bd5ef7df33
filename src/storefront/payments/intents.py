"""Payment intents: creating one for the card form, and confirming it at checkout.

Both calls are blocking network I/O against the gateway. Callers on the
event loop run them in the threadpool.
"""

from decimal import Decimal

from protean.exceptions import ValidationError

from storefront.domain import logger
from storefront.exceptions import PaymentGatewayError, PaymentNotConfiguredError
from storefront.payments.gateway import get_gateway
from storefront.shared.money import is_amount, to_minor_units

MINIMUM_CHARGE = Decimal("0.50")


def _gateway():
    gateway = get_gateway()
    if gateway is None:
        raise PaymentNotConfiguredError()
    return gateway


def create_payment_intent(user_id: int, amount: Decimal | None, currency: str = "usd") -> str:
    """Create an intent for ``amount`` (major units) and return its client secret."""
    if amount is None or amount < MINIMUM_CHARGE:
        raise ValidationError({"amount": ["Invalid amount"]})

    gateway = _gateway()
    try:
        intent = gateway.create_payment_intent(
            amount=to_minor_units(amount),
            currency=currency,
            metadata={"userId": str(user_id)},
        )
    except PaymentGatewayError as exc:
        logger.error("payment_intent_failed", user_id=user_id, error=str(exc))
        raise PaymentGatewayError(f"Error creating payment intent: {exc}") from exc

    logger.info(
        "payment_intent_created",
        user_id=user_id,
        intent_id=intent.intent_id,
        amount=intent.amount,
        currency=intent.currency,
    )
    return intent.client_secret


def confirm_payment(user_id: int, intent_id: str, total: str) -> None:
    """Make sure ``intent_id`` was paid by ``user_id``, for exactly ``total``, before an order is placed.

    Reuse of an intent across orders is rejected at checkout, where the
    stored orders are visible.
    """
    if not is_amount(total):
        raise ValidationError({"total": [f"Invalid order total: {total!r}"]})

    gateway = _gateway()
    try:
        intent = gateway.retrieve_payment_intent(intent_id)
    except PaymentGatewayError as exc:
        logger.error("payment_confirmation_failed", user_id=user_id, intent_id=intent_id, error=str(exc))
        raise PaymentGatewayError(f"Error confirming payment: {exc}") from exc

    if intent.metadata.get("userId") != str(user_id):
        raise ValidationError({"payment_intent_id": ["Payment intent does not belong to this user"]})
    if not intent.succeeded:
        logger.warning("payment_not_completed", user_id=user_id, intent_id=intent_id, status=intent.status)
        raise ValidationError({"payment_intent_id": ["Payment has not been completed"]})
    if intent.amount != to_minor_units(total):
        logger.warning(
            "payment_amount_mismatch",
            user_id=user_id,
            intent_id=intent_id,
            paid=intent.amount,
            expected=to_minor_units(total),
        )
        raise ValidationError({"payment_intent_id": ["Payment amount does not match the order total"]})
