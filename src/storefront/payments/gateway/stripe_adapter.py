"""Stripe payment gateway adapter, backed by the stripe-python SDK."""

import stripe

from storefront.exceptions import PaymentGatewayError
from storefront.payments.gateway.port import PaymentGateway, PaymentIntentResult


def _to_result(intent: stripe.PaymentIntent) -> PaymentIntentResult:
    # StripeObject is not a dict; read fields as attributes
    metadata = getattr(intent, "metadata", None)
    return PaymentIntentResult(
        intent_id=intent.id,
        client_secret=getattr(intent, "client_secret", None),
        status=intent.status,
        amount=intent.amount,
        currency=intent.currency,
        metadata=metadata.to_dict() if metadata is not None else {},
    )


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntentResult:
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.api_key,
                amount=amount,
                currency=currency,
                metadata=metadata,
            )
        except stripe.StripeError as exc:
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc
        return _to_result(intent)

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntentResult:
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self.api_key)
        except stripe.StripeError as exc:
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc
        return _to_result(intent)
