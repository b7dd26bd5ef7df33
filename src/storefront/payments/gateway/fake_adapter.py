"""Configurable fake payment gateway for development and testing.

Simulates the payment-intent lifecycle without any external calls. Intents
start out waiting for a payment method; ``confirm()`` plays the part of the
shopper completing the card form.
"""

from uuid import uuid4

from storefront.exceptions import PaymentGatewayError
from storefront.payments.gateway.port import PaymentGateway, PaymentIntentResult


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []
        self.intents: dict[str, PaymentIntentResult] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntentResult:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount": amount,
                "currency": currency,
                "metadata": metadata,
            }
        )
        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        intent = PaymentIntentResult(
            intent_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:12]}",
            status="requires_payment_method",
            amount=amount,
            currency=currency,
            metadata=dict(metadata),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntentResult:
        self.calls.append({"method": "retrieve_payment_intent", "intent_id": intent_id})
        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)
        if intent_id not in self.intents:
            raise PaymentGatewayError(f"No such payment_intent: '{intent_id}'")
        return self.intents[intent_id]

    def confirm(self, intent_id: str) -> PaymentIntentResult:
        """Mark an intent as paid."""
        intent = self.intents[intent_id]
        confirmed = PaymentIntentResult(
            intent_id=intent.intent_id,
            client_secret=intent.client_secret,
            status="succeeded",
            amount=intent.amount,
            currency=intent.currency,
            metadata=intent.metadata,
        )
        self.intents[intent_id] = confirmed
        return confirmed
