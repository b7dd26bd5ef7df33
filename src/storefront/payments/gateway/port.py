"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement, so
FakeGateway (dev/test) and StripeGateway (production) are interchangeable.
Amounts cross this boundary in minor units (cents).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PaymentIntentResult:
    """A payment intent as reported by the gateway."""

    intent_id: str
    client_secret: str | None
    status: str
    amount: int
    currency: str
    metadata: dict = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"


class PaymentGateway(ABC):
    """Abstract payment gateway interface.

    Adapters raise ``PaymentGatewayError`` when the gateway cannot be reached
    or rejects a call.
    """

    @abstractmethod
    def create_payment_intent(self, amount: int, currency: str, metadata: dict) -> PaymentIntentResult:
        """Create a payment intent for ``amount`` minor units."""
        ...

    @abstractmethod
    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntentResult:
        """Look up an existing payment intent."""
        ...
