"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing (``PAYMENT_GATEWAY=fake``)
- StripeGateway for production (``STRIPE_SECRET_KEY``)

When neither is configured there is no gateway and payment calls fail with
``PaymentNotConfiguredError``.
"""

from storefront import config
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import PaymentGateway
from storefront.payments.gateway.stripe_adapter import StripeGateway

_current_gateway: PaymentGateway | None = None


def _configured_gateway() -> PaymentGateway | None:
    name = config.payment_gateway_name()
    if name == "fake":
        return FakeGateway()
    if name == "stripe" and config.stripe_secret_key():
        return StripeGateway(config.stripe_secret_key())
    return None


def get_gateway() -> PaymentGateway | None:
    """Return the current payment gateway, or None when payments are not configured."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _configured_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway | None) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to the configured gateway."""
    global _current_gateway
    _current_gateway = None
