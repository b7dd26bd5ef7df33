"""Tests for the payment gateway adapters and factory."""

import pytest
import stripe
from storefront.exceptions import PaymentGatewayError
from storefront.payments.gateway import get_gateway, reset_gateway, set_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.stripe_adapter import StripeGateway


class TestFakeGateway:
    def test_create_and_confirm(self):
        gateway = FakeGateway()
        intent = gateway.create_payment_intent(amount=44997, currency="usd", metadata={"userId": "1"})
        assert intent.status == "requires_payment_method"
        assert intent.client_secret.startswith(intent.intent_id)

        gateway.confirm(intent.intent_id)
        assert gateway.retrieve_payment_intent(intent.intent_id).succeeded

    def test_configured_failure(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False, failure_reason="Network down")
        with pytest.raises(PaymentGatewayError, match="Network down"):
            gateway.create_payment_intent(amount=100, currency="usd", metadata={})

    def test_unknown_intent(self):
        with pytest.raises(PaymentGatewayError):
            FakeGateway().retrieve_payment_intent("pi_missing")


class TestStripeGateway:
    def test_create_sends_minor_units(self, monkeypatch):
        calls = {}

        def fake_create(**kwargs):
            calls.update(kwargs)
            return stripe.PaymentIntent.construct_from(
                {
                    "id": "pi_1",
                    "object": "payment_intent",
                    "client_secret": "pi_1_secret",
                    "status": "requires_payment_method",
                    "amount": kwargs["amount"],
                    "currency": kwargs["currency"],
                    "metadata": kwargs["metadata"],
                },
                kwargs["api_key"],
            )

        monkeypatch.setattr(stripe.PaymentIntent, "create", fake_create)
        intent = StripeGateway(api_key="sk_test_123").create_payment_intent(
            amount=1999, currency="usd", metadata={"userId": "7"}
        )
        assert calls["api_key"] == "sk_test_123"
        assert calls["amount"] == 1999
        assert intent.client_secret == "pi_1_secret"
        assert intent.metadata == {"userId": "7"}

    def test_stripe_errors_are_translated(self, monkeypatch):
        def failing_create(**kwargs):
            raise stripe.StripeError("Invalid API Key provided")

        monkeypatch.setattr(stripe.PaymentIntent, "create", failing_create)
        with pytest.raises(PaymentGatewayError, match="Invalid API Key"):
            StripeGateway(api_key="sk_bad").create_payment_intent(amount=100, currency="usd", metadata={})

    def test_retrieve(self, monkeypatch):
        def fake_retrieve(intent_id, **kwargs):
            return stripe.PaymentIntent.construct_from(
                {
                    "id": intent_id,
                    "object": "payment_intent",
                    "client_secret": "pi_9_secret",
                    "status": "succeeded",
                    "amount": 500,
                    "currency": "usd",
                    "metadata": {"userId": "3"},
                },
                kwargs["api_key"],
            )

        monkeypatch.setattr(stripe.PaymentIntent, "retrieve", fake_retrieve)
        intent = StripeGateway(api_key="sk_test").retrieve_payment_intent("pi_9")
        assert intent.succeeded
        assert intent.amount == 500
        assert intent.metadata == {"userId": "3"}

    def test_intent_without_metadata(self, monkeypatch):
        def fake_retrieve(intent_id, **kwargs):
            return stripe.PaymentIntent.construct_from(
                {"id": intent_id, "object": "payment_intent", "status": "processing", "amount": 100, "currency": "usd"},
                kwargs["api_key"],
            )

        monkeypatch.setattr(stripe.PaymentIntent, "retrieve", fake_retrieve)
        intent = StripeGateway(api_key="sk_test").retrieve_payment_intent("pi_10")
        assert intent.metadata == {}
        assert intent.client_secret is None
        assert not intent.succeeded


class TestGatewayFactory:
    def test_unconfigured(self, monkeypatch):
        monkeypatch.delenv("PAYMENT_GATEWAY", raising=False)
        monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
        reset_gateway()
        assert get_gateway() is None

    def test_stripe_when_key_present(self, monkeypatch):
        monkeypatch.delenv("PAYMENT_GATEWAY", raising=False)
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_abc")
        reset_gateway()
        assert isinstance(get_gateway(), StripeGateway)

    def test_fake_by_name(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_GATEWAY", "fake")
        reset_gateway()
        assert isinstance(get_gateway(), FakeGateway)

    def test_override(self):
        gateway = FakeGateway()
        set_gateway(gateway)
        assert get_gateway() is gateway
