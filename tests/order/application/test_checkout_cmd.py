"""Application tests for checkout — the cart to order transition."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.cart.cart_item import CartItem
from storefront.cart.items import AddToCart
from storefront.catalogue.management import RemoveProduct, UpdateProductPrice
from storefront.exceptions import EmptyCartError, MissingProductError
from storefront.order.checkout import PlaceOrder
from storefront.order.history import order_for_user, orders_for_user
from storefront.order.order import Order, OrderItem

_ADDRESS = json.dumps(
    {
        "first_name": "Jane",
        "last_name": "Doe",
        "address": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "12345",
    }
)


def _add(user_id, product_id=1, quantity=1):
    current_domain.process(AddToCart(user_id=user_id, product_id=product_id, quantity=quantity), asynchronous=False)


def _checkout(user_id, total="449.97", status="pending", **overrides):
    command = PlaceOrder(user_id=user_id, total=total, status=status, shipping_address=_ADDRESS, **overrides)
    return current_domain.process(command, asynchronous=False)


def _all(aggregate):
    return current_domain.repository_for(aggregate)._dao.query.all().items


class TestPlaceOrder:
    def test_order_matches_cart(self, user_id):
        _add(user_id, product_id=1, quantity=1)
        _add(user_id, product_id=1, quantity=2)
        _add(user_id, product_id=3, quantity=1)

        order_id = _checkout(user_id, total="539.96")

        details = order_for_user(order_id, user_id)
        assert details.order.total == "539.96"
        assert details.order.status == "pending"
        assert details.order.shipping_address.zip_code == "12345"
        assert [(line.item.product_id, line.item.quantity, line.item.price) for line in details.lines] == [
            (1, 3, "149.99"),
            (3, 1, "89.99"),
        ]

    def test_cart_is_empty_after_checkout(self, user_id):
        _add(user_id)
        _checkout(user_id)
        assert current_domain.repository_for(CartItem).for_user(user_id) == []

    def test_other_carts_untouched(self, user_id):
        _add(user_id)
        _add(user_id + 100, product_id=2)
        _checkout(user_id)
        assert len(current_domain.repository_for(CartItem).for_user(user_id + 100)) == 1

    def test_total_is_normalised(self, user_id):
        _add(user_id)
        order_id = _checkout(user_id, total="149.9")
        assert current_domain.repository_for(Order).get(order_id).total == "149.90"

    def test_payment_intent_reference_is_stored(self, user_id):
        _add(user_id)
        order_id = _checkout(user_id, payment_intent_id="pi_123")
        assert current_domain.repository_for(Order).get(order_id).payment_intent_id == "pi_123"

    def test_payment_intent_cannot_back_two_orders(self, user_id):
        _add(user_id)
        _checkout(user_id, payment_intent_id="pi_once")
        _add(user_id)

        with pytest.raises(ValidationError) as exc:
            _checkout(user_id, payment_intent_id="pi_once")

        assert exc.value.messages == {"payment_intent_id": ["Payment has already been used for another order"]}
        assert len(_all(Order)) == 1
        assert len(current_domain.repository_for(CartItem).for_user(user_id)) == 1

    def test_order_ids_are_sequential(self, user_id):
        _add(user_id)
        first = _checkout(user_id)
        _add(user_id)
        second = _checkout(user_id)
        assert second == first + 1


class TestPriceSnapshot:
    def test_later_price_change_does_not_touch_order(self, user_id):
        _add(user_id, product_id=1, quantity=2)
        order_id = _checkout(user_id)

        current_domain.process(UpdateProductPrice(product_id=1, price="99.00"), asynchronous=False)

        (line,) = order_for_user(order_id, user_id).lines
        assert line.item.price == "149.99"
        assert line.product.price == "99.00"

    def test_checkout_uses_price_at_checkout_time(self, user_id):
        _add(user_id, product_id=1)
        current_domain.process(UpdateProductPrice(product_id=1, price="120.00"), asynchronous=False)
        order_id = _checkout(user_id, total="120.00")
        (line,) = order_for_user(order_id, user_id).lines
        assert line.item.price == "120.00"


class TestCheckoutFailures:
    def test_empty_cart(self, user_id):
        with pytest.raises(EmptyCartError) as exc:
            _checkout(user_id)
        assert exc.value.messages == {"cart": ["Cart is empty"]}
        assert _all(Order) == []

    def test_missing_product_writes_nothing(self, user_id):
        _add(user_id, product_id=1)
        _add(user_id, product_id=8)
        current_domain.process(RemoveProduct(product_id=8), asynchronous=False)

        with pytest.raises(MissingProductError):
            _checkout(user_id)

        assert _all(Order) == []
        assert _all(OrderItem) == []
        assert len(current_domain.repository_for(CartItem).for_user(user_id)) == 2

    def test_invalid_status_writes_nothing(self, user_id):
        _add(user_id)
        with pytest.raises(ValidationError):
            _checkout(user_id, status="shipped")
        assert _all(Order) == []
        assert len(current_domain.repository_for(CartItem).for_user(user_id)) == 1

    def test_invalid_total_writes_nothing(self, user_id):
        _add(user_id)
        with pytest.raises(ValidationError):
            _checkout(user_id, total="-5")
        assert _all(Order) == []

    def test_incomplete_address_writes_nothing(self, user_id):
        _add(user_id)
        command = PlaceOrder(
            user_id=user_id,
            total="149.99",
            status="pending",
            shipping_address=json.dumps({"first_name": "Jane"}),
        )
        with pytest.raises(ValidationError):
            current_domain.process(command, asynchronous=False)
        assert _all(Order) == []
        assert len(current_domain.repository_for(CartItem).for_user(user_id)) == 1


class TestOrderHistory:
    def test_orders_oldest_first(self, user_id):
        _add(user_id, product_id=1)
        first = _checkout(user_id)
        _add(user_id, product_id=2)
        second = _checkout(user_id, total="299.99")

        assert [details.order.id for details in orders_for_user(user_id)] == [first, second]

    def test_foreign_order_is_invisible(self, user_id):
        _add(user_id)
        order_id = _checkout(user_id)
        assert order_for_user(order_id, user_id + 100) is None
        assert orders_for_user(user_id + 100) == []

    def test_unknown_order(self, user_id):
        assert order_for_user(999, user_id) is None
