"""Tests for the Order aggregate — placement, status state machine and item snapshots."""

import pytest
from protean.exceptions import ValidationError
from storefront.catalogue.product import Product
from storefront.order.order import Order, OrderItem, OrderStatus, ShippingAddress


def _address():
    return ShippingAddress(
        first_name="Jane",
        last_name="Doe",
        address="1 Main St",
        city="Springfield",
        state="IL",
        zip_code="12345",
    )


def _make_order(status="pending", total="449.97"):
    return Order.place(user_id=1, total=total, status=status, shipping_address=_address())


class TestOrderPlacement:
    def test_place_pending(self):
        order = _make_order()
        assert order.status == OrderStatus.PENDING.value
        assert order.shipping_address.city == "Springfield"
        assert order.created_at is not None

    def test_place_completed(self):
        assert _make_order(status="completed").status == "completed"

    @pytest.mark.parametrize("status", ["shipped", "cancelled", "bogus"])
    def test_cannot_place_with_other_status(self, status):
        with pytest.raises(ValidationError):
            _make_order(status=status)

    def test_total_must_be_an_amount(self):
        with pytest.raises(ValidationError):
            _make_order(total="a lot")

    def test_address_requires_zip(self):
        with pytest.raises(ValidationError):
            ShippingAddress(first_name="Jane", last_name="Doe", address="1 Main St", city="Springfield")


class TestOrderStateMachine:
    @pytest.mark.parametrize(
        ("start", "target"),
        [
            ("pending", OrderStatus.COMPLETED),
            ("pending", OrderStatus.CANCELLED),
            ("completed", OrderStatus.SHIPPED),
            ("completed", OrderStatus.CANCELLED),
        ],
    )
    def test_allowed_transitions(self, start, target):
        order = _make_order(status=start)
        order.change_status(target)
        assert order.status == target.value

    def test_pending_cannot_ship(self):
        order = _make_order()
        with pytest.raises(ValidationError) as exc:
            order.change_status(OrderStatus.SHIPPED)
        assert "Cannot transition from pending to shipped" in str(exc.value)

    @pytest.mark.parametrize("terminal", [OrderStatus.SHIPPED, OrderStatus.CANCELLED])
    def test_terminal_states(self, terminal):
        order = _make_order(status="completed")
        order.change_status(terminal)
        for target in OrderStatus:
            with pytest.raises(ValidationError):
                order.change_status(target)


class TestOrderItemSnapshot:
    def test_snapshot_copies_current_price(self):
        product = Product.create(name="Lamp", price="30.00")
        item = OrderItem.snapshot(order_id=7, product=product, quantity=2)
        product.change_price("45.00")
        assert item.price == "30.00"
        assert item.product_id == product.id
        assert item.quantity == 2
