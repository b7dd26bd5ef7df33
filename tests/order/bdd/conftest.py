"""Shared BDD fixtures and step definitions for checkout scenarios."""

import pytest
from pytest_bdd import given, parsers, then


@pytest.fixture()
def response():
    """Holds the last HTTP response of a scenario."""
    return {}


@given("I am signed in as a new shopper")
def signed_in_shopper(signed_in):
    return signed_in


@given(parsers.cfparse("I add product {product_id:d} to my cart with quantity {quantity:d}"))
def add_product(signed_in, product_id, quantity):
    response = signed_in.post("/api/cart", json={"productId": product_id, "quantity": quantity})
    assert response.status_code == 200


@then(parsers.cfparse("the response status is {status:d}"))
def response_status(response, status):
    assert response["last"].status_code == status


@then("my cart is empty")
def cart_is_empty(signed_in):
    assert signed_in.get("/api/cart").json() == []
