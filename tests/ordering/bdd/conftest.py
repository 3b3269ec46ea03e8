"""Shared BDD fixtures and step definitions for the ordering domain."""

import pytest
from ordering.cart.cart import Cart
from ordering.cart.items import AddToCart
from ordering.order.checkout import Checkout
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then

ADDRESS = {"street": "KN 4 Ave", "city": "Kigali", "country": "Rwanda"}


@pytest.fixture()
def error():
    """Holds the exception raised by a When step, if any."""
    return {"exc": None}


@given("the marketplace has its sellers and products")
def _(marketplace):
    return marketplace


@given(parsers.cfparse('customer "{account_id}" has {quantity:d} of product "{product_id}" in the cart'))
def _(account_id, quantity, product_id):
    current_domain.process(
        AddToCart(account_id=account_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


@given(
    parsers.cfparse('customer "{account_id}" has placed an order for product "{product_id}"'),
    target_fixture="order",
)
def _(account_id, product_id):
    current_domain.process(AddToCart(account_id=account_id, product_id=product_id, quantity=1), asynchronous=False)
    order_id = current_domain.process(
        Checkout(account_id=account_id, shipping_address=ADDRESS, payment_method="MTN"),
        asynchronous=False,
    )
    return current_domain.repository_for(Order).get(order_id)


@then(parsers.cfparse('the cart of customer "{account_id}" is empty'))
def _(account_id):
    cart = current_domain.repository_for(Cart).for_account(account_id)
    assert cart is None or len(cart.lines) == 0


@then("no order exists")
def _():
    assert current_domain.repository_for(Order).every() == []
