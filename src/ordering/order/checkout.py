"""Checkout: commands and handler for account and guest checkout."""

from protean import handle
from protean.fields import Dict, Identifier, String

from ordering.cart.cart import AccountIdentity, AnonymousIdentity, CartToken
from ordering.cart.store import find_cart
from ordering.domain import ordering
from ordering.errors import EmptyCart
from ordering.order import factory
from ordering.order.order import Order


@ordering.command(part_of="Order")
class Checkout:
    """Place an order from a signed-in customer's cart."""

    account_id = Identifier(required=True)
    shipping_address = Dict()
    payment_method = String(max_length=30)


@ordering.command(part_of="Order")
class GuestCheckout:
    """Place an order from an anonymous cart, identified by its token."""

    customer_name = String(max_length=255)
    customer_email = String(max_length=254)
    cart_token = String(max_length=64)
    shipping_address = Dict()
    payment_method = String(max_length=30)


@ordering.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        cart = find_cart(AccountIdentity(account_id=str(command.account_id)))
        order = factory.checkout(
            cart=cart,
            shipping_address=command.shipping_address,
            payment_method=command.payment_method,
            customer=factory.RegisteredCustomer(account_id=str(command.account_id)),
        )
        return str(order.id)

    @handle(GuestCheckout)
    def guest_checkout(self, command):
        customer = factory.validate_customer(
            factory.GuestCustomer(name=command.customer_name, email=command.customer_email)
        )
        if not command.cart_token:
            raise EmptyCart()

        cart = find_cart(AnonymousIdentity(token=CartToken(command.cart_token)))
        order = factory.checkout(
            cart=cart,
            shipping_address=command.shipping_address,
            payment_method=command.payment_method,
            customer=customer,
        )
        return str(order.id)
