"""Operator-placed orders: an admin or seller records an order for a customer."""

from protean import handle
from protean.fields import Dict, Identifier, List, String

from ordering.access.actor import resolve_actor
from ordering.domain import ordering
from ordering.errors import InvalidArgument
from ordering.order import factory
from ordering.order.order import Order


@ordering.command(part_of="Order")
class CreateOrderAsOperator:
    """Create an order without a cart.

    Exactly one of ``customer_account_id`` or the guest name and email
    identifies the buyer. ``lines`` is a list of ``{product_id, quantity}``.
    """

    actor_id = Identifier(required=True)
    customer_account_id = Identifier()
    guest_name = String(max_length=255)
    guest_email = String(max_length=254)
    lines = List(content_type=Dict)
    shipping_address = Dict()
    payment_method = String(max_length=30)


def customer_from(command) -> factory.Customer:
    if command.customer_account_id and (command.guest_email or command.guest_name):
        raise InvalidArgument({"customer": ["Give either a customer account or guest details, not both"]})
    if command.customer_account_id:
        return factory.RegisteredCustomer(account_id=str(command.customer_account_id))
    return factory.GuestCustomer(name=command.guest_name, email=command.guest_email)


@ordering.command_handler(part_of=Order)
class CreateOrderAsOperatorHandler:
    @handle(CreateOrderAsOperator)
    def create_order_as_operator(self, command):
        order = factory.create_order_as_operator(
            actor=resolve_actor(command.actor_id),
            lines=command.lines or [],
            customer=customer_from(command),
            shipping_address=command.shipping_address,
            payment_method=command.payment_method,
        )
        return str(order.id)
