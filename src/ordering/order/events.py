"""Domain events for the Order aggregate.

Each effective status change raises exactly one event. Events carry the
customer reference (account id, or guest name and email) so notification
handlers can address the buyer without reloading the order.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A new order was created from a cart or by an operator."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    account_id = Identifier()
    guest_name = String()
    guest_email = String()
    line_count = Integer(required=True)
    total = Float(required=True)
    currency = String(required=True)
    payment_method = String(required=True)
    placed_by = Identifier()
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderMarkedPaid:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    account_id = Identifier()
    guest_email = String()
    paid_at = DateTime(required=True)
    actor_id = Identifier()


@ordering.event(part_of="Order")
class OrderMarkedDelivered:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    account_id = Identifier()
    guest_email = String()
    delivered_at = DateTime(required=True)
    actor_id = Identifier()


@ordering.event(part_of="Order")
class PaymentConfirmedByAdmin:
    """An administrator (or the owning seller) confirmed the payment was received."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    account_id = Identifier()
    guest_email = String()
    confirmed_at = DateTime(required=True)
    actor_id = Identifier()


@ordering.event(part_of="Order")
class PaymentConfirmedByCustomer:
    """The buyer reported having paid using the issued payment code."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    account_id = Identifier()
    guest_email = String()
    confirmed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentCodeIssued:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    account_id = Identifier()
    guest_email = String()
    payment_code = String(required=True)
    total = Float(required=True)
    currency = String(required=True)
    issued_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    account_id = Identifier()
    guest_email = String()
    cancelled_at = DateTime(required=True)
    cancelled_by = Identifier()
