"""Ordering bounded context: carts, orders, payment codes and seller visibility.

Handles the anonymous/authenticated shopping cart, checkout into immutable
priced orders, the order status flags (paid, delivered, admin-confirmed,
cancelled), payment-code issuance, and the tenant rules that decide which
orders a seller may see or change. Notifications are a best-effort side
channel driven by order events.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
