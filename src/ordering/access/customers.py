"""Seller-facing read models built from line-level containment.

Everything here is scoped to the products the acting account owns, so an
administrator who lists products of their own sees the same views a seller
would.
"""

from collections import OrderedDict

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.access.actor import Actor, Admin, Seller
from ordering.access.visibility import order_contains_any, seller_product_ids
from ordering.accounts.account import Account
from ordering.errors import Forbidden
from ordering.order.order import Order


def _owner_id(actor: Actor) -> str:
    if not isinstance(actor, Seller | Admin):
        raise Forbidden({"actor": ["Only sellers can see seller views"]})
    return actor.account_id


def _orders_with(product_ids: set[str]) -> list[Order]:
    if not product_ids:
        return []
    return [order for order in current_domain.repository_for(Order).every() if order_contains_any(order, product_ids)]


def _customer_key(order: Order) -> str:
    if order.account_id:
        return f"account:{order.account_id}"
    return f"guest:{(order.guest_email or '').lower()}"


def seller_orders(actor: Actor) -> list[dict]:
    """Orders holding the seller's products, with only the seller's own lines."""
    owned = seller_product_ids(_owner_id(actor))
    views = []
    for order in _orders_with(owned):
        lines = [line for line in order.lines if str(line.product_id) in owned]
        views.append(
            {
                "order": order,
                "lines": lines,
                "seller_subtotal": sum(line.amount for line in lines),
            }
        )
    return views


def my_customers(actor: Actor) -> list[dict]:
    """Distinct buyers of the seller's products, with an order count each.

    Registered buyers are keyed by account id and guests by email, so a
    guest who later registers appears twice.
    """
    owned = seller_product_ids(_owner_id(actor))
    accounts = current_domain.repository_for(Account)
    customers: OrderedDict[str, dict] = OrderedDict()

    for order in _orders_with(owned):
        key = _customer_key(order)
        entry = customers.get(key)
        if entry is None:
            entry = {
                "customer_key": key,
                "account_id": order.account_id,
                "name": order.guest_name,
                "email": order.guest_email,
                "is_guest": order.is_guest_order,
                "order_count": 0,
                "last_order_at": order.created_at,
            }
            if order.account_id:
                try:
                    account = accounts.get(str(order.account_id))
                    entry["name"], entry["email"] = account.name, account.email
                except ObjectNotFoundError:
                    pass  # account not synchronised yet
            customers[key] = entry

        entry["order_count"] += 1
        if order.created_at and (entry["last_order_at"] is None or order.created_at > entry["last_order_at"]):
            entry["last_order_at"] = order.created_at

    return list(customers.values())


def seller_stats(actor: Actor) -> dict:
    owner_id = _owner_id(actor)
    owned = seller_product_ids(owner_id)
    orders = _orders_with(owned)

    revenue = sum(line.amount for order in orders for line in order.lines if str(line.product_id) in owned)
    return {
        "total_products": len(owned),
        "total_orders": len(orders),
        "total_revenue": revenue,
        "total_customers": len({_customer_key(order) for order in orders}),
    }
