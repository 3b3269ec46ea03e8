"""Tenant visibility: which orders and products an actor may see or change.

Orders have no owner. A seller sees an order when at least one of its lines
references a product the seller owns, and then only through that line-level
containment. Mutations additionally require the seller to be Active, which
is checked before containment.
"""

from protean.utils.globals import current_domain

from ordering.access.actor import Actor, Admin, Customer, Seller
from ordering.catalogue.product import Product
from ordering.errors import Forbidden
from ordering.order.order import Order


def require_active_seller(actor: Actor) -> None:
    if isinstance(actor, Seller) and not actor.is_active:
        raise Forbidden({"seller": [f"Seller account is {actor.status}; only active sellers can do this"]})


def seller_product_ids(seller_id) -> set[str]:
    return {str(product.id) for product in current_domain.repository_for(Product).owned_by(seller_id)}


def order_contains_any(order: Order, product_ids: set[str]) -> bool:
    return any(str(line.product_id) in product_ids for line in order.lines)


def can_view_order(actor: Actor, order: Order) -> bool:
    if isinstance(actor, Admin):
        return True
    if isinstance(actor, Seller):
        return order_contains_any(order, seller_product_ids(actor.account_id))
    if isinstance(actor, Customer):
        return bool(order.account_id) and str(order.account_id) == actor.account_id
    return False


def ensure_can_view_order(actor: Actor, order: Order) -> Order:
    if not can_view_order(actor, order):
        raise Forbidden({"order": ["You do not have access to this order"]})
    return order


def ensure_can_mutate_order(actor: Actor, order: Order) -> Order:
    """Admins may change any order; active sellers only orders holding their products."""
    if isinstance(actor, Admin):
        return order
    if isinstance(actor, Seller):
        require_active_seller(actor)
        if order_contains_any(order, seller_product_ids(actor.account_id)):
            return order
        raise Forbidden({"order": ["This order contains none of your products"]})
    raise Forbidden({"actor": ["Only administrators and sellers can change an order's status"]})


def visible_orders(actor: Actor) -> list[Order]:
    repo = current_domain.repository_for(Order)
    if isinstance(actor, Admin):
        return repo.every()
    if isinstance(actor, Seller):
        owned = seller_product_ids(actor.account_id)
        if not owned:
            return []
        return [order for order in repo.every() if order_contains_any(order, owned)]
    if isinstance(actor, Customer):
        return repo.for_account(actor.account_id)
    raise Forbidden({"actor": ["Sign in to list orders"]})


def customer_orders(actor: Actor) -> list[Order]:
    if not isinstance(actor, Customer | Admin | Seller):
        raise Forbidden({"actor": ["Sign in to see your orders"]})
    return current_domain.repository_for(Order).for_account(actor.account_id)


def visible_products(actor: Actor) -> list[Product]:
    if isinstance(actor, Admin):
        return current_domain.repository_for(Product).every()
    if isinstance(actor, Seller):
        return current_domain.repository_for(Product).owned_by(actor.account_id)
    raise Forbidden({"actor": ["Only administrators and sellers can list products"]})


def ensure_can_mutate_product(actor: Actor, product: Product) -> Product:
    if isinstance(actor, Admin):
        return product
    if isinstance(actor, Seller):
        require_active_seller(actor)
        if str(product.owner_id) == actor.account_id:
            return product
        raise Forbidden({"product": ["You do not own this product"]})
    raise Forbidden({"actor": ["Only administrators and sellers can change products"]})
