"""Order factory: turns a cart, or an operator's line list, into an order.

Both paths price lines at the product's live price, apply the same
discount and delivery rules and allocate a fresh order number. Validation
happens before anything is written, so a rejected request leaves no order
row and an untouched cart.
"""

from dataclasses import dataclass
from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.access.actor import Actor, Admin, Seller, account_id_of
from ordering.access.visibility import require_active_seller
from ordering.accounts.account import Account
from ordering.cart import store
from ordering.cart.cart import Cart
from ordering.catalogue.product import Product
from ordering.errors import EmptyCart, Forbidden, InvalidArgument, NotFound
from ordering.order.numbering import next_order_number
from ordering.order.order import Order
from ordering.order.pricing import PricedLine, PricingSettings, parse_payment_method, quote
from ordering.utils.logging import get_logger

logger = get_logger(__name__)

_REQUIRED_ADDRESS_FIELDS = ("street", "city", "country")
_ADDRESS_FIELDS = ("street", "city", "district", "postal_code", "country", "phone")


@dataclass(frozen=True)
class RegisteredCustomer:
    account_id: str


@dataclass(frozen=True)
class GuestCustomer:
    name: str | None
    email: str | None


Customer = RegisteredCustomer | GuestCustomer


def _is_plausible_email(email: str) -> bool:
    if any(ch.isspace() for ch in email) or email.count("@") != 1:
        return False
    local, domain = email.split("@")
    return bool(local) and "." in domain and not domain.startswith(".") and not domain.endswith(".")


def validate_customer(customer: Customer) -> Customer:
    if isinstance(customer, RegisteredCustomer):
        if not customer.account_id:
            raise InvalidArgument({"customer": ["An account id is required"]})
        try:
            current_domain.repository_for(Account).get(str(customer.account_id))
        except ObjectNotFoundError:
            raise NotFound({"customer_account_id": [f"Account {customer.account_id} does not exist"]}) from None
        return customer

    email = (customer.email or "").strip()
    if not email:
        raise InvalidArgument({"customer_email": ["Guest orders require an email address"]})
    if not _is_plausible_email(email):
        raise InvalidArgument({"customer_email": [f"Invalid email address: {email!r}"]})
    return GuestCustomer(name=(customer.name or "").strip() or None, email=email)


def validate_address(address) -> dict:
    """Keep known address fields and insist on street, city and country."""
    if not isinstance(address, dict):
        raise InvalidArgument({"shipping_address": ["A shipping address is required"]})

    cleaned = {key: str(address[key]).strip() for key in _ADDRESS_FIELDS if address.get(key) not in (None, "")}
    missing = [key for key in _REQUIRED_ADDRESS_FIELDS if not cleaned.get(key)]
    if missing:
        raise InvalidArgument({"shipping_address": [f"Missing {', '.join(missing)}"]})
    return cleaned


def _price_lines(requested: list[tuple[str, int]]) -> tuple[list[PricedLine], list[Product]]:
    products_repo = current_domain.repository_for(Product)
    priced, products = [], []
    for product_id, quantity in requested:
        if quantity is None or quantity <= 0:
            raise InvalidArgument({"quantity": [f"Quantity for product {product_id} must be a positive number"]})
        try:
            product = products_repo.get(str(product_id))
        except ObjectNotFoundError:
            raise NotFound({"product_id": [f"Product {product_id} does not exist"]}) from None

        products.append(product)
        priced.append(
            PricedLine(
                product_id=str(product.id),
                product_name=product.name,
                quantity=quantity,
                unit_price=Decimal(str(product.price)),
            )
        )
    return priced, products


def _build_order(lines, customer: Customer, shipping_address: dict, payment_method, placed_by=None) -> Order:
    repo = current_domain.repository_for(Order)
    number = next_order_number(lambda candidate: repo.by_number(candidate) is not None)
    customer_fields = (
        {"account_id": customer.account_id}
        if isinstance(customer, RegisteredCustomer)
        else {"guest_name": customer.name, "guest_email": customer.email}
    )
    order = Order.place(
        order_number=number,
        lines=lines,
        quote=quote(lines, payment_method, PricingSettings.from_env()),
        payment_method=payment_method,
        shipping_address=shipping_address,
        placed_by=placed_by,
        **customer_fields,
    )
    repo.add(order)
    return order


def checkout(cart: Cart | None, shipping_address, payment_method, customer: Customer) -> Order:
    """Place an order for everything in ``cart`` and empty the cart."""
    customer = validate_customer(customer)
    address = validate_address(shipping_address)
    method = parse_payment_method(payment_method)

    if cart is None or not cart.lines:
        raise EmptyCart()

    lines, _ = _price_lines([(line.product_id, line.quantity) for line in cart.lines])
    order = _build_order(lines, customer, address, method)
    store.clear(cart)

    logger.info(
        "order_placed",
        order_id=str(order.id),
        order_number=order.order_number,
        total=order.pricing.total,
        guest=order.is_guest_order,
    )
    return order


def create_order_as_operator(actor: Actor, lines: list[dict], customer: Customer, shipping_address, payment_method) -> Order:
    """Place an order on a customer's behalf, as an admin or an active seller.

    A seller may only sell their own products.
    """
    if not isinstance(actor, Admin | Seller):
        raise Forbidden({"actor": ["Only administrators and sellers can create orders for customers"]})
    require_active_seller(actor)

    customer = validate_customer(customer)
    address = validate_address(shipping_address)
    method = parse_payment_method(payment_method)
    if not lines:
        raise InvalidArgument({"lines": ["At least one line is required"]})

    requested = [(str(line.get("product_id")), line.get("quantity")) for line in lines]
    priced, products = _price_lines(requested)

    if isinstance(actor, Seller):
        foreign = [str(p.id) for p in products if str(p.owner_id) != actor.account_id]
        if foreign:
            raise Forbidden({"lines": [f"Products {', '.join(foreign)} belong to another seller"]})

    order = _build_order(priced, customer, address, method, placed_by=account_id_of(actor))
    logger.info(
        "order_created_by_operator",
        order_id=str(order.id),
        order_number=order.order_number,
        placed_by=order.placed_by,
    )
    return order
