"""Cart store: lookup, lazy creation and line changes for carts.

These helpers run inside a domain context and are shared by the cart
command handlers, checkout and admin-confirm settlement.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.cart import AccountIdentity, AnonymousIdentity, Cart, CartIdentity, CartToken
from ordering.catalogue.product import Product
from ordering.errors import InvalidArgument, NotFound
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


def _carts():
    return current_domain.repository_for(Cart)


def _cart_for_token(token: CartToken) -> Cart:
    cart = _carts().for_token(token)
    if cart is None:
        raise NotFound({"cart_token": ["No cart exists for this token"]})
    return cart


def get_or_create_cart(identity: CartIdentity) -> tuple[Cart, CartToken | None]:
    """Return the cart for ``identity``, creating it when it does not exist yet.

    The second element is the anonymous cart's token (new or existing), or
    None for account carts. An unknown token never creates a second cart.
    """
    if isinstance(identity, AccountIdentity):
        cart = _carts().for_account(identity.account_id)
        if cart is None:
            cart = Cart.for_account(identity.account_id)
            _carts().add(cart)
            logger.info("cart_created", cart_id=str(cart.id), account_id=identity.account_id)
        return cart, None

    if identity.token is None:
        token = CartToken.generate()
        cart = Cart.anonymous(token)
        _carts().add(cart)
        logger.info("anonymous_cart_created", cart_id=str(cart.id))
        return cart, token

    return _cart_for_token(identity.token), identity.token


def find_cart(identity: CartIdentity) -> Cart | None:
    """Read-only lookup: an account without a cart yields None."""
    if isinstance(identity, AccountIdentity):
        return _carts().for_account(identity.account_id)
    if identity.token is None:
        return None
    return _cart_for_token(identity.token)


def add_line(cart: Cart, product_id, quantity) -> Cart:
    if quantity is None or quantity <= 0:
        raise InvalidArgument({"quantity": ["Quantity must be a positive number"]})
    try:
        current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise NotFound({"product_id": [f"Product {product_id} does not exist"]}) from None

    cart.add_line(product_id, quantity)
    _carts().add(cart)
    return cart


def remove_line(cart: Cart, product_id) -> Cart:
    if cart.remove_line(product_id):
        _carts().add(cart)
    return cart


def clear(cart: Cart) -> int:
    removed = cart.clear()
    if removed:
        _carts().add(cart)
    return removed


def clear_account_cart(account_id) -> int:
    """Empty an account's cart if it has one; used when payment is settled."""
    cart = _carts().for_account(account_id)
    if cart is None:
        return 0
    return clear(cart)


def merge_anonymous_cart(account_id, token: CartToken) -> Cart:
    """Fold the anonymous cart behind ``token`` into the account's cart."""
    source = _cart_for_token(token)
    target, _ = get_or_create_cart(AccountIdentity(account_id=str(account_id)))

    if source.lines:
        target.absorb(source)
        _carts().add(target)
        clear(source)
        logger.info("carts_merged", cart_id=str(target.id), source_cart_id=str(source.id))
    return target


def identity_from(account_id=None, token: str | None = None) -> CartIdentity:
    """Build a cart identity from request inputs; an account always wins."""
    if account_id:
        return AccountIdentity(account_id=str(account_id))
    return AnonymousIdentity(token=CartToken(token) if token else None)
