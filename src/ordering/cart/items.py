"""Cart line management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String

from ordering.cart import store
from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.command(part_of="Cart")
class AddToCart:
    """Add a product to the caller's cart, creating the cart on first use.

    Without an account or token a fresh anonymous cart is created and its
    token handed back.
    """

    account_id = Identifier()
    cart_token = String(max_length=64)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="Cart")
class RemoveFromCart:
    account_id = Identifier()
    cart_token = String(max_length=64)
    product_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        identity = store.identity_from(command.account_id, command.cart_token)
        cart, token = store.get_or_create_cart(identity)
        store.add_line(cart, command.product_id, command.quantity)
        return {"cart_id": str(cart.id), "cart_token": token.value if token else None}

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        identity = store.identity_from(command.account_id, command.cart_token)
        cart = store.find_cart(identity)
        if cart is not None:
            store.remove_line(cart, command.product_id)
        return {"cart_id": str(cart.id) if cart else None, "cart_token": command.cart_token}
