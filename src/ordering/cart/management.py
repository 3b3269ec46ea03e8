"""Cart management: merging an anonymous cart into an account on sign-in."""

from protean import handle
from protean.fields import Identifier, String

from ordering.cart import store
from ordering.cart.cart import Cart, CartToken
from ordering.domain import ordering


@ordering.command(part_of="Cart")
class MergeAnonymousCart:
    account_id = Identifier(required=True)
    cart_token = String(required=True, max_length=64)


@ordering.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(MergeAnonymousCart)
    def merge_anonymous_cart(self, command):
        cart = store.merge_anonymous_cart(command.account_id, CartToken(command.cart_token))
        return {"cart_id": str(cart.id), "cart_token": None}
