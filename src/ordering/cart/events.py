"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartLineAdded:
    """A product was added to the cart, or its line quantity was increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartLineRemoved:
    """A product line was removed from the cart entirely."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="Cart")
class CartCleared:
    """Every line was removed, after checkout or payment settlement."""

    __version__ = 1

    cart_id = Identifier(required=True)
    lines_removed = Integer(required=True)


@ordering.event(part_of="Cart")
class CartsMerged:
    """An anonymous cart was folded into an account's cart on sign-in."""

    __version__ = 1

    cart_id = Identifier(required=True)
    source_cart_id = Identifier(required=True)
    lines_merged = Integer(required=True)
