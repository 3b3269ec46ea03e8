"""Cart aggregate: the mutable pre-purchase basket.

A cart belongs either to an account or to an anonymous token, never both.
It holds at most one line per product; adding a product again grows that
line. Removing a product deletes its line whatever the quantity.
"""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.cart.events import CartCleared, CartLineAdded, CartLineRemoved, CartsMerged
from ordering.domain import ordering
from ordering.errors import InvalidArgument


@dataclass(frozen=True)
class CartToken:
    """Opaque handle for an anonymous cart.

    The client must keep it: without the token an anonymous cart cannot be
    found again.
    """

    value: str

    @classmethod
    def generate(cls) -> "CartToken":
        return cls(value=secrets.token_urlsafe(24))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AccountIdentity:
    account_id: str


@dataclass(frozen=True)
class AnonymousIdentity:
    token: CartToken | None = None


CartIdentity = AccountIdentity | AnonymousIdentity


@ordering.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@ordering.aggregate
class Cart:
    account_id = Identifier()
    token = String(max_length=64)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def owned_by_account_or_token(self):
        if bool(self.account_id) == bool(self.token):
            raise ValidationError({"cart": ["A cart belongs to exactly one of an account or an anonymous token"]})

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def for_account(cls, account_id):
        now = datetime.now(UTC)
        return cls(account_id=str(account_id), created_at=now, updated_at=now)

    @classmethod
    def anonymous(cls, token: CartToken):
        now = datetime.now(UTC)
        return cls(token=token.value, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_anonymous(self) -> bool:
        return not self.account_id

    def line_for(self, product_id):
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    def quantity_of(self, product_id) -> int:
        line = self.line_for(product_id)
        return line.quantity if line else 0

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_line(self, product_id, quantity):
        """Add ``quantity`` of a product, growing the existing line if there is one."""
        if quantity is None or quantity <= 0:
            raise InvalidArgument({"quantity": ["Quantity must be a positive number"]})

        now = datetime.now(UTC)
        existing = self.line_for(product_id)
        if existing:
            existing.quantity += quantity
            new_quantity = existing.quantity
        else:
            self.add_lines(CartLine(product_id=str(product_id), quantity=quantity, added_at=now))
            new_quantity = quantity

        self.updated_at = now
        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity_added=quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_line(self, product_id):
        """Drop the product's line. Removing an absent product changes nothing."""
        line = self.line_for(product_id)
        if line is None:
            return False

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartLineRemoved(cart_id=str(self.id), product_id=str(product_id)))
        return True

    def clear(self):
        """Remove every line. A cart that is already empty is left untouched."""
        lines = list(self.lines)
        if not lines:
            return 0

        for line in lines:
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=len(lines)))
        return len(lines)

    def absorb(self, other: "Cart"):
        """Fold another cart's lines into this one, summing quantities per product."""
        now = datetime.now(UTC)
        merged = 0
        for line in other.lines:
            existing = self.line_for(line.product_id)
            if existing:
                existing.quantity += line.quantity
            else:
                self.add_lines(CartLine(product_id=str(line.product_id), quantity=line.quantity, added_at=now))
            merged += 1

        self.updated_at = now
        self.raise_(CartsMerged(cart_id=str(self.id), source_cart_id=str(other.id), lines_merged=merged))
        return merged

    def snapshot(self) -> list[dict]:
        return [{"product_id": str(line.product_id), "quantity": line.quantity} for line in self.lines]


@ordering.repository(part_of=Cart)
class CartRepository:
    def for_account(self, account_id) -> Cart | None:
        carts = self._dao.query.filter(account_id=str(account_id)).all().items
        return carts[0] if carts else None

    def for_token(self, token: CartToken) -> Cart | None:
        carts = self._dao.query.filter(token=token.value).all().items
        return carts[0] if carts else None
