"""Who is acting: an explicit actor value passed into every use case.

The HTTP layer only knows an optional account id. ``resolve_actor`` turns it
into one of four actor kinds using the stored account, so role and seller
status always come from our records and never from the caller.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.accounts.account import Account, AccountRole, SellerStatus
from ordering.errors import Forbidden


@dataclass(frozen=True)
class Admin:
    account_id: str


@dataclass(frozen=True)
class Seller:
    account_id: str
    status: str

    @property
    def is_active(self) -> bool:
        return self.status == SellerStatus.ACTIVE.value


@dataclass(frozen=True)
class Customer:
    account_id: str


@dataclass(frozen=True)
class Guest:
    pass


Actor = Admin | Seller | Customer | Guest


def actor_for(account: Account) -> Actor:
    role = AccountRole(account.role)
    if role == AccountRole.ADMIN:
        return Admin(account_id=str(account.id))
    if role == AccountRole.SELLER:
        return Seller(account_id=str(account.id), status=account.seller_status or SellerStatus.PENDING.value)
    return Customer(account_id=str(account.id))


def resolve_actor(account_id) -> Actor:
    """Return the actor for ``account_id``; no id means an anonymous guest."""
    if not account_id:
        return Guest()

    try:
        account = current_domain.repository_for(Account).get(str(account_id))
    except ObjectNotFoundError:
        raise Forbidden({"actor": [f"Unknown account {account_id}"]}) from None

    return actor_for(account)


def account_id_of(actor: Actor) -> str | None:
    """The account behind an actor, or None for guests."""
    return None if isinstance(actor, Guest) else actor.account_id
