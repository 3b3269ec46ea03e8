"""Account record: the local copy of a marketplace account.

Accounts are owned by the identity service. Ordering keeps just enough of
each one to resolve who is acting (admin, seller, customer), whether a
seller is allowed to act, and where to send customer notifications.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from ordering.domain import ordering
from ordering.utils.paging import all_rows


class AccountRole(Enum):
    ADMIN = "Admin"
    SELLER = "Seller"
    CUSTOMER = "Customer"


class SellerStatus(Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    SUSPENDED = "Suspended"
    REJECTED = "Rejected"


@ordering.aggregate
class Account:
    name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    role = String(choices=AccountRole, default=AccountRole.CUSTOMER.value)
    seller_status = String(choices=SellerStatus)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def only_sellers_carry_a_seller_status(self):
        if self.seller_status and self.role != AccountRole.SELLER.value:
            raise ValidationError({"seller_status": ["Only seller accounts have a seller status"]})

    @classmethod
    def register(cls, name, email, role=AccountRole.CUSTOMER.value, account_id=None, seller_status=None):
        now = datetime.now(UTC)
        if role == AccountRole.SELLER.value and seller_status is None:
            seller_status = SellerStatus.PENDING.value
        data = dict(
            name=name,
            email=email,
            role=role,
            seller_status=seller_status,
            created_at=now,
            updated_at=now,
        )
        if account_id is not None:
            data["id"] = account_id
        return cls(**data)

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN.value

    @property
    def is_seller(self) -> bool:
        return self.role == AccountRole.SELLER.value

    def change_seller_status(self, status):
        if not self.is_seller:
            raise ValidationError({"role": ["Seller status can only change on seller accounts"]})
        self.seller_status = SellerStatus(status).value
        self.updated_at = datetime.now(UTC)


@ordering.repository(part_of=Account)
class AccountRepository:
    def admins(self) -> list[Account]:
        return all_rows(self._dao.query.filter(role=AccountRole.ADMIN.value).order_by("id"))
