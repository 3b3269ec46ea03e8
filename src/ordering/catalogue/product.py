"""Product record: the local copy of a catalogue listing.

The catalogue service owns products. Ordering reads the live price at
checkout and the owner for tenant attribution; nothing else.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering
from ordering.utils.paging import all_rows


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    owner_id = Identifier(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(cls, name, price, owner_id, product_id=None):
        now = datetime.now(UTC)
        data = dict(name=name, price=price, owner_id=owner_id, created_at=now, updated_at=now)
        if product_id is not None:
            data["id"] = product_id
        return cls(**data)

    def reprice(self, price):
        if price is None or price < 0:
            raise ValidationError({"price": ["Price must be zero or more"]})
        self.price = price
        self.updated_at = datetime.now(UTC)


@ordering.repository(part_of=Product)
class ProductRepository:
    def owned_by(self, owner_id) -> list[Product]:
        return all_rows(self._dao.query.filter(owner_id=str(owner_id)).order_by("id"))

    def every(self) -> list[Product]:
        return all_rows(self._dao.query.order_by("id"))
