"""Order pricing: subtotal, discount, delivery fee and total.

Amounts are computed with ``Decimal`` and the discount is rounded half-up to
a whole currency unit. Rate, fee and currency come from the environment:

- ``ORDER_DISCOUNT_RATE`` (default ``0.02``)
- ``ORDER_DELIVERY_FEE`` (default ``1200``)
- ``ORDER_CURRENCY`` (default ``RWF``)
"""

import os
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from ordering.errors import InvalidArgument


class PaymentMethod(Enum):
    MTN = "MTN"
    PAY_ON_DELIVERY = "PAY_ON_DELIVERY"


@dataclass(frozen=True)
class PricingSettings:
    discount_rate: Decimal = Decimal("0.02")
    delivery_fee: Decimal = Decimal("1200")
    currency: str = "RWF"

    @classmethod
    def from_env(cls) -> "PricingSettings":
        return cls(
            discount_rate=Decimal(os.environ.get("ORDER_DISCOUNT_RATE", "0.02")),
            delivery_fee=Decimal(os.environ.get("ORDER_DELIVERY_FEE", "1200")),
            currency=os.environ.get("ORDER_CURRENCY", "RWF"),
        )


@dataclass(frozen=True)
class PricedLine:
    """A line with the unit price frozen at the moment of pricing."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal

    @property
    def amount(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Quote:
    subtotal: Decimal
    discount: Decimal
    delivery_fee: Decimal
    total: Decimal
    currency: str

    def as_dict(self) -> dict:
        return {
            "subtotal": float(self.subtotal),
            "discount": float(self.discount),
            "delivery_fee": float(self.delivery_fee),
            "total": float(self.total),
            "currency": self.currency,
        }


def parse_payment_method(value) -> PaymentMethod:
    try:
        return value if isinstance(value, PaymentMethod) else PaymentMethod(value)
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise InvalidArgument({"payment_method": [f"Unknown payment method {value!r}; expected one of {allowed}"]}) from None


def round_half_up(amount: Decimal) -> Decimal:
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def quote(lines: list[PricedLine], payment_method: PaymentMethod, settings: PricingSettings | None = None) -> Quote:
    settings = settings or PricingSettings.from_env()

    subtotal = sum((line.amount for line in lines), Decimal("0"))
    discount = round_half_up(subtotal * settings.discount_rate)
    delivery_fee = Decimal("0") if payment_method == PaymentMethod.PAY_ON_DELIVERY else settings.delivery_fee

    return Quote(
        subtotal=subtotal,
        discount=discount,
        delivery_fee=delivery_fee,
        total=subtotal - discount + delivery_fee,
        currency=settings.currency,
    )
