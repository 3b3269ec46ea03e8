"""Order aggregate: an immutable purchase record with status facts.

Lines, prices and the customer reference are fixed when the order is placed.
Afterwards only the status facts change, and only through the transitions in
``ordering.order.status``. Each effective change raises one event.
"""

from dataclasses import asdict
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import InvalidState, NotFound, PreconditionFailed
from ordering.order.events import (
    OrderCancelled,
    OrderMarkedDelivered,
    OrderMarkedPaid,
    OrderPlaced,
    PaymentCodeIssued,
    PaymentConfirmedByAdmin,
    PaymentConfirmedByCustomer,
)
from ordering.order.pricing import PaymentMethod, PricedLine, Quote
from ordering.order.status import OrderState, Rejection, RejectionReason, TransitionKind, transition
from ordering.utils.paging import all_rows


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """Where the order is delivered, captured at checkout and never edited."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    district = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)


@ordering.value_object(part_of="Order")
class OrderPricing:
    subtotal = Float(default=0.0)
    discount = Float(default=0.0)
    delivery_fee = Float(default=0.0)
    total = Float(default=0.0)
    currency = String(max_length=3, default="RWF")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """One product in an order, with its name and unit price frozen at placement."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def amount(self) -> float:
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
_TRANSITION_EVENTS = {
    TransitionKind.MARK_PAID: OrderMarkedPaid,
    TransitionKind.MARK_DELIVERED: OrderMarkedDelivered,
    TransitionKind.ADMIN_CONFIRM: PaymentConfirmedByAdmin,
    TransitionKind.CUSTOMER_CONFIRM: PaymentConfirmedByCustomer,
    TransitionKind.CANCEL: OrderCancelled,
}


@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=40, unique=True)
    account_id = Identifier()
    guest_name = String(max_length=255)
    guest_email = String(max_length=254)
    lines = HasMany(OrderLine)
    shipping_address = ValueObject(ShippingAddress)
    pricing = ValueObject(OrderPricing)
    payment_method = String(required=True, choices=PaymentMethod)
    placed_by = Identifier()

    is_paid = Boolean(default=False)
    paid_at = DateTime()
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    is_confirmed_by_admin = Boolean(default=False)
    confirmed_at = DateTime()
    is_cancelled = Boolean(default=False)
    cancelled_at = DateTime()
    cancelled_by = Identifier()

    payment_code = String(max_length=50)
    payment_code_issued_at = DateTime()
    customer_confirmed_at = DateTime()

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def customer_reference_is_exclusive(self):
        if self.account_id and (self.guest_email or self.guest_name):
            raise ValidationError({"customer": ["An order references either an account or a guest, not both"]})
        if not self.account_id and not self.guest_email:
            raise ValidationError({"customer": ["A guest order requires an email address"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number: str,
        lines: list[PricedLine],
        quote: Quote,
        payment_method: PaymentMethod,
        shipping_address: dict,
        account_id=None,
        guest_name=None,
        guest_email=None,
        placed_by=None,
    ):
        """Create an order from priced lines. Prices are frozen from here on."""
        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            account_id=str(account_id) if account_id else None,
            guest_name=guest_name,
            guest_email=guest_email,
            lines=[
                OrderLine(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    quantity=line.quantity,
                    unit_price=float(line.unit_price),
                )
                for line in lines
            ],
            shipping_address=ShippingAddress(**shipping_address),
            pricing=OrderPricing(**quote.as_dict()),
            payment_method=payment_method.value,
            placed_by=str(placed_by) if placed_by else None,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                account_id=order.account_id,
                guest_name=order.guest_name,
                guest_email=order.guest_email,
                line_count=len(lines),
                total=order.pricing.total,
                currency=order.pricing.currency,
                payment_method=order.payment_method,
                placed_by=order.placed_by,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_guest_order(self) -> bool:
        return not self.account_id

    @property
    def product_ids(self) -> list[str]:
        return [str(line.product_id) for line in self.lines]

    @property
    def state(self) -> OrderState:
        return OrderState(
            is_paid=bool(self.is_paid),
            paid_at=self.paid_at,
            is_delivered=bool(self.is_delivered),
            delivered_at=self.delivered_at,
            is_confirmed_by_admin=bool(self.is_confirmed_by_admin),
            confirmed_at=self.confirmed_at,
            is_cancelled=bool(self.is_cancelled),
            cancelled_at=self.cancelled_at,
            cancelled_by=self.cancelled_by,
            payment_code=self.payment_code,
            customer_confirmed_at=self.customer_confirmed_at,
        )

    def _customer_fields(self) -> dict:
        return {"account_id": self.account_id, "guest_email": self.guest_email}

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def _transition(self, kind: TransitionKind, actor_id=None) -> bool:
        """Apply a transition. Returns False when its effect already held."""
        now = datetime.now(UTC)
        current = self.state
        result = transition(current, kind, now, str(actor_id) if actor_id else None)

        if isinstance(result, Rejection):
            if result.reason == RejectionReason.ORDER_CANCELLED:
                raise InvalidState({"status": [result.message]})
            raise PreconditionFailed({"payment_code": [result.message]})

        if result == current:
            return False

        for name, value in asdict(result).items():
            setattr(self, name, value)
        self.updated_at = now
        self.raise_(self._event_for(kind, result, actor_id))
        return True

    def _event_for(self, kind: TransitionKind, state: OrderState, actor_id):
        event_cls = _TRANSITION_EVENTS[kind]
        common = {"order_id": str(self.id), "order_number": self.order_number, **self._customer_fields()}
        actor = str(actor_id) if actor_id else None

        if kind == TransitionKind.MARK_PAID:
            return event_cls(**common, paid_at=state.paid_at, actor_id=actor)
        if kind == TransitionKind.MARK_DELIVERED:
            return event_cls(**common, delivered_at=state.delivered_at, actor_id=actor)
        if kind == TransitionKind.ADMIN_CONFIRM:
            return event_cls(**common, confirmed_at=state.confirmed_at, actor_id=actor)
        if kind == TransitionKind.CUSTOMER_CONFIRM:
            return event_cls(**common, confirmed_at=state.customer_confirmed_at)
        return event_cls(**common, cancelled_at=state.cancelled_at, cancelled_by=state.cancelled_by)

    def mark_paid(self, actor_id=None) -> bool:
        return self._transition(TransitionKind.MARK_PAID, actor_id)

    def mark_delivered(self, actor_id=None) -> bool:
        return self._transition(TransitionKind.MARK_DELIVERED, actor_id)

    def confirm_by_admin(self, actor_id=None) -> bool:
        return self._transition(TransitionKind.ADMIN_CONFIRM, actor_id)

    def confirm_by_customer(self) -> bool:
        return self._transition(TransitionKind.CUSTOMER_CONFIRM)

    def cancel(self, actor_id=None) -> bool:
        return self._transition(TransitionKind.CANCEL, actor_id)

    def record_payment_code(self, code: str):
        """Store the code the buyer pays against and announce it."""
        if self.is_cancelled:
            raise InvalidState({"status": ["Order is cancelled"]})

        now = datetime.now(UTC)
        self.payment_code = code
        self.payment_code_issued_at = now
        self.updated_at = now
        self.raise_(
            PaymentCodeIssued(
                order_id=str(self.id),
                order_number=self.order_number,
                **self._customer_fields(),
                payment_code=code,
                total=self.pricing.total,
                currency=self.pricing.currency,
                issued_at=now,
            )
        )


_NEWEST_FIRST = ["-created_at", "id"]


@ordering.repository(part_of=Order)
class OrderRepository:
    def by_number(self, order_number) -> Order | None:
        orders = self._dao.query.filter(order_number=order_number).all().items
        return orders[0] if orders else None

    def for_account(self, account_id) -> list[Order]:
        return all_rows(self._dao.query.filter(account_id=str(account_id)).order_by(_NEWEST_FIRST))

    def every(self) -> list[Order]:
        return all_rows(self._dao.query.order_by(_NEWEST_FIRST))


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise NotFound({"order_id": [f"Order {order_id} does not exist"]}) from None
