"""Order status machine: a pure function over order status facts.

An order does not carry a single status. It carries independent facts
(paid, delivered, confirmed by an admin, cancelled) each stamped with the
time it became true. ``transition`` decides what a requested change does to
those facts without touching storage, so the rules can be tested on their own:

    mark paid          not cancelled          is_paid, paid_at
    mark delivered     not cancelled          is_delivered, delivered_at
    admin confirm      not cancelled          is_paid, is_confirmed_by_admin, paid_at, confirmed_at
    customer confirm   not cancelled, code    is_paid, paid_at, customer_confirmed_at
    cancel             always                 is_cancelled, cancelled_at, cancelled_by

Cancellation is terminal. Re-applying a change whose effect already holds
returns the very same state, which callers treat as a no-op.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class TransitionKind(Enum):
    MARK_PAID = "mark_paid"
    MARK_DELIVERED = "mark_delivered"
    ADMIN_CONFIRM = "admin_confirm"
    CUSTOMER_CONFIRM = "customer_confirm"
    CANCEL = "cancel"


class RejectionReason(Enum):
    ORDER_CANCELLED = "order_cancelled"
    PAYMENT_CODE_NOT_ISSUED = "payment_code_not_issued"


@dataclass(frozen=True)
class OrderState:
    is_paid: bool = False
    paid_at: datetime | None = None
    is_delivered: bool = False
    delivered_at: datetime | None = None
    is_confirmed_by_admin: bool = False
    confirmed_at: datetime | None = None
    is_cancelled: bool = False
    cancelled_at: datetime | None = None
    cancelled_by: str | None = None
    payment_code: str | None = None
    customer_confirmed_at: datetime | None = None


@dataclass(frozen=True)
class Rejection:
    reason: RejectionReason

    @property
    def message(self) -> str:
        if self.reason == RejectionReason.ORDER_CANCELLED:
            return "Order is cancelled"
        return "No payment code has been issued for this order"


def transition(state: OrderState, kind: TransitionKind, now: datetime, actor_id: str | None = None) -> OrderState | Rejection:
    """Apply ``kind`` to ``state`` and return the resulting state or a rejection."""
    if kind == TransitionKind.CANCEL:
        if state.is_cancelled:
            return state
        return replace(state, is_cancelled=True, cancelled_at=now, cancelled_by=actor_id)

    if state.is_cancelled:
        return Rejection(RejectionReason.ORDER_CANCELLED)

    if kind == TransitionKind.MARK_PAID:
        if state.is_paid:
            return state
        return replace(state, is_paid=True, paid_at=now)

    if kind == TransitionKind.MARK_DELIVERED:
        if state.is_delivered:
            return state
        return replace(state, is_delivered=True, delivered_at=now)

    if kind == TransitionKind.ADMIN_CONFIRM:
        if state.is_confirmed_by_admin:
            return state
        return replace(
            state,
            is_paid=True,
            paid_at=now,
            is_confirmed_by_admin=True,
            confirmed_at=now,
        )

    if kind == TransitionKind.CUSTOMER_CONFIRM:
        if not state.payment_code:
            return Rejection(RejectionReason.PAYMENT_CODE_NOT_ISSUED)
        if state.customer_confirmed_at is not None:
            return state
        return replace(state, is_paid=True, paid_at=state.paid_at or now, customer_confirmed_at=now)

    raise ValueError(f"Unknown transition {kind!r}")
