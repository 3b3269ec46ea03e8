"""Order event handler: tells buyers (and admins) what happened to an order.

Runs after the unit of work that raised the event has committed. Each
effective order change produces one message for the buyer; a placed order
also alerts every administrator. Nothing here can fail the originating
request.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.accounts.account import Account
from ordering.domain import ordering
from ordering.notification.dispatch import notify_with_template
from ordering.notification.port import Recipient
from ordering.notification.templates.types import NotificationType
from ordering.order.events import (
    OrderCancelled,
    OrderMarkedDelivered,
    OrderMarkedPaid,
    OrderPlaced,
    PaymentCodeIssued,
    PaymentConfirmedByAdmin,
    PaymentConfirmedByCustomer,
)
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


def buyer_of(event) -> Recipient | None:
    if event.account_id:
        return Recipient(account_id=str(event.account_id))
    if event.guest_email:
        return Recipient(email=event.guest_email)
    return None


def _context(event, **extra) -> dict:
    return {"order_id": str(event.order_id), "order_number": event.order_number, **extra}


def _tell_buyer(event, notification_type: NotificationType, **extra) -> None:
    recipient = buyer_of(event)
    if recipient is None:
        logger.warning("Order event has no buyer to notify", order_id=str(event.order_id))
        return
    notify_with_template(notification_type, recipient, _context(event, **extra))


@ordering.event_handler(part_of=Order)
class OrderNotificationHandler:
    """Sends order notifications through the configured adapter."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        _tell_buyer(event, NotificationType.ORDER_PLACED, total=event.total, currency=event.currency)

        try:
            admins = current_domain.repository_for(Account).admins()
        except Exception as e:
            logger.error("Could not load administrators to notify", order_id=str(event.order_id), error=str(e))
            return

        buyer = event.guest_name or event.guest_email or f"account {event.account_id}"
        for admin in admins:
            notify_with_template(
                NotificationType.NEW_ORDER_ALERT,
                Recipient(account_id=str(admin.id)),
                _context(event, total=event.total, currency=event.currency, buyer=buyer),
            )

    @handle(OrderMarkedPaid)
    def on_order_marked_paid(self, event: OrderMarkedPaid) -> None:
        _tell_buyer(event, NotificationType.ORDER_PAID)

    @handle(OrderMarkedDelivered)
    def on_order_marked_delivered(self, event: OrderMarkedDelivered) -> None:
        _tell_buyer(event, NotificationType.ORDER_DELIVERED)

    @handle(PaymentConfirmedByAdmin)
    def on_payment_confirmed_by_admin(self, event: PaymentConfirmedByAdmin) -> None:
        _tell_buyer(event, NotificationType.PAYMENT_CONFIRMED)

    @handle(PaymentConfirmedByCustomer)
    def on_payment_confirmed_by_customer(self, event: PaymentConfirmedByCustomer) -> None:
        _tell_buyer(event, NotificationType.PAYMENT_RECEIVED)

    @handle(PaymentCodeIssued)
    def on_payment_code_issued(self, event: PaymentCodeIssued) -> None:
        _tell_buyer(
            event,
            NotificationType.PAYMENT_CODE_ISSUED,
            payment_code=event.payment_code,
            total=event.total,
            currency=event.currency,
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        _tell_buyer(event, NotificationType.ORDER_CANCELLED)
