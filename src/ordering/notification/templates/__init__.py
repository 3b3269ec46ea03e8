"""Template registry: maps NotificationType to template classes.

Each template knows its severity and how to render a subject and message
from event context data.
"""

from ordering.notification.templates.order_placed import NewOrderAlertTemplate, OrderPlacedTemplate
from ordering.notification.templates.order_status import (
    OrderCancelledTemplate,
    OrderDeliveredTemplate,
    OrderPaidTemplate,
)
from ordering.notification.templates.payment import (
    PaymentCodeIssuedTemplate,
    PaymentConfirmedTemplate,
    PaymentReceivedTemplate,
)
from ordering.notification.templates.types import NotificationType

TEMPLATE_REGISTRY: dict[NotificationType, type] = {
    NotificationType.ORDER_PLACED: OrderPlacedTemplate,
    NotificationType.NEW_ORDER_ALERT: NewOrderAlertTemplate,
    NotificationType.PAYMENT_CODE_ISSUED: PaymentCodeIssuedTemplate,
    NotificationType.PAYMENT_RECEIVED: PaymentReceivedTemplate,
    NotificationType.PAYMENT_CONFIRMED: PaymentConfirmedTemplate,
    NotificationType.ORDER_PAID: OrderPaidTemplate,
    NotificationType.ORDER_DELIVERED: OrderDeliveredTemplate,
    NotificationType.ORDER_CANCELLED: OrderCancelledTemplate,
}


def get_template(notification_type: NotificationType):
    """Look up a template class by notification type."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
