"""Fire-and-forget notification dispatch.

``notify`` never raises: an adapter exception or a ``failed`` status is
logged and reported as ``False``. Notifications are sent after the change
they describe has been committed and can never undo it.
"""

import structlog

from ordering.notification import get_notifier
from ordering.notification.port import Notification, Recipient
from ordering.notification.templates import get_template
from ordering.notification.templates.types import NotificationType

logger = structlog.get_logger(__name__)


def notify(notification: Notification) -> bool:
    try:
        result = get_notifier().send(notification)
    except Exception as e:
        logger.error(
            "Notification dispatch failed",
            recipient=str(notification.recipient),
            subject=notification.subject,
            order_id=notification.order_id,
            error=str(e),
        )
        return False

    if result.get("status") != "sent":
        logger.warning(
            "Notification was not delivered",
            recipient=str(notification.recipient),
            subject=notification.subject,
            order_id=notification.order_id,
            error=result.get("error", "Unknown dispatch error"),
        )
        return False
    return True


def render(notification_type: NotificationType, recipient: Recipient, context: dict) -> Notification:
    template = get_template(notification_type)
    content = template.render(context)
    return Notification(
        recipient=recipient,
        subject=content["subject"],
        message=content["message"],
        severity=template.severity,
        order_id=context.get("order_id"),
    )


def notify_with_template(notification_type: NotificationType, recipient: Recipient, context: dict) -> bool:
    return notify(render(notification_type, recipient, context))
