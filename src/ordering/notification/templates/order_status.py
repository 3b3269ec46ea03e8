"""Order status templates."""

from ordering.notification.port import Severity
from ordering.notification.templates.types import NotificationType


class OrderPaidTemplate:
    notification_type = NotificationType.ORDER_PAID
    severity = Severity.SUCCESS

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": "Order Paid",
            "message": f"Order {context.get('order_number', 'N/A')} is marked as paid.",
        }


class OrderDeliveredTemplate:
    notification_type = NotificationType.ORDER_DELIVERED
    severity = Severity.SUCCESS

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": "Order Delivered",
            "message": f"Order {context.get('order_number', 'N/A')} has been delivered. Enjoy!",
        }


class OrderCancelledTemplate:
    notification_type = NotificationType.ORDER_CANCELLED
    severity = Severity.WARNING

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": "Order Cancelled",
            "message": f"Order {context.get('order_number', 'N/A')} has been cancelled.",
        }
