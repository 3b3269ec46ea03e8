"""Order placement templates: buyer receipt and the admin alert."""

from ordering.notification.port import Severity
from ordering.notification.templates.types import NotificationType


class OrderPlacedTemplate:
    notification_type = NotificationType.ORDER_PLACED
    severity = Severity.SUCCESS

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        return {
            "subject": "Order Placed",
            "message": (
                f"Your order {order_number} has been placed. "
                f"Total: {context.get('currency', 'RWF')} {context.get('total', 0):,.0f}."
            ),
        }


class NewOrderAlertTemplate:
    notification_type = NotificationType.NEW_ORDER_ALERT
    severity = Severity.INFO

    @staticmethod
    def render(context: dict) -> dict:
        buyer = context.get("buyer") or "a customer"
        return {
            "subject": "New Order",
            "message": (
                f"Order {context.get('order_number', 'N/A')} was placed by {buyer} "
                f"for {context.get('currency', 'RWF')} {context.get('total', 0):,.0f}."
            ),
        }
