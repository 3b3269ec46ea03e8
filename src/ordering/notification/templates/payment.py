"""Payment templates: code issued, payment reported, payment confirmed."""

from ordering.notification.port import Severity
from ordering.notification.templates.types import NotificationType


class PaymentCodeIssuedTemplate:
    notification_type = NotificationType.PAYMENT_CODE_ISSUED
    severity = Severity.INFO

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": "Payment Code",
            "message": (
                f"Pay {context.get('currency', 'RWF')} {context.get('total', 0):,.0f} to "
                f"{context.get('payment_code')} for order {context.get('order_number', 'N/A')}."
            ),
        }


class PaymentReceivedTemplate:
    notification_type = NotificationType.PAYMENT_RECEIVED
    severity = Severity.INFO

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": "Payment Received",
            "message": (
                f"We received your payment notice for order {context.get('order_number', 'N/A')}. "
                "An administrator will confirm it shortly."
            ),
        }


class PaymentConfirmedTemplate:
    notification_type = NotificationType.PAYMENT_CONFIRMED
    severity = Severity.SUCCESS

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": "Payment Confirmed",
            "message": f"Your payment for order {context.get('order_number', 'N/A')} has been confirmed.",
        }
