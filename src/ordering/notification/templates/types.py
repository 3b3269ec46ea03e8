from enum import Enum


class NotificationType(Enum):
    ORDER_PLACED = "OrderPlaced"
    NEW_ORDER_ALERT = "NewOrderAlert"
    PAYMENT_CODE_ISSUED = "PaymentCodeIssued"
    PAYMENT_RECEIVED = "PaymentReceived"
    PAYMENT_CONFIRMED = "PaymentConfirmed"
    ORDER_PAID = "OrderPaid"
    ORDER_DELIVERED = "OrderDelivered"
    ORDER_CANCELLED = "OrderCancelled"
