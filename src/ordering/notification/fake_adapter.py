"""Fake notification adapter: records notifications for testing."""

from uuid import uuid4

from ordering.notification.port import Notification, NotificationPort, Recipient


class FakeNotificationAdapter(NotificationPort):
    """Adapter that keeps delivered notifications in memory for assertions."""

    def __init__(self):
        self.sent: list[Notification] = []
        self.should_succeed = True
        self.should_raise = False
        self.failure_reason = "Notification delivery failed"

    def configure(
        self,
        should_succeed: bool = True,
        should_raise: bool = False,
        failure_reason: str = "Notification delivery failed",
    ):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.should_raise = should_raise
        self.failure_reason = failure_reason

    def send(self, notification: Notification) -> dict:
        if self.should_raise:
            raise ConnectionError(self.failure_reason)
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        self.sent.append(notification)
        return {"message_id": f"note-{uuid4().hex[:12]}", "status": "sent"}

    def sent_to(self, recipient: Recipient) -> list[Notification]:
        return [n for n in self.sent if n.recipient == recipient]

    def reset(self):
        """Clear recorded notifications (useful between tests)."""
        self.sent.clear()
        self.should_succeed = True
        self.should_raise = False
        self.failure_reason = "Notification delivery failed"
