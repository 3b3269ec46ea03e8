"""Notification adapter registry.

The adapter is chosen by the ``NOTIFICATION_CHANNEL`` environment variable.
Only the in-memory ``fake`` adapter ships with the service; real delivery
(email, push, in-app inbox) belongs to the messaging collaborator.
"""

import os

from ordering.notification.port import NotificationPort

_notifier: NotificationPort | None = None


def get_notifier() -> NotificationPort:
    """Return the configured notification adapter (singleton)."""
    global _notifier
    if _notifier is None:
        adapter = os.environ.get("NOTIFICATION_CHANNEL", "fake")
        if adapter == "fake":
            from ordering.notification.fake_adapter import FakeNotificationAdapter

            _notifier = FakeNotificationAdapter()
        else:
            raise ValueError(f"Unknown notification channel: {adapter}")
    return _notifier


def set_notifier(notifier: NotificationPort) -> None:
    """Override the active adapter (useful for tests)."""
    global _notifier
    _notifier = notifier


def reset_notifier() -> None:
    global _notifier
    _notifier = None
