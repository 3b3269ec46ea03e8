"""Notification port: abstract interface for telling people what happened.

Adapters deliver a ``Notification`` and report the outcome as a dict with
keys ``message_id``, ``status`` ("sent" or "failed") and optionally
``error``. Callers never depend on delivery succeeding.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


@dataclass(frozen=True)
class Recipient:
    """An account, or a bare email address for guest buyers."""

    account_id: str | None = None
    email: str | None = None

    def __post_init__(self):
        if not self.account_id and not self.email:
            raise ValueError("A recipient needs an account id or an email address")

    def __str__(self) -> str:
        return f"account:{self.account_id}" if self.account_id else f"email:{self.email}"


@dataclass(frozen=True)
class Notification:
    recipient: Recipient
    subject: str
    message: str
    severity: Severity = Severity.INFO
    order_id: str | None = None


class NotificationPort(ABC):
    """Abstract interface for notification adapters."""

    @abstractmethod
    def send(self, notification: Notification) -> dict:
        """Deliver ``notification``.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
