"""Payment channel registry.

Provides get_payment_channel() / set_payment_channel() to swap
implementations. The adapter is chosen by the ``PAYMENT_CHANNEL``
environment variable; ``static`` is the only built-in one.
"""

import os

from ordering.payment.port import PaymentChannel

_current_channel: PaymentChannel | None = None


def get_payment_channel() -> PaymentChannel:
    """Return the configured payment channel (singleton)."""
    global _current_channel
    if _current_channel is None:
        adapter = os.environ.get("PAYMENT_CHANNEL", "static")
        if adapter == "static":
            from ordering.payment.static_code import StaticCodeChannel

            _current_channel = StaticCodeChannel()
        else:
            raise ValueError(f"Unknown payment channel: {adapter}")
    return _current_channel


def set_payment_channel(channel: PaymentChannel) -> None:
    """Override the active payment channel (useful for tests)."""
    global _current_channel
    _current_channel = channel


def reset_payment_channel() -> None:
    global _current_channel
    _current_channel = None
