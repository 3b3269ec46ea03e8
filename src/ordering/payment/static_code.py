"""Static-code payment channel.

Every order is paid to the same mobile-money number. The number comes from
``PAYMENT_STATIC_CODE`` and defaults to the marketplace's MoMo line.
"""

import os

from ordering.payment.port import PaymentChannel, PaymentCode

DEFAULT_CODE = "0787778889"


class StaticCodeChannel(PaymentChannel):
    name = "static"

    def __init__(self, code: str | None = None) -> None:
        self.code = code or os.environ.get("PAYMENT_STATIC_CODE", DEFAULT_CODE)
        self.calls: list[dict] = []
        self.should_fail = False

    def configure(self, should_fail: bool) -> None:
        """Make subsequent calls raise, to exercise upstream failure handling."""
        self.should_fail = should_fail

    def _record(self, method: str, order, **extra) -> None:
        self.calls.append({"method": method, "order_id": str(order.id), **extra})
        if self.should_fail:
            raise ConnectionError("Payment channel unavailable")

    def issue_code(self, order) -> PaymentCode:
        self._record("issue_code", order)
        return PaymentCode(
            code=self.code,
            channel=self.name,
            instructions=(
                f"Pay {order.pricing.total:.0f} {order.pricing.currency} to {self.code}, "
                f"quoting order {order.order_number}"
            ),
        )

    def confirm(self, order, code: str) -> bool:
        self._record("confirm", order, code=code)
        return code == self.code
