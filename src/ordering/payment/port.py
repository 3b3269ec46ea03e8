"""Payment channel port (abstract interface).

A channel hands out the code a buyer pays against and can check a code for
an order. Swapping the static mobile-money code for a real provider only
means adding an adapter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentCode:
    """What the buyer needs in order to pay."""

    code: str
    channel: str
    instructions: str | None = None


class PaymentChannel(ABC):
    """Abstract payment channel interface."""

    name: str = "abstract"

    @abstractmethod
    def issue_code(self, order) -> PaymentCode:
        """Return the code the buyer should pay ``order`` against."""
        ...

    @abstractmethod
    def confirm(self, order, code: str) -> bool:
        """Whether ``code`` is acceptable as payment reference for ``order``."""
        ...
