"""Human-facing order numbers: ``ORD-<UTC timestamp>-<random suffix>``."""

import secrets
from collections.abc import Callable
from datetime import UTC, datetime

from ordering.errors import Conflict
from ordering.utils.logging import get_logger

logger = get_logger(__name__)

MAX_ATTEMPTS = 5


def generate_order_number(now: datetime | None = None) -> str:
    now = now or datetime.now(UTC)
    return f"ORD-{now:%Y%m%d%H%M%S}-{secrets.token_hex(3).upper()}"


def next_order_number(is_taken: Callable[[str], bool], attempts: int = MAX_ATTEMPTS) -> str:
    """Generate a number not yet in use, giving up after ``attempts`` collisions."""
    for attempt in range(1, attempts + 1):
        number = generate_order_number()
        if not is_taken(number):
            return number
        logger.warning("order_number_collision", order_number=number, attempt=attempt)

    raise Conflict({"order_number": [f"Could not allocate a unique order number after {attempts} attempts"]})
