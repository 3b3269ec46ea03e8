"""Error kinds raised by the ordering domain.

Each error carries a ``messages`` dict keyed by the offending field, the
same shape Protean uses for ``ValidationError``, so API responses look alike
whichever layer rejected the request.
"""


class OrderingError(Exception):
    """Base class for every error the ordering domain raises on purpose."""

    status_code = 400

    def __init__(self, messages: dict[str, list[str]] | str):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)


class NotFound(OrderingError):
    status_code = 404


class InvalidArgument(OrderingError):
    """Bad quantity, missing guest email, malformed address and the like."""

    status_code = 400


class EmptyCart(InvalidArgument):
    def __init__(self, messages: dict[str, list[str]] | str = "Cart is empty"):
        super().__init__({"cart": [messages]} if isinstance(messages, str) else messages)


class Forbidden(OrderingError):
    """Cross-tenant access, inactive seller, or the wrong confirming party."""

    status_code = 403


class PreconditionFailed(OrderingError):
    status_code = 412


class InvalidState(PreconditionFailed):
    """The order's current status does not allow the requested transition."""

    status_code = 409


class Conflict(OrderingError):
    status_code = 409


class Upstream(OrderingError):
    """A collaborator (payment channel, notifier) failed.

    Notification failures never leave the notification module; payment
    channel failures abort the request that needed the channel.
    """

    status_code = 503
