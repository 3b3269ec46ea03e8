"""Order status updates by administrators and sellers: command and handler.

Flags are set-only: a request may turn ``is_paid``, ``is_delivered`` or
``is_cancelled`` on, never off. Changes are applied in that order, so a
request that both pays and cancels records the payment first.
"""

from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from ordering.access.actor import account_id_of, resolve_actor
from ordering.access.visibility import ensure_can_mutate_order
from ordering.domain import ordering
from ordering.errors import InvalidArgument
from ordering.order.order import Order, load_order
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    is_paid = Boolean()
    is_delivered = Boolean()
    is_cancelled = Boolean()


def _requested_flags(command) -> dict[str, bool]:
    requested = {
        name: value
        for name in ("is_paid", "is_delivered", "is_cancelled")
        if (value := getattr(command, name)) is not None
    }
    if not requested:
        raise InvalidArgument({"status": ["Nothing to update"]})

    reset = [name for name, value in requested.items() if value is False]
    if reset:
        raise InvalidArgument({name: ["Status flags cannot be reset"] for name in reset})
    return requested


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        requested = _requested_flags(command)
        actor = resolve_actor(command.actor_id)
        order = ensure_can_mutate_order(actor, load_order(command.order_id))
        actor_id = account_id_of(actor)

        changed = []
        if requested.get("is_paid") and order.mark_paid(actor_id):
            changed.append("is_paid")
        if requested.get("is_delivered") and order.mark_delivered(actor_id):
            changed.append("is_delivered")
        if requested.get("is_cancelled") and order.cancel(actor_id):
            changed.append("is_cancelled")

        if changed:
            current_domain.repository_for(Order).add(order)
        logger.info("order_status_updated", order_id=str(order.id), changed=changed, actor_id=actor_id)
        return changed
