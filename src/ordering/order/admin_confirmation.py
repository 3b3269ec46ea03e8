"""Admin payment confirmation: command and handler.

Confirming marks the order paid and confirmed, then settles the buyer's
account cart by emptying it. Guest orders have no account cart to settle.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.access.actor import account_id_of, resolve_actor
from ordering.access.visibility import ensure_can_mutate_order
from ordering.cart.store import clear_account_cart
from ordering.domain import ordering
from ordering.order.order import Order, load_order
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class ConfirmPaymentByAdmin:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class ConfirmPaymentByAdminHandler:
    @handle(ConfirmPaymentByAdmin)
    def confirm_payment(self, command):
        actor = resolve_actor(command.actor_id)
        order = ensure_can_mutate_order(actor, load_order(command.order_id))

        if not order.confirm_by_admin(account_id_of(actor)):
            return False

        current_domain.repository_for(Order).add(order)
        if order.account_id:
            cleared = clear_account_cart(order.account_id)
            logger.info("buyer_cart_settled", order_id=str(order.id), lines_removed=cleared)
        return True
