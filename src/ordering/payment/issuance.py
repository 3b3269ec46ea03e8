"""Payment code issuance and customer confirmation: commands and handler.

Anyone holding a guest order's id may ask for its code or report payment.
An order placed from an account is only available to that account.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.access.actor import account_id_of, resolve_actor
from ordering.domain import ordering
from ordering.errors import Forbidden, InvalidState, PreconditionFailed, Upstream
from ordering.order.order import Order, load_order
from ordering.payment import get_payment_channel
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class IssuePaymentCode:
    order_id = Identifier(required=True)
    actor_id = Identifier()


@ordering.command(part_of="Order")
class ConfirmPaymentByCustomer:
    order_id = Identifier(required=True)
    actor_id = Identifier()


def _ensure_buyer(actor_id, order: Order) -> None:
    if not order.account_id:
        return
    if account_id_of(resolve_actor(actor_id)) != str(order.account_id):
        raise Forbidden({"order": ["Only the customer who placed this order can do this"]})


def _call_channel(operation: str, order: Order, call):
    channel = get_payment_channel()
    try:
        return call(channel)
    except Exception as exc:
        logger.error(
            "payment_channel_failed",
            channel=channel.name,
            operation=operation,
            order_id=str(order.id),
            error=str(exc),
        )
        raise Upstream({"payment": [f"Payment channel failed: {exc}"]}) from exc


@ordering.command_handler(part_of=Order)
class PaymentCodeHandler:
    @handle(IssuePaymentCode)
    def issue_payment_code(self, command):
        order = load_order(command.order_id)
        _ensure_buyer(command.actor_id, order)
        if order.is_cancelled:
            raise InvalidState({"status": ["Order is cancelled"]})

        payment_code = _call_channel("issue_code", order, lambda channel: channel.issue_code(order))
        order.record_payment_code(payment_code.code)
        current_domain.repository_for(Order).add(order)

        logger.info("payment_code_issued", order_id=str(order.id), channel=payment_code.channel)
        return {
            "order_id": str(order.id),
            "payment_code": payment_code.code,
            "instructions": payment_code.instructions,
            "total": order.pricing.total,
            "currency": order.pricing.currency,
        }

    @handle(ConfirmPaymentByCustomer)
    def confirm_payment(self, command):
        order = load_order(command.order_id)
        _ensure_buyer(command.actor_id, order)

        if order.payment_code and not order.is_cancelled and order.customer_confirmed_at is None:
            accepted = _call_channel("confirm", order, lambda channel: channel.confirm(order, order.payment_code))
            if not accepted:
                raise PreconditionFailed({"payment_code": ["The payment channel did not accept this order's code"]})

        if not order.confirm_by_customer():
            return False

        current_domain.repository_for(Order).add(order)
        logger.info("payment_confirmed_by_customer", order_id=str(order.id))
        return True
