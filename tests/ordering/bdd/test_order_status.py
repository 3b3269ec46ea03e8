"""BDD tests for order status changes and seller visibility."""

from ordering.access.actor import resolve_actor
from ordering.access.visibility import visible_orders
from ordering.errors import InvalidState
from ordering.notification import get_notifier
from ordering.notification.port import Recipient
from ordering.order.admin_confirmation import ConfirmPaymentByAdmin
from ordering.order.order import Order
from ordering.order.status_updates import UpdateOrderStatus
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_status.feature")

_ACTIONS = {
    "mark it paid": lambda order_id: UpdateOrderStatus(order_id=order_id, actor_id="admin-1", is_paid=True),
    "mark it delivered": lambda order_id: UpdateOrderStatus(order_id=order_id, actor_id="admin-1", is_delivered=True),
    "confirm payment": lambda order_id: ConfirmPaymentByAdmin(order_id=order_id, actor_id="admin-1"),
}


@given("the admin has cancelled the order")
def _(order):
    current_domain.process(
        UpdateOrderStatus(order_id=order.id, actor_id="admin-1", is_cancelled=True),
        asynchronous=False,
    )


@when("the admin confirms the payment")
def _(order):
    current_domain.process(ConfirmPaymentByAdmin(order_id=order.id, actor_id="admin-1"), asynchronous=False)


@when(parsers.cfparse("the admin tries to {action}"))
def _(order, action, error):
    try:
        current_domain.process(_ACTIONS[action](order.id), asynchronous=False)
    except InvalidState as exc:
        error["exc"] = exc


@then("the order is paid and confirmed")
def _(order):
    reloaded = current_domain.repository_for(Order).get(order.id)
    assert reloaded.is_paid is True
    assert reloaded.is_confirmed_by_admin is True


@then(parsers.cfparse('the customer received {count:d} "{subject}" notification'))
def _(order, count, subject):
    sent = get_notifier().sent_to(Recipient(account_id=str(order.account_id)))
    assert [n.subject for n in sent].count(subject) == count


@then("the change is rejected because the order is cancelled")
def _(order, error):
    assert isinstance(error["exc"], InvalidState)
    reloaded = current_domain.repository_for(Order).get(order.id)
    assert reloaded.is_paid is False
    assert reloaded.is_delivered is False


@then(parsers.cfparse('seller "{seller_id}" sees {count:d} order'))
@then(parsers.cfparse('seller "{seller_id}" sees {count:d} orders'))
def _(seller_id, count):
    assert len(visible_orders(resolve_actor(seller_id))) == count


@then(parsers.cfparse("the admin sees {count:d} orders"))
def _(count):
    assert len(visible_orders(resolve_actor("admin-1"))) == count
