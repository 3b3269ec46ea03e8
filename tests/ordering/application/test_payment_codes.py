"""Application tests for payment code issuance and customer confirmation."""

import pytest
from ordering.errors import Forbidden, InvalidState, PreconditionFailed, Upstream
from ordering.order.order import Order
from ordering.order.status_updates import UpdateOrderStatus
from ordering.payment import set_payment_channel
from ordering.payment.issuance import ConfirmPaymentByCustomer, IssuePaymentCode
from ordering.payment.static_code import StaticCodeChannel
from protean import current_domain


def _issue(order_id, actor_id=None):
    return current_domain.process(IssuePaymentCode(order_id=order_id, actor_id=actor_id), asynchronous=False)


def _confirm(order_id, actor_id=None):
    return current_domain.process(ConfirmPaymentByCustomer(order_id=order_id, actor_id=actor_id), asynchronous=False)


def _reload(order):
    return current_domain.repository_for(Order).get(order.id)


class TestIssuePaymentCode:
    def test_static_code_is_issued_and_recorded(self, place_order):
        order = place_order({"10": 1}, account_id="cust-1")
        result = _issue(order.id, actor_id="cust-1")

        assert result["payment_code"] == "0787778889"
        assert result["total"] == order.pricing.total
        assert order.order_number in result["instructions"]
        assert _reload(order).payment_code == "0787778889"

    def test_code_comes_from_environment(self, place_order, monkeypatch):
        monkeypatch.setenv("PAYMENT_STATIC_CODE", "0788000000")
        set_payment_channel(StaticCodeChannel())
        order = place_order({"10": 1}, account_id="cust-1")
        assert _issue(order.id, actor_id="cust-1")["payment_code"] == "0788000000"

    def test_guest_order_needs_no_account(self, place_order):
        order = place_order({"10": 1})
        assert _issue(order.id)["payment_code"] == "0787778889"

    def test_other_account_is_forbidden(self, place_order):
        order = place_order({"10": 1}, account_id="cust-1")
        with pytest.raises(Forbidden):
            _issue(order.id, actor_id="cust-2")
        with pytest.raises(Forbidden):
            _issue(order.id)

    def test_cancelled_order(self, place_order):
        order = place_order({"10": 1}, account_id="cust-1")
        current_domain.process(
            UpdateOrderStatus(order_id=order.id, actor_id="admin-1", is_cancelled=True), asynchronous=False
        )
        with pytest.raises(InvalidState):
            _issue(order.id, actor_id="cust-1")

    def test_channel_failure_is_upstream(self, place_order, payment_channel):
        order = place_order({"10": 1}, account_id="cust-1")
        payment_channel.configure(should_fail=True)
        with pytest.raises(Upstream):
            _issue(order.id, actor_id="cust-1")
        assert _reload(order).payment_code is None


class TestConfirmPaymentByCustomer:
    def test_requires_issued_code(self, place_order):
        order = place_order({"10": 1}, account_id="cust-1")
        with pytest.raises(PreconditionFailed):
            _confirm(order.id, actor_id="cust-1")

    def test_marks_paid_without_admin_confirmation(self, place_order):
        order = place_order({"10": 1}, account_id="cust-1")
        _issue(order.id, actor_id="cust-1")
        assert _confirm(order.id, actor_id="cust-1") is True

        reloaded = _reload(order)
        assert reloaded.is_paid is True
        assert reloaded.customer_confirmed_at is not None
        assert reloaded.is_confirmed_by_admin is False

    def test_confirming_twice(self, place_order):
        order = place_order({"10": 1}, account_id="cust-1")
        _issue(order.id, actor_id="cust-1")
        _confirm(order.id, actor_id="cust-1")
        assert _confirm(order.id, actor_id="cust-1") is False

    def test_other_account_is_forbidden(self, place_order):
        order = place_order({"10": 1}, account_id="cust-1")
        _issue(order.id, actor_id="cust-1")
        with pytest.raises(Forbidden):
            _confirm(order.id, actor_id="cust-2")

    def test_channel_rejects_changed_code(self, place_order):
        order = place_order({"10": 1}, account_id="cust-1")
        _issue(order.id, actor_id="cust-1")
        set_payment_channel(StaticCodeChannel(code="0700000000"))
        with pytest.raises(PreconditionFailed):
            _confirm(order.id, actor_id="cust-1")
        assert _reload(order).is_paid is False
