"""Tests for error kinds and notification templates."""

import pytest
from ordering.errors import (
    Conflict,
    EmptyCart,
    Forbidden,
    InvalidArgument,
    InvalidState,
    NotFound,
    PreconditionFailed,
    Upstream,
)
from ordering.notification.port import Recipient, Severity
from ordering.notification.templates import TEMPLATE_REGISTRY, get_template
from ordering.notification.templates.types import NotificationType


class TestErrors:
    @pytest.mark.parametrize(
        "error_cls, status_code",
        [
            (NotFound, 404),
            (InvalidArgument, 400),
            (EmptyCart, 400),
            (Forbidden, 403),
            (PreconditionFailed, 412),
            (InvalidState, 409),
            (Conflict, 409),
            (Upstream, 503),
        ],
    )
    def test_status_codes(self, error_cls, status_code):
        assert error_cls("boom").status_code == status_code

    def test_plain_message_is_wrapped(self):
        assert NotFound("missing").messages == {"_entity": ["missing"]}

    def test_empty_cart_defaults(self):
        error = EmptyCart()
        assert isinstance(error, InvalidArgument)
        assert error.messages == {"cart": ["Cart is empty"]}

    def test_invalid_state_is_a_failed_precondition(self):
        assert issubclass(InvalidState, PreconditionFailed)


class TestTemplates:
    def test_every_type_has_a_template(self):
        assert set(TEMPLATE_REGISTRY) == set(NotificationType)

    def test_render_order_placed(self):
        content = get_template(NotificationType.ORDER_PLACED).render(
            {"order_number": "ORD-1", "total": 2450.0, "currency": "RWF"}
        )
        assert content["subject"] == "Order Placed"
        assert "ORD-1" in content["message"]
        assert "2,450" in content["message"]

    def test_cancellation_is_a_warning(self):
        assert get_template(NotificationType.ORDER_CANCELLED).severity == Severity.WARNING


class TestRecipient:
    def test_needs_account_or_email(self):
        with pytest.raises(ValueError):
            Recipient()

    def test_str(self):
        assert str(Recipient(account_id="acc-1")) == "account:acc-1"
        assert str(Recipient(email="a@example.com")) == "email:a@example.com"
