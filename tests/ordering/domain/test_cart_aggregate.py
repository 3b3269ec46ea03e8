"""Tests for the Cart aggregate."""

import pytest
from ordering.cart.cart import Cart, CartToken
from ordering.cart.events import CartCleared, CartLineAdded, CartLineRemoved, CartsMerged
from ordering.errors import InvalidArgument
from protean.exceptions import ValidationError


def _make_cart():
    return Cart.for_account("acc-001")


class TestCartIdentity:
    def test_account_cart(self):
        cart = _make_cart()
        assert cart.account_id == "acc-001"
        assert cart.token is None
        assert cart.is_anonymous is False

    def test_anonymous_cart(self):
        token = CartToken.generate()
        cart = Cart.anonymous(token)
        assert cart.token == token.value
        assert cart.account_id is None
        assert cart.is_anonymous is True

    def test_generated_tokens_differ(self):
        assert CartToken.generate() != CartToken.generate()

    def test_cart_needs_an_owner(self):
        with pytest.raises(ValidationError):
            Cart()

    def test_cart_cannot_have_both_owners(self):
        with pytest.raises(ValidationError):
            Cart(account_id="acc-001", token="tok-001")


class TestAddLine:
    def test_add_line(self):
        cart = _make_cart()
        cart.add_line("10", 2)
        assert len(cart.lines) == 1
        assert cart.quantity_of("10") == 2

    def test_adding_again_accumulates(self):
        cart = _make_cart()
        cart.add_line("10", 2)
        cart.add_line("10", 3)
        assert len(cart.lines) == 1
        assert cart.quantity_of("10") == 5

    def test_different_products_get_their_own_lines(self):
        cart = _make_cart()
        cart.add_line("10", 1)
        cart.add_line("11", 1)
        assert len(cart.lines) == 2

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, quantity):
        cart = _make_cart()
        with pytest.raises(InvalidArgument):
            cart.add_line("10", quantity)
        assert len(cart.lines) == 0

    def test_add_line_raises_event(self):
        cart = _make_cart()
        cart.add_line("10", 2)
        cart.add_line("10", 1)
        added = [e for e in cart._events if isinstance(e, CartLineAdded)]
        assert len(added) == 2
        assert added[-1].quantity_added == 1
        assert added[-1].new_quantity == 3


class TestRemoveLine:
    def test_remove_deletes_whole_line(self):
        cart = _make_cart()
        cart.add_line("10", 4)
        assert cart.remove_line("10") is True
        assert cart.quantity_of("10") == 0
        assert len(cart.lines) == 0

    def test_remove_absent_product_is_noop(self):
        cart = _make_cart()
        cart.add_line("10", 1)
        assert cart.remove_line("99") is False
        assert len(cart.lines) == 1
        assert not any(isinstance(e, CartLineRemoved) for e in cart._events)

    def test_remove_raises_event(self):
        cart = _make_cart()
        cart.add_line("10", 1)
        cart.remove_line("10")
        removed = [e for e in cart._events if isinstance(e, CartLineRemoved)]
        assert len(removed) == 1
        assert removed[0].product_id == "10"


class TestClearAndAbsorb:
    def test_clear_removes_everything(self):
        cart = _make_cart()
        cart.add_line("10", 1)
        cart.add_line("11", 2)
        assert cart.clear() == 2
        assert len(cart.lines) == 0
        cleared = [e for e in cart._events if isinstance(e, CartCleared)]
        assert cleared[0].lines_removed == 2

    def test_clearing_empty_cart_raises_nothing(self):
        cart = _make_cart()
        assert cart.clear() == 0
        assert not any(isinstance(e, CartCleared) for e in cart._events)

    def test_absorb_sums_quantities(self):
        cart = _make_cart()
        cart.add_line("10", 1)
        anonymous = Cart.anonymous(CartToken.generate())
        anonymous.add_line("10", 2)
        anonymous.add_line("11", 1)

        cart.absorb(anonymous)

        assert cart.quantity_of("10") == 3
        assert cart.quantity_of("11") == 1
        merged = [e for e in cart._events if isinstance(e, CartsMerged)]
        assert merged[0].lines_merged == 2
