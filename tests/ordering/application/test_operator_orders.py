"""Application tests for orders created by administrators and sellers."""

import pytest
from ordering.errors import Forbidden, InvalidArgument, NotFound
from ordering.order.operator import CreateOrderAsOperator
from ordering.order.order import Order
from protean import current_domain

ADDRESS = {"street": "KN 4 Ave", "city": "Kigali", "country": "Rwanda"}


def _create(actor_id, lines, **customer):
    customer = customer or {"customer_account_id": "cust-1"}
    order_id = current_domain.process(
        CreateOrderAsOperator(
            actor_id=actor_id,
            lines=lines,
            shipping_address=ADDRESS,
            payment_method="PAY_ON_DELIVERY",
            **customer,
        ),
        asynchronous=False,
    )
    return current_domain.repository_for(Order).get(order_id)


class TestAdminCreatesOrder:
    def test_admin_can_sell_any_product(self, marketplace):
        order = _create("admin-1", [{"product_id": "10", "quantity": 2}, {"product_id": "11", "quantity": 1}])
        assert order.placed_by == "admin-1"
        assert order.account_id == "cust-1"
        assert order.pricing.total == 2450.0

    def test_admin_order_for_guest(self, marketplace):
        order = _create(
            "admin-1",
            [{"product_id": "10", "quantity": 1}],
            guest_name="Eric",
            guest_email="eric@example.com",
        )
        assert order.is_guest_order is True

    def test_live_prices_are_used(self, marketplace):
        from ordering.catalogue.sync import UpdateProductPrice

        current_domain.process(UpdateProductPrice(product_id="10", price=1500.0), asynchronous=False)
        order = _create("admin-1", [{"product_id": "10", "quantity": 1}])
        assert order.lines[0].unit_price == 1500.0


class TestSellerCreatesOrder:
    def test_seller_sells_own_products(self, marketplace):
        order = _create("seller-a", [{"product_id": "10", "quantity": 1}])
        assert order.placed_by == "seller-a"

    def test_seller_cannot_sell_foreign_products(self, marketplace):
        with pytest.raises(Forbidden):
            _create("seller-a", [{"product_id": "10", "quantity": 1}, {"product_id": "11", "quantity": 1}])
        assert current_domain.repository_for(Order).every() == []

    def test_pending_seller_is_forbidden(self, marketplace):
        with pytest.raises(Forbidden):
            _create("seller-p", [{"product_id": "12", "quantity": 1}])


class TestOperatorValidation:
    def test_customer_cannot_create_orders(self, marketplace):
        with pytest.raises(Forbidden):
            _create("cust-1", [{"product_id": "10", "quantity": 1}])

    def test_guest_without_email(self, marketplace):
        with pytest.raises(InvalidArgument):
            _create("admin-1", [{"product_id": "10", "quantity": 1}], guest_name="Eric")

    def test_both_customer_kinds(self, marketplace):
        with pytest.raises(InvalidArgument):
            _create(
                "admin-1",
                [{"product_id": "10", "quantity": 1}],
                customer_account_id="cust-1",
                guest_email="eric@example.com",
            )

    def test_no_lines(self, marketplace):
        with pytest.raises(InvalidArgument):
            _create("admin-1", [])

    def test_unknown_product(self, marketplace):
        with pytest.raises(NotFound):
            _create("admin-1", [{"product_id": "999", "quantity": 1}])

    def test_unknown_customer_account(self, marketplace):
        with pytest.raises(NotFound):
            _create("admin-1", [{"product_id": "10", "quantity": 1}], customer_account_id="ghost")

    def test_unknown_actor(self, marketplace):
        with pytest.raises(Forbidden):
            _create("ghost", [{"product_id": "10", "quantity": 1}])
