import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    from protean import current_domain

    from ordering.notification import reset_notifier
    from ordering.payment import reset_payment_channel

    with ordering_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

    reset_notifier()
    reset_payment_channel()


@pytest.fixture()
def notifier():
    """The in-memory notification adapter for the current test."""
    from ordering.notification import get_notifier

    return get_notifier()


@pytest.fixture()
def payment_channel():
    from ordering.payment import get_payment_channel

    return get_payment_channel()


# ---------------------------------------------------------------------------
# Marketplace records
# ---------------------------------------------------------------------------
ADDRESS = {"street": "KN 4 Ave", "city": "Kigali", "country": "Rwanda"}


def register_account(account_id, name, role="Customer", seller_status=None):
    from protean import current_domain

    from ordering.accounts.sync import RegisterAccount

    return current_domain.process(
        RegisterAccount(
            account_id=account_id,
            name=name,
            email=f"{name.lower()}@example.com",
            role=role,
            seller_status=seller_status,
        ),
        asynchronous=False,
    )


def register_product(product_id, name, price, owner_id):
    from protean import current_domain

    from ordering.catalogue.sync import RegisterProduct

    return current_domain.process(
        RegisterProduct(product_id=product_id, name=name, price=price, owner_id=owner_id),
        asynchronous=False,
    )


@pytest.fixture()
def marketplace():
    """One admin, two active sellers, one pending seller and a customer.

    Seller A owns product 10 (1000 RWF), seller B owns product 11 (500 RWF).
    """
    register_account("admin-1", "Admin", role="Admin")
    register_account("seller-a", "Alice", role="Seller", seller_status="Active")
    register_account("seller-b", "Bosco", role="Seller", seller_status="Active")
    register_account("seller-p", "Pacifique", role="Seller", seller_status="Pending")
    register_account("cust-1", "Claire")
    register_account("cust-2", "Didier")
    register_product("10", "Agaseke Basket", 1000.0, "seller-a")
    register_product("11", "Woven Mat", 500.0, "seller-b")
    register_product("12", "Clay Pot", 300.0, "seller-p")
    return {
        "admin": "admin-1",
        "seller_a": "seller-a",
        "seller_b": "seller-b",
        "pending_seller": "seller-p",
        "customer": "cust-1",
        "other_customer": "cust-2",
    }


@pytest.fixture()
def place_order(marketplace):
    """Return a helper that fills a cart and checks it out.

    ``lines`` maps product id to quantity. Without ``account_id`` the order is
    placed as a guest with ``guest_email``.
    """
    from protean import current_domain

    from ordering.cart.items import AddToCart
    from ordering.order.checkout import Checkout, GuestCheckout
    from ordering.order.order import Order

    def _place(lines, account_id=None, guest_email="guest@example.com", payment_method="MTN"):
        token = None
        for product_id, quantity in lines.items():
            result = current_domain.process(
                AddToCart(account_id=account_id, cart_token=token, product_id=product_id, quantity=quantity),
                asynchronous=False,
            )
            token = result["cart_token"]

        if account_id:
            command = Checkout(account_id=account_id, shipping_address=ADDRESS, payment_method=payment_method)
        else:
            command = GuestCheckout(
                customer_name="Guest",
                customer_email=guest_email,
                cart_token=token,
                shipping_address=ADDRESS,
                payment_method=payment_method,
            )
        order_id = current_domain.process(command, asynchronous=False)
        return current_domain.repository_for(Order).get(order_id)

    return _place
