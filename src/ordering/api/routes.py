"""FastAPI routes for the Ordering domain: carts, orders, payments, seller views.

The caller is identified by the ``X-Account-Id`` header (absent for guests)
and an anonymous cart by the ``X-Cart-Token`` header.
"""

from fastapi import APIRouter, Header
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.access.actor import Guest, resolve_actor
from ordering.access.customers import my_customers, seller_orders, seller_stats
from ordering.access.visibility import customer_orders, ensure_can_view_order, visible_orders, visible_products
from ordering.api.schemas import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    CreateOrderRequest,
    GuestCheckoutRequest,
    MergeCartRequest,
    OrderIdResponse,
    OrderLineResponse,
    OrderResponse,
    PaymentCodeResponse,
    PricingResponse,
    ProductResponse,
    RemoveFromCartRequest,
    SellerCustomerResponse,
    SellerOrderResponse,
    SellerStatsResponse,
    StatusChangeResponse,
    StatusResponse,
    UpdateOrderStatusRequest,
)
from ordering.cart import store
from ordering.cart.items import AddToCart, RemoveFromCart
from ordering.cart.management import MergeAnonymousCart
from ordering.catalogue.product import Product
from ordering.errors import Forbidden, InvalidArgument
from ordering.order.admin_confirmation import ConfirmPaymentByAdmin
from ordering.order.checkout import Checkout, GuestCheckout
from ordering.order.operator import CreateOrderAsOperator
from ordering.order.order import load_order
from ordering.order.status_updates import UpdateOrderStatus
from ordering.payment.issuance import ConfirmPaymentByCustomer, IssuePaymentCode


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------
def _line_response(line) -> OrderLineResponse:
    return OrderLineResponse(
        product_id=str(line.product_id),
        product_name=line.product_name,
        quantity=line.quantity,
        unit_price=line.unit_price,
        amount=line.amount,
    )


def order_response(order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        id=str(order.id),
        order_number=order.order_number,
        account_id=order.account_id,
        guest_name=order.guest_name,
        guest_email=order.guest_email,
        lines=[_line_response(line) for line in order.lines],
        shipping_address=(
            {
                "street": address.street,
                "city": address.city,
                "district": address.district,
                "postal_code": address.postal_code,
                "country": address.country,
                "phone": address.phone,
            }
            if address
            else None
        ),
        pricing=PricingResponse(
            subtotal=order.pricing.subtotal,
            discount=order.pricing.discount,
            delivery_fee=order.pricing.delivery_fee,
            total=order.pricing.total,
            currency=order.pricing.currency,
        ),
        payment_method=order.payment_method,
        placed_by=order.placed_by,
        is_paid=bool(order.is_paid),
        paid_at=order.paid_at,
        is_delivered=bool(order.is_delivered),
        delivered_at=order.delivered_at,
        is_confirmed_by_admin=bool(order.is_confirmed_by_admin),
        confirmed_at=order.confirmed_at,
        is_cancelled=bool(order.is_cancelled),
        cancelled_at=order.cancelled_at,
        cancelled_by=order.cancelled_by,
        payment_code=order.payment_code,
        customer_confirmed_at=order.customer_confirmed_at,
        created_at=order.created_at,
    )


def cart_response(cart, cart_token: str | None = None) -> CartResponse:
    if cart is None:
        return CartResponse(cart_token=cart_token)

    products = current_domain.repository_for(Product)
    lines = []
    for line in cart.lines:
        try:
            product = products.get(str(line.product_id))
            name, price = product.name, product.price
        except ObjectNotFoundError:
            name, price = None, None
        lines.append(
            CartLineResponse(
                product_id=str(line.product_id),
                product_name=name,
                quantity=line.quantity,
                unit_price=price,
                amount=(price or 0.0) * line.quantity,
            )
        )

    return CartResponse(
        cart_id=str(cart.id),
        cart_token=cart.token or cart_token,
        lines=lines,
        item_count=sum(line.quantity for line in lines),
        subtotal=sum(line.amount for line in lines),
    )


def _address(body) -> dict | None:
    return body.shipping_address.model_dump(exclude_none=True) if body.shipping_address else None


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(
    x_account_id: str | None = Header(default=None),
    x_cart_token: str | None = Header(default=None),
) -> CartResponse:
    resolve_actor(x_account_id)
    identity = store.identity_from(x_account_id, x_cart_token)
    return cart_response(store.find_cart(identity))


@cart_router.post("/add", response_model=CartResponse)
async def add_to_cart(
    body: AddToCartRequest,
    x_account_id: str | None = Header(default=None),
    x_cart_token: str | None = Header(default=None),
) -> CartResponse:
    resolve_actor(x_account_id)
    command = AddToCart(
        account_id=x_account_id,
        cart_token=None if x_account_id else x_cart_token,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    identity = store.identity_from(x_account_id, result["cart_token"])
    return cart_response(store.find_cart(identity), result["cart_token"])


@cart_router.delete("/remove", response_model=CartResponse)
async def remove_from_cart(
    body: RemoveFromCartRequest,
    x_account_id: str | None = Header(default=None),
    x_cart_token: str | None = Header(default=None),
) -> CartResponse:
    resolve_actor(x_account_id)
    command = RemoveFromCart(
        account_id=x_account_id,
        cart_token=None if x_account_id else x_cart_token,
        product_id=body.product_id,
    )
    current_domain.process(command, asynchronous=False)
    return cart_response(store.find_cart(store.identity_from(x_account_id, x_cart_token)))


@cart_router.post("/merge", response_model=CartResponse)
async def merge_cart(
    body: MergeCartRequest,
    x_account_id: str | None = Header(default=None),
    x_cart_token: str | None = Header(default=None),
) -> CartResponse:
    if not x_account_id:
        raise Forbidden({"actor": ["Sign in to merge a cart into your account"]})
    token = body.cart_token or x_cart_token
    if not token:
        raise InvalidArgument({"cart_token": ["A cart token is required"]})

    resolve_actor(x_account_id)
    current_domain.process(MergeAnonymousCart(account_id=x_account_id, cart_token=token), asynchronous=False)
    return cart_response(store.find_cart(store.identity_from(x_account_id)))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/order", tags=["orders"])


@order_router.post("/checkout", status_code=201, response_model=OrderResponse)
async def checkout(body: CheckoutRequest, x_account_id: str | None = Header(default=None)) -> OrderResponse:
    if isinstance(resolve_actor(x_account_id), Guest):
        raise Forbidden({"actor": ["Sign in to check out, or use guest checkout"]})

    command = Checkout(
        account_id=x_account_id,
        shipping_address=_address(body),
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return order_response(load_order(order_id))


@order_router.post("/checkout-guest", status_code=201, response_model=OrderResponse)
async def checkout_guest(
    body: GuestCheckoutRequest,
    x_cart_token: str | None = Header(default=None),
) -> OrderResponse:
    command = GuestCheckout(
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        cart_token=body.cart_token or x_cart_token,
        shipping_address=_address(body),
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return order_response(load_order(order_id))


@order_router.post("/create", status_code=201, response_model=OrderIdResponse)
async def create_order(body: CreateOrderRequest, x_account_id: str | None = Header(default=None)) -> OrderIdResponse:
    if not x_account_id:
        raise Forbidden({"actor": ["Only administrators and sellers can create orders for customers"]})

    command = CreateOrderAsOperator(
        actor_id=x_account_id,
        customer_account_id=body.customer_account_id,
        guest_name=body.guest_name,
        guest_email=body.guest_email,
        lines=[line.model_dump() for line in body.lines],
        shipping_address=_address(body),
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=order_id)


@order_router.get("/all", response_model=list[OrderResponse])
async def list_orders(x_account_id: str | None = Header(default=None)) -> list[OrderResponse]:
    return [order_response(order) for order in visible_orders(resolve_actor(x_account_id))]


@order_router.get("/mine", response_model=list[OrderResponse])
async def list_my_orders(x_account_id: str | None = Header(default=None)) -> list[OrderResponse]:
    return [order_response(order) for order in customer_orders(resolve_actor(x_account_id))]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, x_account_id: str | None = Header(default=None)) -> OrderResponse:
    actor = resolve_actor(x_account_id)
    return order_response(ensure_can_view_order(actor, load_order(order_id)))


@order_router.put("/{order_id}/status", response_model=StatusChangeResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    x_account_id: str | None = Header(default=None),
) -> StatusChangeResponse:
    if not x_account_id:
        raise Forbidden({"actor": ["Only administrators and sellers can change an order's status"]})

    command = UpdateOrderStatus(
        order_id=order_id,
        actor_id=x_account_id,
        is_paid=body.is_paid,
        is_delivered=body.is_delivered,
        is_cancelled=body.is_cancelled,
    )
    changed = current_domain.process(command, asynchronous=False)
    return StatusChangeResponse(order_id=order_id, changed=changed or [])


@order_router.put("/{order_id}/confirm-payment", response_model=OrderResponse)
async def confirm_payment(order_id: str, x_account_id: str | None = Header(default=None)) -> OrderResponse:
    if not x_account_id:
        raise Forbidden({"actor": ["Only administrators and sellers can confirm payments"]})

    current_domain.process(ConfirmPaymentByAdmin(order_id=order_id, actor_id=x_account_id), asynchronous=False)
    return order_response(load_order(order_id))


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payment", tags=["payments"])


@payment_router.post("/{order_id}/issue-code", response_model=PaymentCodeResponse)
async def issue_payment_code(order_id: str, x_account_id: str | None = Header(default=None)) -> PaymentCodeResponse:
    result = current_domain.process(IssuePaymentCode(order_id=order_id, actor_id=x_account_id), asynchronous=False)
    return PaymentCodeResponse(**result)


@payment_router.post("/{order_id}/confirm", response_model=StatusResponse)
async def confirm_payment_by_customer(
    order_id: str,
    x_account_id: str | None = Header(default=None),
) -> StatusResponse:
    command = ConfirmPaymentByCustomer(order_id=order_id, actor_id=x_account_id)
    changed = current_domain.process(command, asynchronous=False)
    return StatusResponse(status="payment_reported" if changed else "already_reported")


# ---------------------------------------------------------------------------
# Seller Router
# ---------------------------------------------------------------------------
seller_router = APIRouter(prefix="/seller", tags=["seller"])


@seller_router.get("/my-customers", response_model=list[SellerCustomerResponse])
async def list_my_customers(x_account_id: str | None = Header(default=None)) -> list[SellerCustomerResponse]:
    return [SellerCustomerResponse(**entry) for entry in my_customers(resolve_actor(x_account_id))]


@seller_router.get("/orders", response_model=list[SellerOrderResponse])
async def list_seller_orders(x_account_id: str | None = Header(default=None)) -> list[SellerOrderResponse]:
    views = seller_orders(resolve_actor(x_account_id))
    return [
        SellerOrderResponse(
            id=str(view["order"].id),
            order_number=view["order"].order_number,
            account_id=view["order"].account_id,
            guest_name=view["order"].guest_name,
            guest_email=view["order"].guest_email,
            lines=[_line_response(line) for line in view["lines"]],
            seller_subtotal=view["seller_subtotal"],
            is_paid=bool(view["order"].is_paid),
            is_delivered=bool(view["order"].is_delivered),
            is_cancelled=bool(view["order"].is_cancelled),
            created_at=view["order"].created_at,
        )
        for view in views
    ]


@seller_router.get("/stats", response_model=SellerStatsResponse)
async def get_seller_stats(x_account_id: str | None = Header(default=None)) -> SellerStatsResponse:
    return SellerStatsResponse(**seller_stats(resolve_actor(x_account_id)))


@seller_router.get("/products", response_model=list[ProductResponse])
async def list_seller_products(x_account_id: str | None = Header(default=None)) -> list[ProductResponse]:
    return [
        ProductResponse(id=str(p.id), name=p.name, price=p.price, owner_id=str(p.owner_id))
        for p in visible_products(resolve_actor(x_account_id))
    ]
