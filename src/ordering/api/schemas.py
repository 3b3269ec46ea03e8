"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Business validation (quantities, addresses,
payment methods) stays in the domain so every entry point reports it the
same way.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    street: str | None = None
    city: str | None = None
    district: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None


class OperatorLineSchema(BaseModel):
    product_id: str
    quantity: int


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1

    model_config = {"json_schema_extra": {"examples": [{"product_id": "10", "quantity": 2}]}}


class RemoveFromCartRequest(BaseModel):
    product_id: str


class MergeCartRequest(BaseModel):
    cart_token: str | None = None


class CartLineResponse(BaseModel):
    product_id: str
    product_name: str | None = None
    quantity: int
    unit_price: float | None = None
    amount: float = 0.0


class CartResponse(BaseModel):
    cart_id: str | None = None
    cart_token: str | None = None
    lines: list[CartLineResponse] = Field(default_factory=list)
    item_count: int = 0
    subtotal: float = 0.0


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    shipping_address: AddressSchema | None = None
    payment_method: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "KN 4 Ave",
                        "city": "Kigali",
                        "country": "Rwanda",
                    },
                    "payment_method": "MTN",
                }
            ]
        }
    }


class GuestCheckoutRequest(BaseModel):
    customer_name: str | None = None
    customer_email: str | None = None
    shipping_address: AddressSchema | None = None
    payment_method: str | None = None
    cart_token: str | None = None


class CreateOrderRequest(BaseModel):
    customer_account_id: str | None = None
    guest_name: str | None = None
    guest_email: str | None = None
    lines: list[OperatorLineSchema] = Field(default_factory=list)
    shipping_address: AddressSchema | None = None
    payment_method: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    is_paid: bool | None = None
    is_delivered: bool | None = None
    is_cancelled: bool | None = None


# ---------------------------------------------------------------------------
# Order Response Schemas
# ---------------------------------------------------------------------------
class OrderLineResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    amount: float


class PricingResponse(BaseModel):
    subtotal: float
    discount: float
    delivery_fee: float
    total: float
    currency: str


class OrderResponse(BaseModel):
    id: str
    order_number: str
    account_id: str | None = None
    guest_name: str | None = None
    guest_email: str | None = None
    lines: list[OrderLineResponse]
    shipping_address: AddressSchema | None = None
    pricing: PricingResponse
    payment_method: str
    placed_by: str | None = None
    is_paid: bool
    paid_at: datetime | None = None
    is_delivered: bool
    delivered_at: datetime | None = None
    is_confirmed_by_admin: bool
    confirmed_at: datetime | None = None
    is_cancelled: bool
    cancelled_at: datetime | None = None
    cancelled_by: str | None = None
    payment_code: str | None = None
    customer_confirmed_at: datetime | None = None
    created_at: datetime | None = None


class OrderIdResponse(BaseModel):
    order_id: str


class StatusChangeResponse(BaseModel):
    order_id: str
    changed: list[str]


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Payment Schemas
# ---------------------------------------------------------------------------
class PaymentCodeResponse(BaseModel):
    order_id: str
    payment_code: str
    instructions: str | None = None
    total: float
    currency: str


# ---------------------------------------------------------------------------
# Seller Schemas
# ---------------------------------------------------------------------------
class SellerOrderResponse(BaseModel):
    id: str
    order_number: str
    account_id: str | None = None
    guest_name: str | None = None
    guest_email: str | None = None
    lines: list[OrderLineResponse]
    seller_subtotal: float
    is_paid: bool
    is_delivered: bool
    is_cancelled: bool
    created_at: datetime | None = None


class SellerCustomerResponse(BaseModel):
    customer_key: str
    account_id: str | None = None
    name: str | None = None
    email: str | None = None
    is_guest: bool
    order_count: int
    last_order_at: datetime | None = None


class SellerStatsResponse(BaseModel):
    total_products: int
    total_orders: int
    total_revenue: float
    total_customers: int


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    owner_id: str
