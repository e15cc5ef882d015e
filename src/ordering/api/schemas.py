"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept separate from the internal commands.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    user_id: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"user_id": "user-001"}]}}


class AddToCartRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    unit_price: float = Field(..., ge=0)
    image: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "stockfish-middle",
                    "name": "Stockfish Middle",
                    "unit_price": 18500,
                    "image": "/products/stockfish-middle.jpg",
                }
            ]
        }
    }


class ChangeIdentityRequest(BaseModel):
    user_id: str | None = None


# ---------------------------------------------------------------------------
# Checkout Request Schemas
# ---------------------------------------------------------------------------
class ShippingDetailsSchema(BaseModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""


class CheckoutRequest(BaseModel):
    cart_id: str
    payment_method: str = Field(..., description="hosted-gateway or manual-handoff")
    shipping: ShippingDetailsSchema
    user_id: str | None = None
    country: str | None = Field(None, max_length=2)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart_id": "3f2b8c1e-0000-4000-8000-000000000001",
                    "payment_method": "manual-handoff",
                    "user_id": "user-001",
                    "country": "NG",
                    "shipping": {
                        "full_name": "Ada Obi",
                        "email": "ada@example.com",
                        "phone": "+2348000000000",
                        "address": "12 Marina Road",
                        "city": "Lagos",
                        "state": "Lagos",
                        "postal_code": "100001",
                    },
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Admin Request Schemas
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str

    model_config = {"json_schema_extra": {"examples": [{"status": "shipped"}]}}


class AssignTrackingCodeRequest(BaseModel):
    tracking_code: str = Field(..., min_length=1, max_length=100)


class ExpireOrdersRequest(BaseModel):
    older_than_hours: int | None = Field(None, ge=1)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartLineResponse(BaseModel):
    product_id: str
    name: str
    unit_price: float
    image: str
    quantity: int


class CartResponse(BaseModel):
    cart_id: str
    user_id: str | None
    lines: list[CartLineResponse]
    total_items: int
    total_price: float

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        return cls(
            cart_id=str(cart.id),
            user_id=cart.user_id,
            lines=[
                CartLineResponse(
                    product_id=str(line.product_id),
                    name=line.name,
                    unit_price=line.unit_price,
                    image=line.image or "",
                    quantity=line.quantity,
                )
                for line in cart.ordered_lines
            ],
            total_items=cart.total_items(),
            total_price=cart.total_price(),
        )


class CartIdResponse(BaseModel):
    cart_id: str


class CheckoutResponse(BaseModel):
    order_id: str
    payment_method: str
    redirect_url: str | None = None
    session_id: str | None = None
    handoff_url: str | None = None
    handoff_message: str | None = None
    next_url: str | None = None


class ConfirmationResponse(BaseModel):
    order_id: str
    verified: bool
    assumed: bool
    paid: bool
    order_status: str


class SessionVerificationResponse(BaseModel):
    paid: bool
    status: str
    order_id: str | None = None
    customer_email: str | None = None
    amount_total: int | None = None


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    price: float
    image: str
    quantity: int


class OrderResponse(BaseModel):
    id: str
    user_id: str | None
    email: str
    customer_name: str
    phone: str
    items: list[OrderItemResponse]
    subtotal: float
    tax: float
    shipping_fee: float
    total: float
    currency: str
    charge_currency: str
    exchange_rate: float
    status: str
    tracking_code: str
    payment_method: str
    payment_session_id: str | None
    shipping_address: str
    created_at: datetime
    updated_at: datetime
    paid_at: datetime | None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            user_id=order.user_id,
            email=order.email,
            customer_name=order.customer_name or "",
            phone=order.phone or "",
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    price=item.price,
                    image=item.image or "",
                    quantity=item.quantity,
                )
                for item in order.ordered_items
            ],
            subtotal=order.subtotal,
            tax=order.tax,
            shipping_fee=order.shipping_fee,
            total=order.total,
            currency=order.currency,
            charge_currency=order.charge_currency or order.currency,
            exchange_rate=order.exchange_rate or 1.0,
            status=order.status,
            tracking_code=order.tracking_code or "",
            payment_method=order.payment_method,
            payment_session_id=order.payment_session_id,
            shipping_address=order.shipping_address,
            created_at=order.created_at,
            updated_at=order.updated_at,
            paid_at=order.paid_at,
        )


class DashboardResponse(BaseModel):
    total_orders: int
    total_revenue: int
    total_products: int
    pending_orders: int
    processing_orders: int
    delivered_orders: int
    total_stock: int
    items_sold: int
    out_of_stock_products: int


class RevenuePointResponse(BaseModel):
    date: date
    label: str
    revenue: int
    orders: int


class RevenueResponse(BaseModel):
    days: int
    series: list[RevenuePointResponse]
    current_week: int
    previous_week: int
    change_percent: float


class ChartPointResponse(BaseModel):
    date: date
    total: float


class SalesResponse(BaseModel):
    weekly_revenue: float
    monthly_revenue: float
    weekly_orders: int
    monthly_orders: int
    chart_data: list[ChartPointResponse]


class LowStockProductResponse(BaseModel):
    id: str
    name: str
    stock: int


class ExpiredOrdersResponse(BaseModel):
    expired_order_ids: list[str]


class WebhookResponse(BaseModel):
    received: bool = True
