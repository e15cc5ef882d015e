"""FastAPI endpoints for the Ordering domain.

Routes that talk to the payment gateway, or wait on it, are plain ``def``
so FastAPI runs them in its threadpool. Each pushes the ordering context
itself around its domain work.
"""

import time

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.analytics import views
from ordering.analytics.stats import week_over_week
from ordering.api.schemas import (
    AddToCartRequest,
    AssignTrackingCodeRequest,
    CartIdResponse,
    CartResponse,
    ChangeIdentityRequest,
    ChartPointResponse,
    CheckoutRequest,
    CheckoutResponse,
    ConfirmationResponse,
    CreateCartRequest,
    DashboardResponse,
    ExpiredOrdersResponse,
    ExpireOrdersRequest,
    LowStockProductResponse,
    OrderResponse,
    RevenuePointResponse,
    RevenueResponse,
    SalesResponse,
    SessionVerificationResponse,
    UpdateOrderStatusRequest,
    WebhookResponse,
)
from ordering.cart.cart import Cart
from ordering.cart.items import AddToCart, ClearCart, DecreaseCartItem, RemoveFromCart
from ordering.cart.management import ChangeCartIdentity, CreateCart
from ordering.checkout.confirmation import ConfirmCheckoutSuccess, VerifyPaymentSession, process_webhook
from ordering.checkout.placement import PlaceOrder
from ordering.domain import logger, ordering
from ordering.gateway.port import PaymentGatewayError, WebhookSignatureError
from ordering.notifications.invoice import render_invoice_html
from ordering.order.expiry import ExpireStaleOrders
from ordering.order.queries import get_order, list_all_orders, list_customer_orders
from ordering.order.status import AssignTrackingCode, UpdateOrderStatus
from ordering.settings import verify_delay_seconds
from shared.api import require_admin

cart_router = APIRouter(prefix="/carts", tags=["carts"])
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _cart_response(cart_id: str) -> CartResponse:
    return CartResponse.from_cart(current_domain.repository_for(Cart).get(cart_id))


# --- Cart endpoints ---


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    cart_id = current_domain.process(CreateCart(user_id=body.user_id), asynchronous=False)
    return CartIdResponse(cart_id=cart_id)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    return _cart_response(cart_id)


@cart_router.post("/{cart_id}/items", response_model=CartResponse)
async def add_to_cart(cart_id: str, body: AddToCartRequest) -> CartResponse:
    command = AddToCart(
        cart_id=cart_id,
        product_id=body.product_id,
        name=body.name,
        unit_price=body.unit_price,
        image=body.image,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(cart_id)


@cart_router.post("/{cart_id}/items/{product_id}/decrease", response_model=CartResponse)
async def decrease_cart_item(cart_id: str, product_id: str) -> CartResponse:
    current_domain.process(DecreaseCartItem(cart_id=cart_id, product_id=product_id), asynchronous=False)
    return _cart_response(cart_id)


@cart_router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(cart_id: str, product_id: str) -> CartResponse:
    current_domain.process(RemoveFromCart(cart_id=cart_id, product_id=product_id), asynchronous=False)
    return _cart_response(cart_id)


@cart_router.delete("/{cart_id}/items", response_model=CartResponse)
async def clear_cart(cart_id: str) -> CartResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return _cart_response(cart_id)


@cart_router.put("/{cart_id}/identity", response_model=CartResponse)
async def change_cart_identity(cart_id: str, body: ChangeIdentityRequest) -> CartResponse:
    current_domain.process(ChangeCartIdentity(cart_id=cart_id, user_id=body.user_id), asynchronous=False)
    return _cart_response(cart_id)


# --- Checkout endpoints ---


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
def place_order(body: CheckoutRequest) -> CheckoutResponse:
    command = PlaceOrder(
        cart_id=body.cart_id,
        payment_method=body.payment_method,
        user_id=body.user_id,
        country=body.country,
        **body.shipping.model_dump(),
    )
    with ordering.domain_context():
        outcome = current_domain.process(command, asynchronous=False)
    if not outcome.succeeded:
        raise HTTPException(
            status_code=502,
            detail={"order_id": outcome.order_id, "error": outcome.error or "Payment gateway unavailable"},
        )
    return CheckoutResponse(
        order_id=outcome.order_id,
        payment_method=outcome.payment_method,
        redirect_url=outcome.redirect_url,
        session_id=outcome.session_id,
        handoff_url=outcome.handoff_url,
        handoff_message=outcome.handoff_message,
        next_url=outcome.next_url,
    )


@checkout_router.get("/success", response_model=ConfirmationResponse)
def checkout_success(session_id: str, order_id: str, cart_id: str | None = None) -> ConfirmationResponse:
    """Confirmation page: clear the cart, wait, then verify the session once."""
    delay = verify_delay_seconds()
    if delay > 0:
        time.sleep(delay)

    with ordering.domain_context():
        outcome = current_domain.process(
            ConfirmCheckoutSuccess(session_id=session_id, order_id=order_id, cart_id=cart_id),
            asynchronous=False,
        )
    return ConfirmationResponse(
        order_id=outcome.order_id,
        verified=outcome.verified,
        assumed=outcome.assumed,
        paid=outcome.paid,
        order_status=outcome.order_status,
    )


@checkout_router.get("/verify", response_model=SessionVerificationResponse)
def verify_session(session_id: str | None = None) -> SessionVerificationResponse:
    if not session_id:
        raise ValidationError({"session_id": ["No session_id provided"]})
    try:
        with ordering.domain_context():
            status = current_domain.process(VerifyPaymentSession(session_id=session_id), asynchronous=False)
    except PaymentGatewayError as exc:
        logger.error("session_verification_failed", session_id=session_id, error=str(exc))
        raise HTTPException(status_code=500, detail="Could not verify session") from exc

    return SessionVerificationResponse(
        paid=status.paid,
        status=status.payment_status,
        order_id=status.order_id,
        customer_email=status.customer_email,
        amount_total=status.amount_total,
    )


async def _raw_body(request: Request) -> bytes:
    return await request.body()


@checkout_router.post("/webhook", response_model=WebhookResponse)
def payment_webhook(
    payload: bytes = Depends(_raw_body),
    stripe_signature: str | None = Header(None),
) -> WebhookResponse:
    if not stripe_signature:
        raise HTTPException(status_code=400, detail="Missing signature")

    try:
        with ordering.domain_context():
            process_webhook(payload, stripe_signature)
    except WebhookSignatureError as exc:
        logger.warning("webhook_signature_rejected", error=str(exc))
        raise HTTPException(status_code=400, detail=f"Webhook Error: {exc}") from exc
    return WebhookResponse()


# --- Customer order endpoints ---


@order_router.get("", response_model=list[OrderResponse])
async def list_my_orders(user_id: str) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in list_customer_orders(user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order_detail(order_id: str) -> OrderResponse:
    return OrderResponse.from_order(get_order(order_id))


@order_router.get("/{order_id}/invoice", response_class=HTMLResponse)
async def get_invoice(order_id: str) -> HTMLResponse:
    return HTMLResponse(render_invoice_html(get_order(order_id)))


# --- Admin endpoints ---


@admin_router.get("/orders", response_model=list[OrderResponse])
async def admin_list_orders(limit: int = Query(0, ge=0)) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in list_all_orders(limit=limit)]


@admin_router.get("/orders/export")
async def admin_export_orders() -> Response:
    return Response(
        content=views.orders_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="orders.csv"'},
    )


@admin_router.put("/orders/{order_id}/status", response_model=OrderResponse)
async def admin_update_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_order(get_order(order_id))


@admin_router.put("/orders/{order_id}/tracking", response_model=OrderResponse)
async def admin_assign_tracking(order_id: str, body: AssignTrackingCodeRequest) -> OrderResponse:
    current_domain.process(
        AssignTrackingCode(order_id=order_id, tracking_code=body.tracking_code),
        asynchronous=False,
    )
    return OrderResponse.from_order(get_order(order_id))


@admin_router.get("/dashboard", response_model=DashboardResponse)
async def admin_dashboard() -> DashboardResponse:
    return DashboardResponse(**vars(views.dashboard()))


@admin_router.get("/revenue", response_model=RevenueResponse)
async def admin_revenue(days: int = Query(30, ge=1, le=366)) -> RevenueResponse:
    series = views.revenue(days=days)
    comparison = week_over_week(series)
    return RevenueResponse(
        days=days,
        series=[
            RevenuePointResponse(date=point.day, label=point.label, revenue=point.revenue, orders=point.orders)
            for point in series
        ],
        current_week=comparison.current_week,
        previous_week=comparison.previous_week,
        change_percent=comparison.change_percent,
    )


@admin_router.get("/sales", response_model=SalesResponse)
async def admin_sales() -> SalesResponse:
    analytics = views.sales()
    return SalesResponse(
        weekly_revenue=analytics.weekly_revenue,
        monthly_revenue=analytics.monthly_revenue,
        weekly_orders=analytics.weekly_orders,
        monthly_orders=analytics.monthly_orders,
        chart_data=[ChartPointResponse(date=day, total=total) for day, total in analytics.chart],
    )


@admin_router.get("/low-stock", response_model=list[LowStockProductResponse])
async def admin_low_stock(threshold: int = Query(5, ge=1)) -> list[LowStockProductResponse]:
    return [
        LowStockProductResponse(id=str(product.id), name=product.name, stock=product.stock)
        for product in views.low_stock(threshold=threshold)
    ]


@admin_router.post("/maintenance/expire-orders", response_model=ExpiredOrdersResponse)
async def admin_expire_orders(body: ExpireOrdersRequest) -> ExpiredOrdersResponse:
    expired = current_domain.process(ExpireStaleOrders(older_than_hours=body.older_than_hours), asynchronous=False)
    return ExpiredOrdersResponse(expired_order_ids=expired)
