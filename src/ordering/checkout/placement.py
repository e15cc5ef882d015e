"""PlaceOrder command + handler: checkout submission.

1. Run the cart through the step machine (all guards apply).
2. Write the order with status ``pending``.
3. Branch on payment method:
   - hosted-gateway: open a hosted payment session and return its URL.
     The cart stays intact until the confirmation page.
   - manual-handoff: clear the cart and return the messaging deep link.

There is no compensation: if the gateway fails after step 2, the pending
order stays behind (the stale-order sweep cancels it later) and the
outcome reports the failure with the order id.
"""

from dataclasses import dataclass

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.checkout.flow import CheckoutFlow, ShippingDetails
from ordering.checkout.handoff import build_handoff_message, handoff_link
from ordering.checkout.retry import get_retry_policy
from ordering.domain import logger, ordering
from ordering.exchange import get_rates
from ordering.gateway import get_gateway
from ordering.gateway.currency import resolve_currency
from ordering.gateway.port import SessionLineItem
from ordering.order.order import Order, PaymentMethod
from ordering.order.pricing import to_minor_units
from ordering.settings import handoff_phone, site_url, store_currency


@ordering.command(part_of="Order")
class PlaceOrder:
    cart_id = Identifier(required=True)
    payment_method = String(required=True, max_length=20)
    user_id = String(max_length=255)
    country = String(max_length=50)
    full_name = String(max_length=200)
    email = String(max_length=254)
    phone = String(max_length=50)
    address = String(max_length=500)
    city = String(max_length=100)
    state = String(max_length=100)
    postal_code = String(max_length=20)

    def shipping_details(self) -> ShippingDetails:
        return ShippingDetails(
            full_name=self.full_name or "",
            email=self.email or "",
            phone=self.phone or "",
            address=self.address or "",
            city=self.city or "",
            state=self.state or "",
            postal_code=self.postal_code or "",
        )


@dataclass(frozen=True)
class CheckoutOutcome:
    order_id: str
    payment_method: str
    succeeded: bool
    redirect_url: str | None = None
    session_id: str | None = None
    handoff_url: str | None = None
    handoff_message: str | None = None
    next_url: str | None = None
    error: str | None = None
    attempts: int = 0


def session_line_items(order: Order, rate: float = 1.0) -> list[SessionLineItem]:
    """Order lines plus VAT and (when charged) shipping, converted at ``rate`` into minor units."""
    items = [
        SessionLineItem(
            name=item.name,
            unit_amount=to_minor_units(item.price * rate),
            quantity=item.quantity,
            image=item.image or None,
        )
        for item in order.ordered_items
    ]
    if order.tax:
        items.append(SessionLineItem(name="VAT (7.5%)", unit_amount=to_minor_units(order.tax * rate), quantity=1))
    if order.shipping_fee:
        items.append(
            SessionLineItem(name="Shipping", unit_amount=to_minor_units(order.shipping_fee * rate), quantity=1)
        )
    return items


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = current_domain.repository_for(Cart).get(command.cart_id)
        user_id = command.user_id or cart.user_id
        if not user_id:
            raise ValidationError({"user_id": ["Sign in to place an order"]})

        flow = CheckoutFlow(cart)
        flow.proceed_to_details()
        flow.submit_details(command.shipping_details())
        flow.select_payment_method(command.payment_method)

        base_currency = store_currency()
        if flow.payment_method == PaymentMethod.HOSTED_GATEWAY:
            charge_currency = resolve_currency(command.country)
            exchange_rate = get_rates().rate(base_currency, charge_currency)
        else:
            charge_currency, exchange_rate = base_currency, 1.0

        order = flow.build_order(
            user_id=user_id,
            currency=base_currency,
            charge_currency=charge_currency,
            exchange_rate=exchange_rate,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=order.id,
            cart_id=cart.id,
            payment_method=order.payment_method,
            total=order.total,
            currency=order.currency,
            charge_currency=order.charge_currency,
        )

        if order.payment_method == PaymentMethod.HOSTED_GATEWAY.value:
            return self._open_payment_session(order, cart, flow)
        return self._hand_off(order, cart, flow)

    def _open_payment_session(self, order, cart, flow) -> CheckoutOutcome:
        base = site_url()
        gateway = get_gateway()
        result = get_retry_policy().call(
            lambda: gateway.create_session(
                line_items=session_line_items(order, order.exchange_rate),
                currency=order.charge_currency,
                success_url=(
                    f"{base}/checkout/success?session_id={{CHECKOUT_SESSION_ID}}&order_id={order.id}&cart_id={cart.id}"
                ),
                cancel_url=f"{base}/cart",
                customer_email=order.email,
                metadata={"orderId": str(order.id), "cartId": str(cart.id)},
                idempotency_key=f"checkout-{order.id}",
            )
        )

        if not result.ok:
            logger.error(
                "payment_session_failed",
                order_id=order.id,
                attempts=result.attempts,
                error=result.error,
            )
            return CheckoutOutcome(
                order_id=str(order.id),
                payment_method=order.payment_method,
                succeeded=False,
                error=result.error,
                attempts=result.attempts,
            )

        session = result.value
        order.attach_payment_session(session.id)
        current_domain.repository_for(Order).add(order)
        flow.mark_submitted()

        logger.info("payment_session_opened", order_id=order.id, session_id=session.id, attempts=result.attempts)
        return CheckoutOutcome(
            order_id=str(order.id),
            payment_method=order.payment_method,
            succeeded=True,
            redirect_url=session.url,
            session_id=session.id,
            attempts=result.attempts,
        )

    def _hand_off(self, order, cart, flow) -> CheckoutOutcome:
        cart.clear(reason="manual-handoff")
        current_domain.repository_for(Cart).add(cart)
        flow.mark_submitted()

        message = build_handoff_message(order)
        logger.info("order_handed_off", order_id=order.id, cart_id=cart.id)
        return CheckoutOutcome(
            order_id=str(order.id),
            payment_method=order.payment_method,
            succeeded=True,
            handoff_url=handoff_link(message, handoff_phone()),
            handoff_message=message,
            next_url=f"/orders/{order.id}?success=true",
        )
