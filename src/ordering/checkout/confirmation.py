"""Payment confirmation: the paths that move an order from pending to paid.

Two independent signals can confirm a hosted-gateway payment:

- the gateway's server-to-server webhook (``checkout.session.completed``), and
- the confirmation page, which clears the cart, waits briefly and then
  verifies the session exactly once.

Both funnel into ``record_payment``, which claims the order with a
conditional write that only matches a pending order, so whichever signal
arrives second is a no-op and ``OrderPaid`` is raised once.

The confirmation page is fail-open: when the single verification call
fails, the outcome reports ``verified`` with ``assumed`` set and the order
is left untouched for the webhook to settle.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.checkout.retry import SINGLE_ATTEMPT
from ordering.domain import logger, ordering
from ordering.gateway import get_gateway
from ordering.order.order import Order, OrderStatus

SESSION_COMPLETED = "checkout.session.completed"


@ordering.command(part_of="Order")
class VerifyPaymentSession:
    session_id = String(required=True, max_length=255)


@ordering.command(part_of="Order")
class ConfirmCheckoutSuccess:
    session_id = String(required=True, max_length=255)
    order_id = Identifier(required=True)
    cart_id = Identifier()


@ordering.command(part_of="Order")
class ConfirmPayment:
    """A verified gateway notification that a session was paid."""

    order_id = Identifier(required=True)
    session_id = String(max_length=255)


@dataclass(frozen=True)
class ConfirmationOutcome:
    order_id: str
    verified: bool
    assumed: bool
    paid: bool
    order_status: str
    error: str | None = None


def record_payment(order_id: str, session_id: str | None) -> bool:
    """Move the order to paid. Returns True only when this call changed it."""
    repo = current_domain.repository_for(Order)
    try:
        order = repo.get(order_id)
    except ObjectNotFoundError:
        logger.warning("payment_for_unknown_order", order_id=order_id, session_id=session_id)
        return False

    if order.status != OrderStatus.PENDING.value:
        if order.status == OrderStatus.PAID.value:
            logger.debug("order_already_paid", order_id=order.id, session_id=session_id)
        else:
            logger.warning(
                "payment_confirmation_ignored",
                order_id=order.id,
                order_status=order.status,
                session_id=session_id,
            )
        return False

    paid_at = datetime.now(UTC)
    if not repo.claim_payment(str(order.id), session_id, paid_at):
        logger.info("payment_already_claimed", order_id=order.id, session_id=session_id)
        return False

    order.mark_paid(session_id, paid_at=paid_at)
    repo.add(order)

    logger.info("order_paid", order_id=order.id, session_id=session_id, total=order.total)
    return True


def process_webhook(payload: bytes, signature: str) -> dict:
    """Verify a gateway notification and confirm the payment it reports.

    WebhookSignatureError propagates.
    """
    event = get_gateway().parse_webhook(payload, signature)
    event_type = event.get("type")

    if event_type != SESSION_COMPLETED:
        logger.info("webhook_event_ignored", event_type=event_type)
        return {"received": True}

    session = (event.get("data") or {}).get("object") or {}
    order_id = (session.get("metadata") or {}).get("orderId")
    if not order_id and session.get("id"):
        # Sessions created before metadata carried the order id
        order = current_domain.repository_for(Order).by_payment_session(session["id"])
        order_id = str(order.id) if order else None
    if session.get("payment_status", "paid") != "paid" or not order_id:
        logger.info(
            "webhook_session_not_payable",
            session_id=session.get("id"),
            payment_status=session.get("payment_status"),
            order_id=order_id,
        )
        return {"received": True}

    current_domain.process(ConfirmPayment(order_id=order_id, session_id=session.get("id")), asynchronous=False)
    return {"received": True}


@ordering.command_handler(part_of=Order)
class PaymentConfirmationHandler:
    @handle(ConfirmPayment)
    def confirm_payment(self, command):
        return record_payment(command.order_id, command.session_id)

    @handle(VerifyPaymentSession)
    def verify_payment_session(self, command):
        """Look up a session and record the payment when it is paid.

        Gateway errors propagate to the caller.
        """
        status = get_gateway().retrieve_session(command.session_id)
        if status.paid and status.order_id:
            record_payment(status.order_id, status.session_id)
        return status

    @handle(ConfirmCheckoutSuccess)
    def confirm_checkout_success(self, command):
        if command.cart_id:
            _clear_cart(command.cart_id)

        gateway = get_gateway()
        result = SINGLE_ATTEMPT.call(lambda: gateway.retrieve_session(command.session_id))
        repo = current_domain.repository_for(Order)
        if not result.ok:
            order = repo.get(command.order_id)
            logger.warning(
                "payment_verification_failed_assuming_paid",
                order_id=order.id,
                session_id=command.session_id,
                order_status=order.status,
                error=result.error,
            )
            return ConfirmationOutcome(
                order_id=str(order.id),
                verified=True,
                assumed=True,
                paid=order.status == OrderStatus.PAID.value,
                order_status=order.status,
                error=result.error,
            )

        status = result.value
        order_id = status.order_id or command.order_id
        if status.paid:
            record_payment(order_id, status.session_id)

        order = repo.get(order_id)
        return ConfirmationOutcome(
            order_id=str(order.id),
            verified=status.paid,
            assumed=False,
            paid=order.status == OrderStatus.PAID.value,
            order_status=order.status,
        )


def _clear_cart(cart_id: str) -> None:
    repo = current_domain.repository_for(Cart)
    try:
        cart = repo.get(cart_id)
    except ObjectNotFoundError:
        logger.warning("confirmation_cart_missing", cart_id=cart_id)
        return
    cart.clear(reason="checkout-success")
    repo.add(cart)
