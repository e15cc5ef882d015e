"""Invoice rendering and the paid-order invoice email.

The email is fire-and-forget: delivery failures are logged and never
interrupt payment confirmation.
"""

from html import escape

from protean import handle

from ordering.domain import logger, ordering
from ordering.notifications import get_mailer
from ordering.notifications.port import OutboundEmail
from ordering.order.events import OrderPaid
from ordering.order.order import Order
from ordering.order.pricing import format_amount


def invoice_email(to: str, order_id: str, total: float, currency: str) -> OutboundEmail:
    amount = format_amount(total, currency)
    return OutboundEmail(
        to=to,
        subject="Your Invoice - Order Confirmation",
        text=(
            "Thank you for your purchase!\n\n"
            f"Order ID: {order_id}\n"
            f"Total: {amount}\n\n"
            "Your payment has been confirmed."
        ),
        html=(
            "<h3>Thank you for your purchase!</h3>"
            f"<p><strong>Order ID:</strong> {escape(order_id)}</p>"
            f"<p><strong>Total:</strong> {escape(amount)}</p>"
            "<p>Your payment has been confirmed.</p>"
        ),
    )


def render_invoice_html(order: Order) -> str:
    """Printable invoice page for an order."""
    rows = "".join(
        "<tr>"
        f"<td>{escape(item.name)}</td>"
        f"<td>{item.quantity}</td>"
        f"<td>{escape(format_amount(item.price, order.currency))}</td>"
        f"<td>{escape(format_amount(item.line_total, order.currency))}</td>"
        "</tr>"
        for item in order.ordered_items
    )
    shipping = "FREE" if order.shipping_fee == 0 else format_amount(order.shipping_fee, order.currency)
    return (
        "<!DOCTYPE html><html><head><meta charset='utf-8'>"
        f"<title>Invoice {escape(str(order.id))}</title></head><body>"
        "<h1>INVOICE</h1>"
        f"<p>Order ID: {escape(str(order.id))}</p>"
        f"<p>Status: {escape(order.status or '')}</p>"
        f"<p>Tracking: {escape(order.tracking_code or 'N/A')}</p>"
        "<table><thead><tr><th>Item</th><th>Qty</th><th>Price</th><th>Amount</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>"
        f"<p>Subtotal: {escape(format_amount(order.subtotal, order.currency))}</p>"
        f"<p>VAT (7.5%): {escape(format_amount(order.tax, order.currency))}</p>"
        f"<p>Shipping: {escape(shipping)}</p>"
        f"<p><strong>Total: {escape(format_amount(order.total, order.currency))}</strong></p>"
        "</body></html>"
    )


@ordering.event_handler(part_of=Order)
class InvoiceEmailHandler:
    """Emails the invoice once payment is confirmed."""

    @handle(OrderPaid)
    def send_invoice_email(self, event: OrderPaid) -> None:
        order_id = str(event.order_id)
        email = invoice_email(event.email, order_id, event.total, event.currency)
        try:
            receipt = get_mailer().deliver(email)
        except Exception as exc:
            logger.error("invoice_email_failed", order_id=order_id, error=str(exc))
            return

        if receipt.delivered:
            logger.info("invoice_email_sent", order_id=order_id, message_id=receipt.message_id)
        else:
            logger.error("invoice_email_failed", order_id=order_id, error=receipt.error)
