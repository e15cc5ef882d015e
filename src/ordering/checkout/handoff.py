"""Manual-handoff message: a pre-filled order summary opened in a messaging app."""

from urllib.parse import quote

from ordering.order.order import Order
from ordering.order.pricing import format_amount


def build_handoff_message(order: Order) -> str:
    currency = order.currency
    items = "\n\n".join(
        f"• {item.name}\n"
        f"  Qty: {item.quantity} × {format_amount(item.price, currency)} = {format_amount(item.line_total, currency)}"
        for item in order.ordered_items
    )
    shipping = "FREE" if order.shipping_fee == 0 else format_amount(order.shipping_fee, currency)

    return (
        f"🛒 *New Order - #{order.short_reference}*\n\n"
        "👤 *Customer Details:*\n"
        f"Name: {order.customer_name}\n"
        f"Phone: {order.phone}\n"
        f"Email: {order.email}\n\n"
        f"📦 *Shipping Address:*\n{order.shipping_address}\n\n"
        "🛍️ *Order Items:*\n"
        f"{items}\n\n"
        "💰 *Order Summary:*\n"
        f"Subtotal: {format_amount(order.subtotal, currency)}\n"
        f"VAT (7.5%): {format_amount(order.tax, currency)}\n"
        f"Shipping: {shipping}\n"
        f"*Total: {format_amount(order.total, currency)}*\n\n"
        "Payment: Cash on Delivery"
    )


def handoff_link(message: str, phone: str) -> str:
    return f"https://wa.me/{phone}?text={quote(message, safe='')}"
