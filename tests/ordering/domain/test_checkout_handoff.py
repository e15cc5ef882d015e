"""Tests for the manual-handoff order message and deep link."""

from urllib.parse import parse_qs, urlparse

from ordering.checkout.handoff import build_handoff_message, handoff_link


class TestHandoffMessage:
    def test_message_lists_reference_customer_and_items(self, make_order):
        order = make_order(items=[("prod-001", "Stockfish Middle", 1000, 3)], currency="ngn")
        message = build_handoff_message(order)

        assert message.startswith(f"🛒 *New Order - #{order.short_reference}*")
        assert "Name: Ada Obi" in message
        assert "Phone: +2348000000000" in message
        assert "Email: ada@example.com" in message
        assert "12 Marina Road, Lagos, Lagos 100001" in message
        assert "• Stockfish Middle\n  Qty: 3 × ₦1,000 = ₦3,000" in message

    def test_message_summarises_totals(self, make_order):
        order = make_order(items=[("prod-001", "Stockfish Middle", 1000, 3)], currency="ngn")
        message = build_handoff_message(order)

        assert "Subtotal: ₦3,000" in message
        assert "VAT (7.5%): ₦225" in message
        assert "Shipping: ₦2,000" in message
        assert "*Total: ₦5,225*" in message
        assert message.endswith("Payment: Cash on Delivery")

    def test_free_shipping_shown_as_free(self, make_order):
        order = make_order(items=[("prod-009", "Body Wave Wig", 60000, 1)], currency="ngn")
        assert "Shipping: FREE" in build_handoff_message(order)


class TestHandoffLink:
    def test_link_targets_phone_with_encoded_text(self):
        link = handoff_link("Hello & welcome\nline two", "2348146714124")
        parsed = urlparse(link)

        assert parsed.netloc == "wa.me"
        assert parsed.path == "/2348146714124"
        assert parse_qs(parsed.query)["text"] == ["Hello & welcome\nline two"]

    def test_reserved_characters_are_escaped(self):
        link = handoff_link("a&b=c", "1")
        assert "a%26b%3Dc" in link
