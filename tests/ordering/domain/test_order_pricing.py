"""Tests for order pricing and amount formatting."""

from ordering.order.pricing import calculate_pricing, format_amount, to_minor_units


class TestCalculatePricing:
    def test_small_order_pays_flat_shipping(self):
        pricing = calculate_pricing([(1000, 3)])
        assert pricing.subtotal == 3000
        assert pricing.tax == 225
        assert pricing.shipping_fee == 2000
        assert pricing.total == 5225

    def test_large_order_ships_free(self):
        pricing = calculate_pricing([(60000, 1)])
        assert pricing.tax == 4500
        assert pricing.shipping_fee == 0
        assert pricing.total == 64500

    def test_threshold_is_exclusive(self):
        pricing = calculate_pricing([(50000, 1)])
        assert pricing.shipping_fee == 2000

    def test_tax_rounds_half_up(self):
        # 7.5% of 1010 is 75.75; 7.5% of 1002 is 75.15
        assert calculate_pricing([(1010, 1)]).tax == 76
        assert calculate_pricing([(1002, 1)]).tax == 75
        # 7.5% of 1020 is exactly 76.5
        assert calculate_pricing([(1020, 1)]).tax == 77

    def test_subtotal_sums_every_line(self):
        pricing = calculate_pricing([(1500, 2), (18500, 1)])
        assert pricing.subtotal == 21500

    def test_total_is_subtotal_plus_tax_plus_shipping(self):
        pricing = calculate_pricing([(12345, 3)])
        assert pricing.total == pricing.subtotal + pricing.tax + pricing.shipping_fee


class TestFormatAmount:
    def test_naira_with_thousands_separator(self):
        assert format_amount(5225, "ngn") == "₦5,225"

    def test_pounds(self):
        assert format_amount(64500, "gbp") == "£64,500"

    def test_fractional_amount_keeps_two_decimals(self):
        assert format_amount(12.5, "usd") == "$12.50"

    def test_unknown_currency_falls_back_to_code(self):
        assert format_amount(10, "jpy") == "JPY 10"


class TestMinorUnits:
    def test_whole_amount(self):
        assert to_minor_units(1000) == 100000

    def test_fractional_amount(self):
        assert to_minor_units(19.99) == 1999
