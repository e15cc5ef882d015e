"""Order pricing rules.

The total is frozen on the order at creation; later catalogue price edits
never change it.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

TAX_RATE = Decimal("0.075")
FLAT_SHIPPING_FEE = Decimal("2000")
FREE_SHIPPING_THRESHOLD = Decimal("50000")

CURRENCY_SYMBOLS = {
    "gbp": "£",
    "ngn": "₦",
    "usd": "$",
    "eur": "€",
    "cad": "CA$",
    "aud": "A$",
}


@dataclass(frozen=True)
class OrderPricing:
    subtotal: float
    tax: float
    shipping_fee: float
    total: float


def _money(value) -> Decimal:
    return Decimal(str(value))


def calculate_pricing(lines) -> OrderPricing:
    """Price ``(unit_price, quantity)`` pairs.

    subtotal + round(subtotal * 7.5%) + shipping, where shipping is waived
    once the subtotal exceeds the free-shipping threshold.
    """
    subtotal = sum((_money(price) * quantity for price, quantity in lines), Decimal("0"))
    tax = (subtotal * TAX_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    shipping_fee = Decimal("0") if subtotal > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    total = subtotal + tax + shipping_fee
    return OrderPricing(
        subtotal=float(subtotal),
        tax=float(tax),
        shipping_fee=float(shipping_fee),
        total=float(total),
    )


def format_amount(amount: float, currency: str = "ngn") -> str:
    """Render an amount with its currency symbol and thousands separators, e.g. ``₦5,225``."""
    symbol = CURRENCY_SYMBOLS.get(currency.lower(), currency.upper() + " ")
    value = _money(amount)
    if value == value.to_integral_value():
        return f"{symbol}{int(value):,}"
    return f"{symbol}{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,}"


def to_minor_units(amount: float) -> int:
    """Whole minor units (pence, kobo, cents) for the payment gateway."""
    return int((_money(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
