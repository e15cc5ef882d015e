"""Checkout step machine: cart → details → payment → submitted.

Each forward transition has a guard: leaving ``cart`` needs at least one
line, leaving ``details`` needs every mandatory shipping field. Both guards
are checked again when the order is built, so a flow can never reach order
creation with an empty cart or incomplete details.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from protean.exceptions import InvalidOperationError, ValidationError

from ordering.cart.cart import Cart
from ordering.order.order import Order, OrderItem, PaymentMethod
from ordering.order.pricing import calculate_pricing


class CheckoutStep(Enum):
    CART = "cart"
    DETAILS = "details"
    PAYMENT = "payment"
    SUBMITTED = "submitted"


_PREVIOUS_STEP = {
    CheckoutStep.DETAILS: CheckoutStep.CART,
    CheckoutStep.PAYMENT: CheckoutStep.DETAILS,
}


@dataclass(frozen=True)
class ShippingDetails:
    """Shipping input collected at the details step. Only ``postal_code`` is optional."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("full_name", "email", "phone", "address", "city", "state")

    def missing_fields(self) -> list[str]:
        return [name for name in self.REQUIRED_FIELDS if not (getattr(self, name) or "").strip()]

    def address_line(self) -> str:
        return f"{self.address}, {self.city}, {self.state} {self.postal_code or ''}"


class CheckoutFlow:
    def __init__(self, cart: Cart) -> None:
        self.cart = cart
        self.step = CheckoutStep.CART
        self.details: ShippingDetails | None = None
        self.payment_method: PaymentMethod | None = None

    def _require_step(self, expected: CheckoutStep) -> None:
        if self.step != expected:
            raise InvalidOperationError(f"Checkout is at the {self.step.value} step, expected {expected.value}")

    def _check_cart(self) -> None:
        if self.cart.is_empty:
            raise ValidationError({"cart": ["Your cart is empty"]})

    def _check_details(self, details: ShippingDetails | None) -> None:
        missing = details.missing_fields() if details is not None else list(ShippingDetails.REQUIRED_FIELDS)
        if missing:
            raise ValidationError({name: ["This field is required"] for name in missing})

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def proceed_to_details(self) -> None:
        self._require_step(CheckoutStep.CART)
        self._check_cart()
        self.step = CheckoutStep.DETAILS

    def submit_details(self, details: ShippingDetails) -> None:
        self._require_step(CheckoutStep.DETAILS)
        self._check_details(details)
        self.details = details
        self.step = CheckoutStep.PAYMENT

    def select_payment_method(self, method) -> None:
        self._require_step(CheckoutStep.PAYMENT)
        try:
            self.payment_method = PaymentMethod(method)
        except ValueError:
            raise ValidationError({"payment_method": [f"Unknown payment method '{method}'"]}) from None

    def back(self) -> None:
        previous = _PREVIOUS_STEP.get(self.step)
        if previous is None:
            raise InvalidOperationError(f"Cannot go back from the {self.step.value} step")
        self.step = previous

    def build_order(self, user_id, currency: str, charge_currency: str | None = None, exchange_rate: float = 1.0):
        """Build the pending order for submission, re-checking every guard."""
        self._require_step(CheckoutStep.PAYMENT)
        if self.payment_method is None:
            raise ValidationError({"payment_method": ["Choose a payment method"]})
        self._check_cart()
        self._check_details(self.details)

        items = [
            OrderItem(
                product_id=line.product_id,
                name=line.name,
                price=line.unit_price,
                image=line.image,
                quantity=line.quantity,
                position=line.position,
            )
            for line in self.cart.ordered_lines
        ]
        pricing = calculate_pricing((item.price, item.quantity) for item in items)

        return Order.place(
            user_id=user_id,
            email=self.details.email.strip(),
            customer_name=self.details.full_name.strip(),
            phone=self.details.phone.strip(),
            items=items,
            pricing=pricing,
            currency=currency,
            charge_currency=charge_currency,
            exchange_rate=exchange_rate,
            payment_method=self.payment_method.value,
            shipping_address=self.details.address_line(),
        )

    def mark_submitted(self) -> None:
        self._require_step(CheckoutStep.PAYMENT)
        self.step = CheckoutStep.SUBMITTED
