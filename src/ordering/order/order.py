"""Order aggregate: the record written at checkout and its status lifecycle.

Status changes come from two places:
- admins set any status directly (no workflow enforcement), and
- payment confirmation moves a ``pending`` order to ``paid`` and nothing else.

Items and pricing are snapshots taken at creation and never re-derived.
Amounts are in the store currency; ``charge_currency`` and ``exchange_rate``
record what the payment gateway was asked to collect.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.order.events import (
    OrderExpired,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
    PaymentSessionOpened,
    TrackingCodeAssigned,
)
from ordering.order.pricing import OrderPricing


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    HOSTED_GATEWAY = "hosted-gateway"
    MANUAL_HANDOFF = "manual-handoff"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    position = Integer(default=0)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = String(max_length=255)
    email = String(required=True, max_length=254)
    customer_name = String(max_length=200)
    phone = String(max_length=50)
    items = HasMany(OrderItem)
    subtotal = Float(required=True, min_value=0.0)
    tax = Float(required=True, min_value=0.0)
    shipping_fee = Float(required=True, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="ngn")
    charge_currency = String(max_length=3)
    exchange_rate = Float(default=1.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    tracking_code = String(max_length=100)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_session_id = String(max_length=255)
    shipping_address = Text(required=True)
    created_at = DateTime()
    updated_at = DateTime()
    paid_at = DateTime()

    @invariant.post
    def total_must_equal_sum_of_parts(self):
        if abs((self.subtotal + self.tax + self.shipping_fee) - self.total) > 0.005:
            raise ValidationError({"total": ["Total must equal subtotal + tax + shipping fee"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        email,
        items,
        pricing: OrderPricing,
        payment_method,
        shipping_address,
        user_id=None,
        customer_name=None,
        phone=None,
        currency="ngn",
        charge_currency=None,
        exchange_rate=1.0,
    ):
        """Write-ready pending order. ``items`` are OrderItem snapshots of the cart lines."""
        if not items:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            email=email,
            customer_name=customer_name,
            phone=phone,
            items=items,
            subtotal=pricing.subtotal,
            tax=pricing.tax,
            shipping_fee=pricing.shipping_fee,
            total=pricing.total,
            currency=currency,
            charge_currency=charge_currency or currency,
            exchange_rate=exchange_rate,
            status=OrderStatus.PENDING.value,
            payment_method=payment_method,
            shipping_address=shipping_address,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=user_id,
                email=order.email,
                total=order.total,
                currency=order.currency,
                payment_method=order.payment_method,
                item_count=order.item_count,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def ordered_items(self) -> list:
        return sorted(self.items, key=lambda item: item.position)

    @property
    def short_reference(self) -> str:
        """Customer-facing reference: first eight characters of the id, upper-cased."""
        return str(self.id)[:8].upper()

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def is_stale(self, cutoff: datetime) -> bool:
        return (
            self.status == OrderStatus.PENDING.value
            and self.payment_method == PaymentMethod.HOSTED_GATEWAY.value
            and self.created_at < cutoff
        )

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def attach_payment_session(self, session_id):
        if self.status != OrderStatus.PENDING.value:
            raise InvalidOperationError(f"Cannot open a payment session for a {self.status} order")

        self.payment_session_id = session_id
        self.updated_at = datetime.now(UTC)
        self.raise_(PaymentSessionOpened(order_id=str(self.id), session_id=session_id))

    def mark_paid(self, session_id=None, paid_at=None) -> bool:
        """Record a payment confirmation.

        Only a ``pending`` order moves to ``paid``. Returns False, changing
        nothing, when the order is already paid or in any other status.
        """
        if self.status != OrderStatus.PENDING.value:
            return False

        now = paid_at or datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.paid_at = now
        self.updated_at = now
        if session_id:
            self.payment_session_id = session_id

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                user_id=self.user_id,
                email=self.email,
                total=self.total,
                currency=self.currency,
                session_id=self.payment_session_id,
                paid_at=now,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def update_status(self, new_status) -> str:
        """Set any status. Returns the previous status."""
        try:
            target = OrderStatus(new_status).value
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status '{new_status}'"]}) from None

        previous = self.status
        if target == previous:
            return previous

        self.status = target
        self.updated_at = datetime.now(UTC)
        self.raise_(OrderStatusChanged(order_id=str(self.id), previous_status=previous, new_status=target))
        return previous

    def assign_tracking_code(self, tracking_code):
        code = (tracking_code or "").strip()
        if not code:
            raise ValidationError({"tracking_code": ["Tracking code cannot be empty"]})

        self.tracking_code = code
        self.updated_at = datetime.now(UTC)
        self.raise_(TrackingCodeAssigned(order_id=str(self.id), tracking_code=code))

    def expire(self):
        if self.status != OrderStatus.PENDING.value:
            raise InvalidOperationError(f"Only pending orders can expire, order is {self.status}")

        self.status = OrderStatus.CANCELLED.value
        self.updated_at = datetime.now(UTC)
        self.raise_(OrderExpired(order_id=str(self.id), created_at=self.created_at))
