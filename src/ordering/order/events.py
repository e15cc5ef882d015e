"""Domain events for the Order aggregate.

``OrderPaid`` drives the invoice email and is raised at most once per order.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A pending order was written at checkout submission."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = String(max_length=255)
    email = String(required=True, max_length=254)
    total = Float(required=True)
    currency = String(required=True, max_length=3)
    payment_method = String(required=True, max_length=20)
    item_count = Integer(required=True)


@ordering.event(part_of="Order")
class PaymentSessionOpened:
    __version__ = 1

    order_id = Identifier(required=True)
    session_id = String(required=True, max_length=255)


@ordering.event(part_of="Order")
class OrderPaid:
    """The payment gateway confirmed payment for a pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = String(max_length=255)
    email = String(required=True, max_length=254)
    total = Float(required=True)
    currency = String(required=True, max_length=3)
    session_id = String(max_length=255)
    paid_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An admin set the order status directly."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)


@ordering.event(part_of="Order")
class TrackingCodeAssigned:
    __version__ = 1

    order_id = Identifier(required=True)
    tracking_code = String(required=True, max_length=100)


@ordering.event(part_of="Order")
class OrderExpired:
    """A pending order never completed payment and was cancelled by maintenance."""

    __version__ = 1

    order_id = Identifier(required=True)
    created_at = DateTime(required=True)
