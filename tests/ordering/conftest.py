from datetime import UTC, datetime

import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.checkout.flow import ShippingDetails
from ordering.order.order import Order, OrderItem, PaymentMethod
from ordering.order.pricing import calculate_pricing


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


def build_order(
    items=(("prod-001", "Stockfish Middle", 1000, 3),),
    payment_method=PaymentMethod.HOSTED_GATEWAY.value,
    user_id="user-001",
    email="ada@example.com",
    currency="ngn",
    age=None,
):
    order_items = [
        OrderItem(product_id=product_id, name=name, price=price, quantity=quantity, position=position)
        for position, (product_id, name, price, quantity) in enumerate(items)
    ]
    order = Order.place(
        email=email,
        items=order_items,
        pricing=calculate_pricing((item.price, item.quantity) for item in order_items),
        payment_method=payment_method,
        shipping_address="12 Marina Road, Lagos, Lagos 100001",
        user_id=user_id,
        customer_name="Ada Obi",
        phone="+2348000000000",
        currency=currency,
    )
    if age is not None:
        created = datetime.now(UTC) - age
        order.created_at = created
        order.updated_at = created
    return order


@pytest.fixture()
def make_order():
    return build_order


@pytest.fixture()
def saved_order():
    """Persist an order built with ``build_order`` keyword arguments."""

    def _save(**kwargs):
        order = build_order(**kwargs)
        current_domain.repository_for(Order).add(order)
        return order

    return _save


@pytest.fixture()
def filled_cart():
    """Persisted cart holding three units of a 1000 product, owned by user-001."""
    cart = Cart.create(user_id="user-001")
    for _ in range(3):
        cart.add_item(product_id="prod-001", name="Stockfish Middle", unit_price=1000, image="/products/s.jpg")
    current_domain.repository_for(Cart).add(cart)
    return cart


@pytest.fixture()
def shipping():
    return ShippingDetails(
        full_name="Ada Obi",
        email="ada@example.com",
        phone="+2348000000000",
        address="12 Marina Road",
        city="Lagos",
        state="Lagos",
        postal_code="100001",
    )


@pytest.fixture()
def shipping_fields(shipping):
    """The shipping details as PlaceOrder keyword arguments."""
    return {
        "full_name": shipping.full_name,
        "email": shipping.email,
        "phone": shipping.phone,
        "address": shipping.address,
        "city": shipping.city,
        "state": shipping.state,
        "postal_code": shipping.postal_code,
    }
