"""Which hosted-checkout gateway the storefront talks to.

``PAYMENT_GATEWAY=stripe`` selects Stripe, keyed by ``STRIPE_SECRET_KEY``
and ``STRIPE_WEBHOOK_SECRET``. Any other value, or none, keeps the
in-process fake so local runs and tests never reach the network. Tests
install their own instance with ``set_gateway``.
"""

from ordering.gateway.fake_adapter import FakeGateway
from ordering.gateway.port import PaymentGateway
from ordering.gateway.stripe_adapter import StripeGateway
from shared.config import env_str

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    global _current_gateway
    if _current_gateway is None:
        if env_str("PAYMENT_GATEWAY", "fake").lower() == "stripe":
            _current_gateway = StripeGateway(
                api_key=env_str("STRIPE_SECRET_KEY"),
                webhook_secret=env_str("STRIPE_WEBHOOK_SECRET"),
            )
        else:
            _current_gateway = FakeGateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
