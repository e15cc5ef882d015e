"""Payment gateway port (abstract interface).

Defines the contract for hosted-checkout gateways. This enables swapping
between FakeGateway (dev/test) and StripeGateway (production) without
changing any domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class PaymentGatewayError(Exception):
    """The gateway could not be reached or refused the request."""


class WebhookSignatureError(PaymentGatewayError):
    """A webhook payload failed signature verification."""


@dataclass(frozen=True)
class SessionLineItem:
    """One line on the hosted payment page, priced in minor units."""

    name: str
    unit_amount: int
    quantity: int
    image: str | None = None


@dataclass(frozen=True)
class HostedSession:
    """A created hosted payment page."""

    id: str
    url: str


@dataclass(frozen=True)
class SessionStatus:
    """Payment state of a hosted session, with the metadata echoed back."""

    session_id: str
    payment_status: str
    order_id: str | None = None
    customer_email: str | None = None
    amount_total: int | None = None
    metadata: dict = field(default_factory=dict)

    @property
    def paid(self) -> bool:
        return self.payment_status == "paid"


class PaymentGateway(ABC):
    """Abstract hosted-checkout gateway interface."""

    @abstractmethod
    def create_session(
        self,
        line_items: list[SessionLineItem],
        currency: str,
        success_url: str,
        cancel_url: str,
        customer_email: str,
        metadata: dict[str, str],
        idempotency_key: str,
    ) -> HostedSession:
        """Create a hosted payment session."""
        ...

    @abstractmethod
    def retrieve_session(self, session_id: str) -> SessionStatus:
        """Look up the payment state of a session."""
        ...

    @abstractmethod
    def parse_webhook(self, payload: bytes, signature: str) -> dict:
        """Verify a webhook payload and return the decoded event.

        Raises WebhookSignatureError when the signature does not match.
        """
        ...
