"""In-memory mailer that keeps an outbox for assertions."""

from uuid import uuid4

from ordering.notifications.port import DeliveryReceipt, Mailer, OutboundEmail


class FakeMailer(Mailer):
    def __init__(self) -> None:
        self.outbox: list[OutboundEmail] = []
        self.failure: str | None = None

    def fail_with(self, reason: str | None) -> None:
        """Make every following delivery fail with ``reason`` (``None`` restores delivery)."""
        self.failure = reason

    def deliver(self, email: OutboundEmail) -> DeliveryReceipt:
        if self.failure:
            return DeliveryReceipt(delivered=False, error=self.failure)

        self.outbox.append(email)
        return DeliveryReceipt(delivered=True, message_id=f"email-{uuid4().hex[:12]}")
