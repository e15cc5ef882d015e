"""Mailer port and the message types that cross it."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OutboundEmail:
    to: str
    subject: str
    text: str
    html: str | None = None


@dataclass(frozen=True)
class DeliveryReceipt:
    delivered: bool
    message_id: str | None = None
    error: str | None = None


class Mailer(ABC):
    """Sends one email per call.

    Adapters report transport failures in the receipt instead of raising.
    """

    @abstractmethod
    def deliver(self, email: OutboundEmail) -> DeliveryReceipt: ...
