"""Exchange rate port (abstract interface)."""

from abc import ABC, abstractmethod


class ExchangeRates(ABC):
    """Converts store prices into the currency a shopper is charged in."""

    @abstractmethod
    def rate(self, from_currency: str, to_currency: str) -> float:
        """Units of ``to_currency`` per one unit of ``from_currency``."""
        ...

    def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        return amount * self.rate(from_currency, to_currency)
