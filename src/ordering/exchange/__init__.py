"""Exchange rate factory.

Fixed rates unless ``EXCHANGE_RATES=live``, in which case rates are fetched
per checkout and fall back to the fixed table on any failure.
"""

from ordering.exchange.fixed_adapter import FixedExchangeRates
from ordering.exchange.live_adapter import LiveExchangeRates
from ordering.exchange.port import ExchangeRates
from shared.config import env_str

_current_rates: ExchangeRates | None = None


def get_rates() -> ExchangeRates:
    global _current_rates
    if _current_rates is None:
        if env_str("EXCHANGE_RATES", "fixed").lower() == "live":
            _current_rates = LiveExchangeRates(base_url=env_str("EXCHANGE_RATES_URL", "https://api.exchangerate.host"))
        else:
            _current_rates = FixedExchangeRates()
    return _current_rates


def set_rates(rates: ExchangeRates) -> None:
    global _current_rates
    _current_rates = rates


def reset_rates() -> None:
    global _current_rates
    _current_rates = None
