"""Fixed exchange rates, quoted against one pound sterling.

Used in development and tests, and as the fallback when live rates cannot
be fetched. A currency missing from the table converts at par.
"""

from ordering.exchange.port import ExchangeRates

RATES_FROM_GBP = {
    "gbp": 1.0,
    "usd": 1.27,
    "eur": 1.16,
    "ngn": 1900.0,
    "cad": 1.72,
    "aud": 1.93,
}


class FixedExchangeRates(ExchangeRates):
    def __init__(self, rates_from_gbp: dict[str, float] | None = None) -> None:
        self.rates_from_gbp = dict(rates_from_gbp or RATES_FROM_GBP)

    def rate(self, from_currency: str, to_currency: str) -> float:
        source, target = from_currency.lower(), to_currency.lower()
        if source == target:
            return 1.0
        if source not in self.rates_from_gbp or target not in self.rates_from_gbp:
            return 1.0
        return self.rates_from_gbp[target] / self.rates_from_gbp[source]
