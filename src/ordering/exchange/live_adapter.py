"""Live exchange rates from exchangerate.host, falling back to fixed rates."""

import httpx
import structlog

from ordering.exchange.fixed_adapter import FixedExchangeRates
from ordering.exchange.port import ExchangeRates

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.exchangerate.host"


class LiveExchangeRates(ExchangeRates):
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 5.0,
        fallback: ExchangeRates | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.fallback = fallback or FixedExchangeRates()
        self.client = client

    def rate(self, from_currency: str, to_currency: str) -> float:
        source, target = from_currency.lower(), to_currency.lower()
        if source == target:
            return 1.0

        try:
            response = self._get(
                f"{self.base_url}/convert",
                params={"from": source.upper(), "to": target.upper(), "amount": 1},
            )
            response.raise_for_status()
            result = response.json().get("result")
            if not result:
                raise ValueError("Exchange response carried no result")
            return float(result)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("exchange_rate_fallback", source=source, target=target, error=str(exc))
            return self.fallback.rate(source, target)

    def _get(self, url: str, params: dict) -> httpx.Response:
        if self.client is not None:
            return self.client.get(url, params=params, timeout=self.timeout)
        return httpx.get(url, params=params, timeout=self.timeout)
