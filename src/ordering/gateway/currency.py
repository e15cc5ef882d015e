"""Charge currency by customer country."""

DEFAULT_CURRENCY = "gbp"

_CURRENCY_BY_COUNTRY = {
    "GB": "gbp",
    "US": "usd",
    "NG": "ngn",
    "CA": "cad",
    "AU": "aud",
    "DE": "eur",
    "FR": "eur",
}


def resolve_currency(country: str | None) -> str:
    if not country:
        return DEFAULT_CURRENCY
    return _CURRENCY_BY_COUNTRY.get(country.strip().upper(), DEFAULT_CURRENCY)
