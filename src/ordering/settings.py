"""Storefront settings for the ordering context, read from the environment on each call."""

from shared.config import env_float, env_int, env_str

DEFAULT_HANDOFF_PHONE = "2348146714124"


def site_url() -> str:
    return env_str("SITE_URL", "http://localhost:3000").rstrip("/")


def handoff_phone() -> str:
    """Messaging-app number that receives manual-handoff orders."""
    return env_str("HANDOFF_PHONE", DEFAULT_HANDOFF_PHONE)


def verify_delay_seconds() -> float:
    """Delay before the single payment verification on the confirmation page."""
    return env_float("CHECKOUT_VERIFY_DELAY_SECONDS", 1.5)


def stale_order_hours() -> int:
    return env_int("STALE_ORDER_HOURS", 48)


def store_currency() -> str:
    """Currency catalogue prices and order totals are kept in."""
    return env_str("STORE_CURRENCY", "ngn").lower()
