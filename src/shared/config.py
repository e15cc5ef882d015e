"""Environment-driven configuration helpers.

``PROTEAN_ENV`` selects both the application environment and the domain
config overlay in each context's ``domain.toml``.
"""

import os

DEFAULT_ENV = "development"


def current_env() -> str:
    """Return the active environment name (development, test, staging, production)."""
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or DEFAULT_ENV).lower()


def is_production() -> bool:
    return current_env() == "production"


def env_str(name: str, default: str = "") -> str:
    return os.getenv(name, default)


def env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


def env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return float(value)
