import pytest

from shared.config import current_env, env_float, env_int, is_production
from shared.logging import get_log_level


def test_environment_defaults_to_development(monkeypatch):
    monkeypatch.delenv("PROTEAN_ENV", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    assert current_env() == "development"
    assert is_production() is False


def test_environment_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("PROTEAN_ENV", "Production")
    assert is_production() is True


@pytest.mark.parametrize("raw, expected", [(None, 48), ("", 48), ("12", 12)])
def test_env_int(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("STALE_ORDER_HOURS", raising=False)
    else:
        monkeypatch.setenv("STALE_ORDER_HOURS", raw)
    assert env_int("STALE_ORDER_HOURS", 48) == expected


def test_env_float(monkeypatch):
    monkeypatch.setenv("CHECKOUT_VERIFY_DELAY_SECONDS", "2.5")
    assert env_float("CHECKOUT_VERIFY_DELAY_SECONDS", 1.5) == 2.5


def test_log_level_follows_environment(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("PROTEAN_ENV", "staging")
    assert get_log_level() == "INFO"
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert get_log_level() == "ERROR"

