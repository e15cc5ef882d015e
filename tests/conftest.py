import os
from pathlib import Path

import pytest

os.environ["CHECKOUT_VERIFY_DELAY_SECONDS"] = "0"
os.environ.pop("ADMIN_SECRET", None)
os.environ.pop("PAYMENT_GATEWAY", None)
os.environ.pop("EMAIL_BACKEND", None)
os.environ.pop("STORAGE_BACKEND", None)
os.environ.pop("EXCHANGE_RATES", None)
os.environ.pop("STORE_CURRENCY", None)


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Initialize both domains before any test module is collected."""
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from catalogue.domain import catalogue
    from ordering.domain import ordering

    catalogue.init()
    ordering.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from catalogue.domain import catalogue
    from ordering.domain import ordering
    from shared.db import drop_db, setup_db

    setup_db(catalogue)
    setup_db(ordering)

    yield

    drop_db(ordering)
    drop_db(catalogue)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Empty both domains' stores after every test."""
    yield

    from catalogue.domain import catalogue
    from ordering.domain import ordering
    from shared.db import reset_data

    reset_data(catalogue)
    reset_data(ordering)


@pytest.fixture(autouse=True)
def gateway():
    from ordering.gateway import reset_gateway, set_gateway
    from ordering.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)

    yield fake

    reset_gateway()


@pytest.fixture(autouse=True)
def retry_policy():
    """Gateway retries without real back-off delays."""
    from ordering.checkout.retry import RetryPolicy, reset_retry_policy, set_retry_policy

    policy = RetryPolicy(backoff_seconds=0)
    set_retry_policy(policy)

    yield policy

    reset_retry_policy()


@pytest.fixture(autouse=True)
def rates():
    from ordering.exchange import reset_rates, set_rates
    from ordering.exchange.fixed_adapter import FixedExchangeRates

    fixed = FixedExchangeRates()
    set_rates(fixed)

    yield fixed

    reset_rates()


@pytest.fixture(autouse=True)
def mailer():
    from ordering.notifications import reset_mailer, set_mailer
    from ordering.notifications.fake_adapter import FakeMailer

    fake = FakeMailer()
    set_mailer(fake)

    yield fake

    reset_mailer()


@pytest.fixture(autouse=True)
def storage():
    from catalogue.storage import reset_storage, set_storage
    from catalogue.storage.fake_adapter import FakeStorage

    fake = FakeStorage()
    set_storage(fake)

    yield fake

    reset_storage()


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from app import app

    return TestClient(app)
