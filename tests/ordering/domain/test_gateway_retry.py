"""Tests for the gateway retry policy."""

import pytest

from ordering.checkout.retry import SINGLE_ATTEMPT, RetryPolicy
from ordering.gateway.port import PaymentGatewayError


class _Flaky:
    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise PaymentGatewayError(f"failure {self.calls}")
        return "session"


class TestRetryPolicy:
    def test_first_success_needs_one_attempt(self):
        sleeps = []
        result = RetryPolicy().call(_Flaky(0), sleep=sleeps.append)
        assert result.ok
        assert result.value == "session"
        assert result.attempts == 1
        assert sleeps == []

    def test_retries_until_success_with_backoff(self):
        sleeps = []
        operation = _Flaky(2)
        result = RetryPolicy(max_attempts=3, backoff_seconds=0.5, backoff_multiplier=2.0).call(
            operation, sleep=sleeps.append
        )
        assert result.ok
        assert result.attempts == 3
        assert sleeps == [0.5, 1.0]

    def test_gives_up_after_max_attempts(self):
        operation = _Flaky(10)
        result = RetryPolicy(max_attempts=3).call(operation, sleep=lambda _: None)
        assert not result.ok
        assert result.value is None
        assert result.error == "failure 3"
        assert result.attempts == 3
        assert operation.calls == 3

    def test_single_attempt_policy_never_retries(self):
        operation = _Flaky(1)
        result = SINGLE_ATTEMPT.call(operation, sleep=lambda _: None)
        assert not result.ok
        assert operation.calls == 1

    def test_delay_before_first_attempt_is_zero(self):
        assert RetryPolicy().delay_before(1) == 0.0

    def test_unexpected_errors_propagate(self):
        def boom():
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            RetryPolicy().call(boom, sleep=lambda _: None)
