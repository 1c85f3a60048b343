import pytest

from news_input.retry import linear_backoff, retry_with_backoff


class Flaky:
    def __init__(self, failures, exc=ConnectionError):
        self.failures = failures
        self.exc = exc
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc(f"failure {self.calls}")
        return "ok"


def test_linear_backoff():
    delay = linear_backoff(1.0)
    assert [delay(n) for n in (1, 2, 3)] == [1.0, 2.0, 3.0]
    assert linear_backoff(0.5)(2) == 1.0


def test_returns_first_success_and_sleeps_between_attempts():
    sleeps = []
    op = Flaky(failures=2)
    assert retry_with_backoff(op, max_attempts=3, sleep=sleeps.append) == "ok"
    assert op.calls == 3
    assert sleeps == [1.0, 2.0]


def test_raises_last_error_after_exhausting_attempts():
    sleeps = []
    op = Flaky(failures=10)
    with pytest.raises(ConnectionError, match="failure 3"):
        retry_with_backoff(op, max_attempts=3, sleep=sleeps.append)
    assert op.calls == 3
    assert sleeps == [1.0, 2.0]


def test_non_retryable_errors_propagate_immediately():
    sleeps = []
    op = Flaky(failures=1, exc=KeyError)
    with pytest.raises(KeyError):
        retry_with_backoff(op, retry_on=(ConnectionError,), sleep=sleeps.append)
    assert op.calls == 1
    assert sleeps == []


def test_on_retry_sees_fresh_state_per_call():
    seen = []

    def record(state):
        seen.append((state.attempt, str(state.last_error)))

    for _ in range(2):
        retry_with_backoff(Flaky(failures=1), sleep=lambda s: None, on_retry=record)
    assert seen == [(1, "failure 1"), (1, "failure 1")]


def test_rejects_zero_attempts():
    with pytest.raises(ValueError):
        retry_with_backoff(lambda: "ok", max_attempts=0)
