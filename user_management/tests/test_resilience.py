from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from user_management.infrastructure.resilience import call_with_storage_retry
from user_management.shared.config import ResilienceConfig

CONFIG = ResilienceConfig(max_attempts=3, delay_seconds=0)


class _Flaky:
    def __init__(self, exc: Exception, failures: int) -> None:
        self.exc = exc
        self.failures = failures
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc
        return "ok"


def _operational() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_transient_fault_recovers_within_budget() -> None:
    func = _Flaky(_operational(), failures=2)
    assert call_with_storage_retry(func, config=CONFIG, operation="test") == "ok"
    assert func.calls == 3


def test_transient_fault_gives_up_after_three_attempts() -> None:
    func = _Flaky(_operational(), failures=5)
    with pytest.raises(OperationalError):
        call_with_storage_retry(func, config=CONFIG, operation="test")
    assert func.calls == 3


@pytest.mark.parametrize(
    "exc",
    [
        IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")),
        ValueError("business rule"),
    ],
)
def test_non_transient_errors_are_not_retried(exc: Exception) -> None:
    func = _Flaky(exc, failures=5)
    with pytest.raises(type(exc)):
        call_with_storage_retry(func, config=CONFIG, operation="test")
    assert func.calls == 1


def test_attempt_budget_is_capped() -> None:
    with pytest.raises(ValueError):
        ResilienceConfig(max_attempts=4)
