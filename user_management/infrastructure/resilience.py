# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bounded retries for transient storage faults."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from user_management.shared.config import ResilienceConfig
from user_management.shared.logging import logger

T = TypeVar("T")

# Connectivity problems only; constraint violations are never retried.
TRANSIENT_STORAGE_ERRORS: tuple[type[Exception], ...] = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
)


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        f"resilience: transient storage fault on attempt={state.attempt_number} "
        f"({type(exc).__name__}), retrying"
    )


def call_with_storage_retry(  # noqa: UP047
    func: Callable[[], T],
    *,
    config: ResilienceConfig,
    operation: str,
) -> T:
    """Run ``func``, retrying transient storage faults with a fixed delay.

    The last transient exception is re-raised once attempts run out.
    """

    retrying = Retrying(
        stop=stop_after_attempt(config.max_attempts),
        wait=wait_fixed(config.delay_seconds),
        retry=retry_if_exception_type(TRANSIENT_STORAGE_ERRORS),
        before_sleep=_log_retry,
        reraise=True,
    )
    logger.debug(f"resilience: running {operation}")
    return retrying(func)


__all__ = ["TRANSIENT_STORAGE_ERRORS", "call_with_storage_retry"]
