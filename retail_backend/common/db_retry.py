# common/db_retry.py

"""
DATASTORE RETRY (TRANSIENT ERRORS ONLY)

Wraps a single datastore call and re-invokes it when the failure is a
transient connectivity error (connection reset, server closed the
connection, pooler hiccup).

Policy:
- retries default to settings.DB_RETRY_ATTEMPTS (2)
- attempt n (1-based) waits n * settings.DB_RETRY_BACKOFF_SECONDS
- non-transient errors are re-raised immediately
- the last transient error is re-raised unchanged when retries run out

Hard rule:
- Never retry inside an open atomic block. Once a statement failed there the
  transaction is broken; the enclosing unit of work must fail as a whole.
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Callable, Optional

from django.conf import settings
from django.db import InterfaceError, OperationalError, connection

logger = logging.getLogger(__name__)

TRANSIENT_DB_ERRORS = (OperationalError, InterfaceError)


def is_transient_db_error(exc: BaseException) -> bool:
    return isinstance(exc, TRANSIENT_DB_ERRORS)


def _default_retries() -> int:
    return int(getattr(settings, "DB_RETRY_ATTEMPTS", 2))


def _default_backoff() -> float:
    return float(getattr(settings, "DB_RETRY_BACKOFF_SECONDS", 1.0))


def with_db_retry(
    retries: Optional[int] = None,
    backoff_seconds: Optional[float] = None,
    is_retryable: Callable[[BaseException], bool] = is_transient_db_error,
):
    """
    Decorator factory.

    Usage:
        @with_db_retry()
        def load_user(email): ...
    """

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            max_retries = _default_retries() if retries is None else int(retries)
            backoff = _default_backoff() if backoff_seconds is None else float(backoff_seconds)

            attempt = 0
            while True:
                try:
                    return fn(*args, **kwargs)
                except Exception as exc:
                    if not is_retryable(exc):
                        raise

                    if connection.in_atomic_block:
                        logger.warning(
                            "db_retry.skipped_in_atomic",
                            extra={"fn": fn.__qualname__, "error": str(exc)},
                        )
                        raise

                    if attempt >= max_retries:
                        logger.error(
                            "db_retry.exhausted",
                            extra={
                                "fn": fn.__qualname__,
                                "attempts": attempt + 1,
                                "error": str(exc),
                            },
                        )
                        raise

                    attempt += 1
                    delay = attempt * backoff
                    logger.warning(
                        "db_retry.attempt",
                        extra={
                            "fn": fn.__qualname__,
                            "attempt": attempt,
                            "delay_seconds": delay,
                            "error": str(exc),
                        },
                    )
                    # Drop the broken connection so the next attempt reconnects.
                    connection.close_if_unusable_or_obsolete()
                    if delay > 0:
                        time.sleep(delay)

        return wrapper

    return decorator


def call_with_db_retry(fn, *args, **kwargs):
    """One-off form of with_db_retry() using the configured defaults."""
    return with_db_retry()(fn)(*args, **kwargs)
