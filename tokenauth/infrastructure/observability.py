# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import Counter, Histogram

from tokenauth.shared.errors import AppError

AUTH_LATENCY = Histogram(
    "tokenauth_auth_latency_seconds",
    "Auth operation latency",
    labelnames=("operation",),
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
AUTH_OPERATIONS = Counter(
    "tokenauth_auth_operations_total",
    "Number of auth operations by outcome",
    labelnames=("operation", "outcome"),
)


@contextmanager
def track_operation(operation: str, *, enabled: bool = True) -> Iterator[None]:
    """Time ``operation`` and count it as ``ok``, its error code, or ``error``."""
    if not enabled:
        yield
        return

    start = time.perf_counter()
    outcome = "ok"
    try:
        yield
    except AppError as exc:
        outcome = exc.code
        raise
    except Exception:
        outcome = "error"
        raise
    finally:
        AUTH_LATENCY.labels(operation=operation).observe(time.perf_counter() - start)
        AUTH_OPERATIONS.labels(operation=operation, outcome=outcome).inc()


__all__ = ["AUTH_LATENCY", "AUTH_OPERATIONS", "track_operation"]
