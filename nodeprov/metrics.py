"""Shared metric names and helpers for timing observations."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol

NAMESPACE = "karpenter"
ERROR_LABEL = "error"
PROVISIONER_LABEL = "provisioner"


class Observer(Protocol):
    def observe(self, value: float) -> None: ...


def duration_buckets() -> list[float]:
    """Return a fresh list of default upper bounds for duration histograms."""
    return [
        0.005, 0.01, 0.025, 0.05, 0.1, 0.15, 0.2, 0.25, 0.3, 0.35, 0.4, 0.45, 0.5,
        0.6, 0.7, 0.8, 0.9, 1.0, 1.25, 1.5, 1.75, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5,
        5, 6, 7, 8, 9, 10, 15, 20, 25, 30, 40, 50, 60,
    ]


def measure(observer: Observer) -> Callable[[], None]:
    """Start a timer; the returned function records elapsed seconds on ``observer``."""
    start = time.monotonic()

    def done() -> None:
        observer.observe(time.monotonic() - start)

    return done