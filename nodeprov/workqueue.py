"""Rate limiters and a thread-safe, rate-limited task runner."""

from __future__ import annotations

import heapq
import itertools
import threading
import time
from collections.abc import Callable, Hashable
from concurrent.futures import Future
from typing import Any


class BucketRateLimiter:
    """A token bucket: ``burst`` tokens, refilled at ``qps`` per second."""

    def __init__(self, qps: float, burst: int, *, clock: Callable[[], float] = time.monotonic) -> None:
        if qps <= 0:
            raise ValueError("qps must be positive")
        self._qps = float(qps)
        self._burst = burst
        self._clock = clock
        self._tokens = float(burst)
        self._last = clock()
        self._lock = threading.Lock()

    def when(self, item: Any) -> float:
        """Reserve a token and return how many seconds to wait before using it."""
        with self._lock:
            current = self._clock()
            elapsed = max(0.0, current - self._last)
            self._tokens = min(float(self._burst), self._tokens + elapsed * self._qps)
            self._last = current
            self._tokens -= 1
            return 0.0 if self._tokens >= 0 else -self._tokens / self._qps


class ItemExponentialFailureRateLimiter:
    """Delays each item by ``base_delay * 2**failures``, capped at ``max_delay`` seconds."""

    def __init__(self, base_delay: float, max_delay: float) -> None:
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._failures: dict[Hashable, int] = {}
        self._lock = threading.Lock()

    def when(self, item: Hashable) -> float:
        with self._lock:
            exponent = self._failures.get(item, 0)
            self._failures[item] = exponent + 1
        try:
            backoff = self._base_delay * (2.0 ** exponent)
        except OverflowError:
            return self._max_delay
        return min(backoff, self._max_delay)

    def forget(self, item: Hashable) -> None:
        with self._lock:
            self._failures.pop(item, None)

    def num_requeues(self, item: Hashable) -> int:
        with self._lock:
            return self._failures.get(item, 0)


class WorkQueue:
    """Runs submitted callables concurrently, starting them no faster than the rate limit."""

    def __init__(self, qps: float, burst: int) -> None:
        self._limiter = BucketRateLimiter(qps, burst)
        self._cond = threading.Condition()
        self._pending: list[tuple[float, int, Callable[[], Any], Future]] = []
        self._sequence = itertools.count()
        self._dispatcher: threading.Thread | None = None
        self._closed = False

    def add(self, do: Callable[[], Any]) -> Future:
        """Schedule ``do``; the returned future holds its result or exception."""
        future: Future = Future()
        with self._cond:
            if self._closed:
                raise RuntimeError("work queue is shut down")
            if self._dispatcher is None:
                self._dispatcher = threading.Thread(target=self._dispatch, daemon=True)
                self._dispatcher.start()
            ready_at = time.monotonic() + self._limiter.when(future)
            heapq.heappush(self._pending, (ready_at, next(self._sequence), do, future))
            self._cond.notify()
        return future

    def shutdown(self) -> None:
        """Stop accepting work and cancel tasks that have not started."""
        with self._cond:
            self._closed = True
            pending, self._pending = self._pending, []
            self._cond.notify_all()
        for *_, future in pending:
            future.cancel()

    def __enter__(self) -> WorkQueue:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _dispatch(self) -> None:
        while True:
            with self._cond:
                while True:
                    if self._closed:
                        return
                    if not self._pending:
                        self._cond.wait()
                        continue
                    remaining = self._pending[0][0] - time.monotonic()
                    if remaining <= 0:
                        _, _, do, future = heapq.heappop(self._pending)
                        break
                    self._cond.wait(remaining)
            threading.Thread(target=self._run, args=(do, future), daemon=True).start()

    @staticmethod
    def _run(do: Callable[[], Any], future: Future) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = do()
        except Exception as err:  # handed to the caller through the future
            future.set_exception(err)
        else:
            future.set_result(result)