"""A queue that evicts pods, retrying failed evictions with exponential backoff."""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time
from collections.abc import Iterable
from typing import Protocol

from nodeprov.objects import APIError, NamespacedName, Pod, object_key
from nodeprov.workqueue import ItemExponentialFailureRateLimiter

EVICTION_QUEUE_BASE_DELAY = 0.1
EVICTION_QUEUE_MAX_DELAY = 10.0

logger = logging.getLogger(__name__)


class _Evictor(Protocol):
    def evict(self, key: NamespacedName) -> None: ...


class EvictionQueue:
    """Tracks pods awaiting eviction and evicts them one at a time.

    A pod stays tracked until its eviction succeeds or the pod is gone;
    failed evictions are retried after a per-pod exponential delay.
    """

    def __init__(
        self,
        client: _Evictor,
        rate_limiter: ItemExponentialFailureRateLimiter | None = None,
    ) -> None:
        self._client = client
        self._limiter = rate_limiter or ItemExponentialFailureRateLimiter(
            EVICTION_QUEUE_BASE_DELAY, EVICTION_QUEUE_MAX_DELAY
        )
        self._cond = threading.Condition()
        self._tracked: set[NamespacedName] = set()
        self._queue: list[tuple[float, int, NamespacedName]] = []
        self._sequence = itertools.count()
        self._closed = False
        self._worker: threading.Thread | None = None

    def add(self, pods: Iterable[Pod]) -> None:
        """Enqueue every pod that is not already awaiting eviction."""
        with self._cond:
            for pod in pods:
                key = object_key(pod)
                if key not in self._tracked:
                    self._tracked.add(key)
                    self._push(key, 0.0)
            self._cond.notify_all()

    def contains(self, key: NamespacedName) -> bool:
        """Report whether the pod with ``key`` is awaiting eviction."""
        with self._cond:
            return key in self._tracked

    __contains__ = contains

    def __len__(self) -> int:
        with self._cond:
            return len(self._tracked)

    def process_next(self) -> bool:
        """Wait for the next due pod and try to evict it; return False once shut down."""
        key = self._next_due()
        if key is None:
            return False
        if self._evict(key):
            logger.debug("Evicted pod %s", key)
            self._limiter.forget(key)
            with self._cond:
                self._tracked.discard(key)
            return True
        delay = self._limiter.when(key)
        with self._cond:
            if not self._closed:
                self._push(key, delay)
                self._cond.notify_all()
        return True

    def start(self) -> None:
        """Process the queue on a background thread until shut down."""
        with self._cond:
            if self._worker is not None or self._closed:
                return
            self._worker = threading.Thread(target=self._run, name="eviction-queue", daemon=True)
            self._worker.start()

    def shutdown(self) -> None:
        """Stop processing and drop pending retries."""
        with self._cond:
            self._closed = True
            self._queue.clear()
            self._cond.notify_all()

    def __enter__(self) -> EvictionQueue:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _push(self, key: NamespacedName, delay: float) -> None:
        heapq.heappush(self._queue, (time.monotonic() + delay, next(self._sequence), key))

    def _next_due(self) -> NamespacedName | None:
        with self._cond:
            while True:
                if self._closed:
                    return None
                if not self._queue:
                    self._cond.wait()
                    continue
                remaining = self._queue[0][0] - time.monotonic()
                if remaining <= 0:
                    return heapq.heappop(self._queue)[2]
                self._cond.wait(remaining)

    def _run(self) -> None:
        while self.process_next():
            pass
        logger.error("EvictionQueue is broken and has shutdown.")

    def _evict(self, key: NamespacedName) -> bool:
        try:
            self._client.evict(key)
        except APIError as err:
            if err.code == 500:
                logger.debug("Failed to evict pod %s due to PDB misconfiguration error.", key)
                return False
            if err.code == 429:
                logger.debug("Failed to evict pod %s due to PDB violation.", key)
                return False
            return err.code == 404
        except Exception:
            return False
        return True