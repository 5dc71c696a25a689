import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from nodeprov.eviction import EvictionQueue
from nodeprov.objects import APIError, NamespacedName, NotFoundError, ObjectMeta, Pod
from nodeprov.workqueue import ItemExponentialFailureRateLimiter


def make_pod(name):
    return Pod(metadata=ObjectMeta(name=name, namespace="default"))


def key_of(name):
    return NamespacedName("default", name)


class FakeEvictor:
    def __init__(self, outcomes=None):
        self.outcomes = {k: list(v) for k, v in (outcomes or {}).items()}
        self.calls = []
        self.lock = threading.Lock()

    def evict(self, key):
        with self.lock:
            self.calls.append(key)
            pending = self.outcomes.get(key)
            err = pending.pop(0) if pending else None
        if err is not None:
            raise err


def fast_limiter():
    return ItemExponentialFailureRateLimiter(0.001, 0.01)


def test_add_tracks_pods():
    queue = EvictionQueue(FakeEvictor())
    queue.add([make_pod("a"), make_pod("b")])
    assert queue.contains(key_of("a"))
    assert key_of("b") in queue
    assert not queue.contains(key_of("c"))
    assert len(queue) == 2


def test_successful_eviction_untracks_pod():
    evictor = FakeEvictor()
    queue = EvictionQueue(evictor)
    queue.add([make_pod("a")])
    assert queue.process_next() is True
    assert evictor.calls == [key_of("a")]
    assert not queue.contains(key_of("a"))


def test_duplicate_add_evicts_once():
    evictor = FakeEvictor()
    queue = EvictionQueue(evictor)
    queue.add([make_pod("a")])
    queue.add([make_pod("a")])
    queue.process_next()
    assert evictor.calls == [key_of("a")]
    assert len(queue) == 0


def test_not_found_counts_as_evicted():
    evictor = FakeEvictor({key_of("a"): [NotFoundError("gone")]})
    queue = EvictionQueue(evictor)
    queue.add([make_pod("a")])
    queue.process_next()
    assert not queue.contains(key_of("a"))


@pytest.mark.parametrize(
    "error", [APIError("pdb violation", code=429), APIError("misconfigured", code=500), RuntimeError("x")]
)
def test_failed_eviction_keeps_pod(error):
    evictor = FakeEvictor({key_of("a"): [error]})
    queue = EvictionQueue(evictor, fast_limiter())
    queue.add([make_pod("a")])
    assert queue.process_next() is True
    assert queue.contains(key_of("a"))
    queue.shutdown()


def test_failed_eviction_is_retried():
    limiter = fast_limiter()
    evictor = FakeEvictor({key_of("a"): [APIError("pdb violation", code=429)]})
    queue = EvictionQueue(evictor, limiter)
    queue.add([make_pod("a")])
    queue.process_next()
    assert limiter.num_requeues(key_of("a")) == 1
    queue.process_next()
    assert evictor.calls == [key_of("a"), key_of("a")]
    assert not queue.contains(key_of("a"))
    assert limiter.num_requeues(key_of("a")) == 0


def test_process_next_after_shutdown_returns_false():
    queue = EvictionQueue(FakeEvictor())
    queue.add([make_pod("a")])
    queue.shutdown()
    assert queue.process_next() is False


def test_shutdown_wakes_waiting_worker():
    queue = EvictionQueue(FakeEvictor())
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(queue.process_next)
        time.sleep(0.05)
        assert not future.done()
        queue.shutdown()
        result = future.result(timeout=2)
    assert result is False


def test_started_queue_evicts_in_background():
    evictor = FakeEvictor()
    with EvictionQueue(evictor) as queue:
        queue.start()
        queue.add([make_pod("a"), make_pod("b")])
        deadline = time.monotonic() + 2
        while len(queue) and time.monotonic() < deadline:
            time.sleep(0.01)
        assert len(queue) == 0
    assert sorted(evictor.calls, key=str) == [key_of("a"), key_of("b")]