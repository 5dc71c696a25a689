"""Reconcile results and combining them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class Result:
    """The outcome of a reconcile: whether and when to run again."""

    requeue: bool = False
    requeue_after: timedelta = timedelta(0)

    def is_zero(self) -> bool:
        """Report whether this result asks for nothing."""
        return not self.requeue and self.requeue_after == timedelta(0)


def min_result(*results: Result) -> Result:
    """Return the result that wants to requeue the soonest."""
    best: Result = Result()
    soonest: timedelta | None = None
    for result in results:
        if result.is_zero():
            continue
        if soonest is None or result.requeue_after < soonest:
            soonest = result.requeue_after
            best = Result(requeue=True, requeue_after=soonest)
    return best