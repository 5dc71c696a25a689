"""A clock whose source can be swapped out, for tests and simulations."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from types import TracebackType


def _system_now() -> datetime:
    return datetime.now(timezone.utc)


_source: Callable[[], datetime] = _system_now


def now() -> datetime:
    """Return the current time from the active clock source."""
    return _source()


class _Restorer:
    """Puts the previous clock source back when closed or when its block exits."""

    def __init__(self, previous: Callable[[], datetime]) -> None:
        self._previous = previous
        self._restored = False

    def restore(self) -> None:
        global _source
        if not self._restored:
            _source = self._previous
            self._restored = True

    def __enter__(self) -> _Restorer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.restore()


def override(func: Callable[[], datetime]) -> _Restorer:
    """Make ``func`` the clock source; the returned object restores the old one.

    Use it as ``with override(func): ...`` or call ``restore()`` on the result.
    """
    global _source
    if not callable(func):
        raise TypeError("clock source must be callable")
    previous = _source
    _source = func
    return _Restorer(previous)