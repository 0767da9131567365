"""
Reentrancy Guard
================

Depth counter that tracks nested change-notification dispatch.

The guard has two states: idle (``depth == 0``) and dispatching
(``depth > 0``). Every dispatch increments the depth on entry and decrements it
on exit, so recursive dispatch from the same call stack nests naturally. A
layer built on top of the sequence can hold the guard across several
notifications with ``block()``.

Usage:
    guard = ReentrancyGuard()

    with guard.block():
        ...  # mutations checked with guard.check() are rejected here

    guard.run(dispatch, notification)  # same thing, callback style
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from ..errors import ReentrancyViolationError

R = TypeVar("R")

logger = logging.getLogger(__name__)


class ReentrancyGuard:
    """Nested-dispatch depth counter with scoped acquisition."""

    __slots__ = ("_depth",)

    def __init__(self):
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def busy(self) -> bool:
        """True while at least one dispatch or block is active."""
        return self._depth > 0

    def acquire(self) -> None:
        self._depth += 1

    def release(self) -> None:
        if self._depth == 0:
            raise RuntimeError("ReentrancyGuard released more times than acquired")
        self._depth -= 1

    @contextmanager
    def block(self) -> Iterator["ReentrancyGuard"]:
        """Hold the guard for the duration of the ``with`` body, even on error."""
        self.acquire()
        try:
            yield self
        finally:
            self.release()

    def run(self, callback: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Call ``callback`` with the guard held and return its result."""
        with self.block():
            return callback(*args, **kwargs)

    def check(self, listener_count: int, allow_single_listener: bool = True) -> None:
        """
        Reject a mutation attempted while the guard is held.

        A single listener cannot observe a notification that its own nested
        change invalidated for somebody else, so with ``allow_single_listener``
        one listener (or none) may still mutate. Two or more listeners always
        fail.

        Raises:
            ReentrancyViolationError: If the guard is held and too many
                listeners are registered.
        """
        if self._depth == 0:
            return
        permitted = 1 if allow_single_listener else 0
        if listener_count > permitted:
            logger.warning(
                f"Rejected reentrant mutation at depth {self._depth} "
                f"with {listener_count} listeners"
            )
            raise ReentrancyViolationError(self._depth, listener_count)

    def __repr__(self) -> str:
        return f"ReentrancyGuard(depth={self._depth})"
