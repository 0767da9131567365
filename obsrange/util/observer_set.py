"""
Ordered Observer Set
====================

Registration-ordered, duplicate-free set of listener callbacks.

Dispatch always walks a snapshot taken when the dispatch starts, so listeners
may subscribe or unsubscribe (themselves or others) from inside a callback
without disturbing the iteration in progress. Changes made that way take effect
from the next dispatch on.
"""

from typing import Any, Callable, Dict, Tuple

from ..errors import InvalidArgumentError


class OrderedObserverSet:
    """
    Insertion-ordered observer set with snapshot dispatch.

    Backed by a dict used as an ordered set: O(1) add/discard/membership while
    preserving registration order for notification.
    """

    __slots__ = ("_observers",)

    def __init__(self):
        self._observers: Dict[Callable, None] = {}

    def add(self, callback: Callable) -> bool:
        """Register ``callback``. Returns False if it was already registered."""
        if not callable(callback):
            raise InvalidArgumentError(
                f"Observer must be callable, got {type(callback).__name__}"
            )
        if callback in self._observers:
            return False
        self._observers[callback] = None
        return True

    def discard(self, callback: Callable) -> bool:
        """Remove ``callback`` if present. Returns True if it was removed."""
        try:
            del self._observers[callback]
        except KeyError:
            return False
        return True

    def clear(self) -> None:
        self._observers.clear()

    def snapshot(self) -> Tuple[Callable, ...]:
        return tuple(self._observers)

    def notify_all(self, *args: Any) -> None:
        """
        Call every observer registered at the moment of the call, in order.

        Exceptions raised by an observer propagate to the caller; observers
        after the failing one are not called for this dispatch.
        """
        for observer in self.snapshot():
            observer(*args)

    def __contains__(self, callback: object) -> bool:
        return callback in self._observers

    def __len__(self) -> int:
        return len(self._observers)

    def __bool__(self) -> bool:
        return bool(self._observers)

    def __iter__(self):
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"OrderedObserverSet({len(self._observers)} observers)"
