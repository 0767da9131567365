"""
obsrange Errors - Contract Violations Raised by the Sequence
============================================================

Every error is raised synchronously at the call site of the offending
operation. Nothing here is retried or swallowed by the library.

Each class also derives from the matching builtin so callers that only know
about ``IndexError`` or ``ValueError`` keep working.
"""

from typing import Optional


class ObsRangeError(Exception):
    """Base class for all obsrange errors."""

    pass


class InvalidArgumentError(ObsRangeError, ValueError):
    """A required argument is absent or malformed (e.g. a ``None`` source)."""

    pass


class IndexOutOfRangeError(ObsRangeError, IndexError):
    """An index or index + count falls outside the sequence bounds."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        count: Optional[int] = None,
        length: Optional[int] = None,
    ):
        super().__init__(message)
        self.index = index
        self.count = count
        self.length = length


class ReentrancyViolationError(ObsRangeError, RuntimeError):
    """
    A mutation was attempted while a change notification was being dispatched.

    Raised to the listener that attempted the nested mutation. The sequence is
    left untouched.
    """

    def __init__(self, depth: int, listener_count: int):
        super().__init__(
            f"Cannot change the sequence during a change notification: "
            f"{listener_count} listeners are registered (dispatch depth {depth})"
        )
        self.depth = depth
        self.listener_count = listener_count
