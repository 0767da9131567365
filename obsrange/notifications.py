"""
obsrange Notifications - Change Payloads Published by the Sequence
===================================================================

This module defines the immutable notification values a RangeObservableSequence
hands to its listeners, and the names of the derived property signals.

A notification describes one mutation as a single contiguous edit:

- ADD: ``new_items`` were inserted starting at ``start_index``
- REMOVE: ``old_items`` were removed starting at ``start_index``
- REPLACE: ``old_items`` at ``start_index`` were substituted by ``new_items``
- MOVE: one item travelled from ``old_index`` to ``start_index``
- RESET: the whole sequence must be considered invalidated

Range operations produce a single notification regardless of how many elements
they touch. Listeners that only understand single-index edits can call
``expand()`` to obtain an equivalent series of one-element notifications.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, MutableSequence, Optional, Tuple

from .errors import InvalidArgumentError

COUNT_PROPERTY = "Count"
INDEXER_PROPERTY = "Item[]"


class ChangeAction(Enum):
    """Kind of change a notification describes."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    RESET = "reset"


@dataclass(frozen=True, slots=True)
class ChangeNotification:
    """Immutable description of one mutation of a sequence."""

    action: ChangeAction
    new_items: Tuple[Any, ...] = ()
    old_items: Tuple[Any, ...] = ()
    start_index: Optional[int] = None
    old_index: Optional[int] = None

    def __post_init__(self) -> None:
        # Callers may hand in lists; freeze them so the payload stays stable.
        if not isinstance(self.new_items, tuple):
            object.__setattr__(self, "new_items", tuple(self.new_items))
        if not isinstance(self.old_items, tuple):
            object.__setattr__(self, "old_items", tuple(self.old_items))
        self._validate()

    def _validate(self) -> None:
        action = self.action
        if action is ChangeAction.RESET:
            if self.new_items or self.old_items or self.start_index is not None:
                raise InvalidArgumentError(
                    "Reset notifications carry no items and no index"
                )
            return

        if self.start_index is None or self.start_index < 0:
            raise InvalidArgumentError(
                f"{action.name} notification requires a non-negative start index"
            )

        if action is ChangeAction.ADD and self.old_items:
            raise InvalidArgumentError("Add notifications carry no old items")
        if action is ChangeAction.REMOVE and self.new_items:
            raise InvalidArgumentError("Remove notifications carry no new items")
        if action is ChangeAction.MOVE:
            if len(self.new_items) != 1 or len(self.old_items) != 1:
                raise InvalidArgumentError("Move notifications carry exactly one item")
            if self.old_index is None or self.old_index < 0:
                raise InvalidArgumentError(
                    "Move notifications require a non-negative old index"
                )
        elif self.old_index is not None:
            raise InvalidArgumentError(
                f"{action.name} notifications do not carry an old index"
            )

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def add(cls, items: Iterable[Any], index: int) -> "ChangeNotification":
        return cls(ChangeAction.ADD, new_items=tuple(items), start_index=index)

    @classmethod
    def remove(cls, items: Iterable[Any], index: int) -> "ChangeNotification":
        return cls(ChangeAction.REMOVE, old_items=tuple(items), start_index=index)

    @classmethod
    def replace(
        cls, new_items: Iterable[Any], old_items: Iterable[Any], index: int
    ) -> "ChangeNotification":
        return cls(
            ChangeAction.REPLACE,
            new_items=tuple(new_items),
            old_items=tuple(old_items),
            start_index=index,
        )

    @classmethod
    def move(cls, item: Any, new_index: int, old_index: int) -> "ChangeNotification":
        return cls(
            ChangeAction.MOVE,
            new_items=(item,),
            old_items=(item,),
            start_index=new_index,
            old_index=old_index,
        )

    @classmethod
    def reset(cls) -> "ChangeNotification":
        return _RESET

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def item(self) -> Any:
        """The single item of a Move (or any one-element) notification."""
        items = self.new_items or self.old_items
        if len(items) != 1:
            raise InvalidArgumentError(
                f"{self.action.name} notification does not carry exactly one item"
            )
        return items[0]

    @property
    def is_range(self) -> bool:
        """True when more than one element is added, removed or replaced."""
        return max(len(self.new_items), len(self.old_items)) > 1

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping of this notification, used for logging."""
        data: Dict[str, Any] = {
            "action": self.action.name,
            "new_items": list(self.new_items),
            "old_items": list(self.old_items),
            "start_index": self.start_index,
        }
        if self.old_index is not None:
            data["old_index"] = self.old_index
        return data

    # ------------------------------------------------------------------
    # Single-index compatibility
    # ------------------------------------------------------------------

    def expand(self) -> Iterator["ChangeNotification"]:
        """
        Yield single-element notifications equivalent to this one.

        Applying the yielded notifications in order to the pre-change sequence
        produces the same result as applying this notification. Move and Reset
        yield themselves; empty ranges yield nothing.

        Replace spans of unequal length are split into pairwise single-element
        replacements for the overlapping prefix, followed by removals of the
        surplus old items or additions of the surplus new items.
        """
        action = self.action
        start = self.start_index

        if action in (ChangeAction.MOVE, ChangeAction.RESET):
            yield self
        elif action is ChangeAction.ADD:
            for offset, item in enumerate(self.new_items):
                yield ChangeNotification.add((item,), start + offset)
        elif action is ChangeAction.REMOVE:
            # each removal shifts the rest left onto the same index
            for item in self.old_items:
                yield ChangeNotification.remove((item,), start)
        else:
            yield from self._expand_replace()

    def _expand_replace(self) -> Iterator["ChangeNotification"]:
        start = self.start_index
        shared = min(len(self.new_items), len(self.old_items))
        for offset in range(shared):
            yield ChangeNotification.replace(
                (self.new_items[offset],), (self.old_items[offset],), start + offset
            )
        tail = start + shared
        for item in self.old_items[shared:]:
            yield ChangeNotification.remove((item,), tail)
        for offset, item in enumerate(self.new_items[shared:]):
            yield ChangeNotification.add((item,), tail + offset)

    def apply_to(self, target: MutableSequence[Any]) -> None:
        """
        Replay this change onto ``target``, a copy of the pre-change contents.

        A Reset clears ``target``; the caller is expected to re-read the
        source afterwards.
        """
        action = self.action
        start = self.start_index
        if action is ChangeAction.RESET:
            del target[:]
        elif action is ChangeAction.ADD:
            target[start:start] = self.new_items
        elif action is ChangeAction.REMOVE:
            del target[start : start + len(self.old_items)]
        elif action is ChangeAction.REPLACE:
            target[start : start + len(self.old_items)] = self.new_items
        else:
            moved = target.pop(self.old_index)
            target.insert(start, moved)


_RESET = ChangeNotification(ChangeAction.RESET)
