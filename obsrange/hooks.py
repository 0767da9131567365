"""
obsrange Item Hooks - Single-Element Storage Effects
====================================================

A RangeObservableSequence never edits its backing list directly. Every
single-element effect, including each step of a range operation, goes through
an ItemHooks object. A specialised sequence can supply its own hooks to
observe, transform or veto individual element effects without re-implementing
range handling.

Hooks are called after the reentrancy and index checks have passed and before
any notification is sent. A hook that raises aborts the operation and the
sequence is restored to its contents from before the call, so a veto part way
through a range leaves no trace and sends no notification.
"""

from typing import Any, List, Protocol, runtime_checkable


@runtime_checkable
class ItemHooks(Protocol):
    """Capability interface for single-element storage effects."""

    def on_insert(self, items: List[Any], index: int, item: Any) -> None:
        """Insert ``item`` at ``index``."""
        ...

    def on_remove(self, items: List[Any], index: int) -> Any:
        """Remove and return the element at ``index``."""
        ...

    def on_set(self, items: List[Any], index: int, item: Any) -> Any:
        """Store ``item`` at ``index`` and return the previous element."""
        ...

    def on_move(self, items: List[Any], old_index: int, new_index: int) -> Any:
        """Relocate the element at ``old_index`` to ``new_index`` and return it."""
        ...


class ListItemHooks:
    """Default hooks: plain edits of the backing list."""

    def on_insert(self, items: List[Any], index: int, item: Any) -> None:
        items.insert(index, item)

    def on_remove(self, items: List[Any], index: int) -> Any:
        return items.pop(index)

    def on_set(self, items: List[Any], index: int, item: Any) -> Any:
        previous = items[index]
        items[index] = item
        return previous

    def on_move(self, items: List[Any], old_index: int, new_index: int) -> Any:
        item = self.on_remove(items, old_index)
        self.on_insert(items, new_index, item)
        return item
