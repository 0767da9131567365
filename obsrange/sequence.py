"""
obsrange Sequence - Range-Aware Observable Sequence
===================================================

This module provides RangeObservableSequence, an ordered, indexable, resizable
container that tells its listeners exactly what changed after every mutation.

Key Features:
- One notification per operation, however many elements a range operation touches
- Inputs of range operations are snapshotted before the sequence is touched
- Derived property signals ("Count", "Item[]") for generic indexer consumers
- Reentrancy guard: listeners cannot mutate the sequence mid-dispatch when
  another listener could be left holding a stale notification
- Pluggable item hooks through which every single-element effect flows

Example:
    seq = RangeObservableSequence(["A", "B", "C", "D", "E"])
    seq.subscribe(lambda change: print(change.action, change.old_items))

    seq.remove_range(1, 2)        # ChangeAction.REMOVE ('B', 'C')
    seq.replace_range(1, 1, "XY") # ChangeAction.REPLACE ('D',)

Listeners run synchronously, in registration order, on the mutating caller's
stack. The sequence is not thread-safe; serialise access externally.
"""

import logging
import operator
from contextlib import contextmanager
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    MutableSequence,
    Optional,
    Tuple,
    TypeVar,
    Union,
    overload,
)

from .errors import IndexOutOfRangeError, InvalidArgumentError
from .hooks import ItemHooks, ListItemHooks
from .notifications import COUNT_PROPERTY, INDEXER_PROPERTY, ChangeNotification
from .util.equality import values_equal
from .util.observer_set import OrderedObserverSet
from .util.reentrancy import ReentrancyGuard

T = TypeVar("T")

ChangeListener = Callable[[ChangeNotification], None]
PropertyListener = Callable[[str], None]

logger = logging.getLogger(__name__)


class RangeObservableSequence(MutableSequence[T]):
    """
    Ordered container publishing batched change notifications.

    Named operations (``insert_at``, ``remove_range``, ...) take non-negative
    indices only. The Python protocol forms (``seq[i]``, ``del seq[i]``,
    ``seq[a:b] = ...``, ``insert``, ``pop``) accept negative indices the way
    ``list`` does and delegate to the named operations.

    Every mutation first checks the reentrancy guard, then validates its
    arguments, and only then touches storage, so a rejected call leaves the
    sequence exactly as it was.
    """

    # A lone listener may mutate the sequence from its own callback.
    ALLOW_SINGLE_LISTENER_REENTRANCY = True

    def __init__(
        self,
        items: Iterable[T] = (),
        *,
        hooks: Optional[ItemHooks] = None,
        allow_single_listener_reentrancy: Optional[bool] = None,
    ) -> None:
        if items is None:
            raise InvalidArgumentError("Source sequence must not be None")
        if hooks is None:
            hooks = ListItemHooks()
        elif not isinstance(hooks, ItemHooks):
            raise InvalidArgumentError(
                f"hooks must implement ItemHooks, got {type(hooks).__name__}"
            )

        self._items: List[T] = list(items)
        self._hooks: ItemHooks = hooks
        self._guard = ReentrancyGuard()
        self._change_listeners = OrderedObserverSet()
        self._property_listeners = OrderedObserverSet()
        if allow_single_listener_reentrancy is None:
            allow_single_listener_reentrancy = self.ALLOW_SINGLE_LISTENER_REENTRANCY
        self._allow_single_listener = allow_single_listener_reentrancy

    @classmethod
    def from_list(cls, items: List[T], **kwargs: Any) -> "RangeObservableSequence[T]":
        """
        Build a sequence that takes ownership of ``items`` without copying.

        The caller must not touch ``items`` afterwards; changes made behind the
        sequence's back are not notified.
        """
        if items is None:
            raise InvalidArgumentError("Source list must not be None")
        if not isinstance(items, list):
            raise InvalidArgumentError(
                f"from_list() expects a list, got {type(items).__name__}"
            )
        sequence = cls(**kwargs)
        sequence._items = items
        return sequence

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, callback: ChangeListener) -> "RangeObservableSequence[T]":
        """Register a change listener. Returns the sequence for chaining."""
        if self._change_listeners.add(callback):
            logger.debug(f"Subscribed change listener {callback!r}")
        return self

    def unsubscribe(self, callback: ChangeListener) -> None:
        if self._change_listeners.discard(callback):
            logger.debug(f"Unsubscribed change listener {callback!r}")

    def subscribe_property(
        self, callback: PropertyListener
    ) -> "RangeObservableSequence[T]":
        """
        Register a listener for "Count" and "Item[]" property signals.

        Property signals are sent with the reentrancy guard held, just before
        the change notification. A property listener that mutates the
        sequence is therefore subject to the same rule as a change listener.
        """
        if self._property_listeners.add(callback):
            logger.debug(f"Subscribed property listener {callback!r}")
        return self

    def unsubscribe_property(self, callback: PropertyListener) -> None:
        if self._property_listeners.discard(callback):
            logger.debug(f"Unsubscribed property listener {callback!r}")

    @property
    def listener_count(self) -> int:
        """Number of registered change listeners."""
        return len(self._change_listeners)

    # ------------------------------------------------------------------
    # Reentrancy
    # ------------------------------------------------------------------

    @contextmanager
    def block_reentrancy(self) -> Iterator[None]:
        """
        Reject reentrant changes for the duration of the ``with`` body.

        Intended for layers that send several notifications and need them all
        to see a stable sequence. Released on every exit path.
        """
        with self._guard.block():
            yield

    def _check_reentrancy(self) -> None:
        self._guard.check(len(self._change_listeners), self._allow_single_listener)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def get(self, index: int) -> T:
        """Return the element at ``index`` (``0 <= index < len``)."""
        return self._items[self._check_index(index)]

    def snapshot(self) -> Tuple[T, ...]:
        """Immutable copy of the current contents."""
        return tuple(self._items)

    def index_of(self, value: Any) -> int:
        """Index of the first element equal to ``value``, or -1."""
        for position, item in enumerate(self._items):
            if values_equal(item, value):
                return position
        return -1

    def index(self, value: Any, start: int = 0, stop: Optional[int] = None) -> int:
        length = len(self._items)
        start, stop, _ = slice(start, stop).indices(length)
        for position in range(start, stop):
            if values_equal(self._items[position], value):
                return position
        raise ValueError(f"{value!r} is not in sequence")

    def count(self, value: Any) -> int:
        return sum(1 for item in self._items if values_equal(item, value))

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, value: object) -> bool:
        return self.index_of(value) != -1

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> List[T]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[T, List[T]]:
        if isinstance(index, slice):
            return self._items[index]
        return self.get(self._normalize(index))

    # ------------------------------------------------------------------
    # Single-element mutation
    # ------------------------------------------------------------------

    def insert_at(self, index: int, item: T) -> None:
        """Insert ``item`` at ``index`` (``0 <= index <= len``)."""
        self._check_reentrancy()
        index = self._check_insert_index(index)

        with self._rollback_on_error():
            self._hooks.on_insert(self._items, index, item)

        self._publish(ChangeNotification.add((item,), index), count_changed=True)

    def insert(self, index: int, item: T) -> None:
        self.insert_at(self._normalize(index), item)

    def remove_at(self, index: int) -> None:
        """Remove the element at ``index`` (``0 <= index < len``)."""
        self._check_reentrancy()
        index = self._check_index(index)

        with self._rollback_on_error():
            removed = self._hooks.on_remove(self._items, index)

        self._publish(ChangeNotification.remove((removed,), index), count_changed=True)

    def remove(self, value: Any) -> None:
        """Remove the first element equal to ``value``."""
        self._check_reentrancy()
        position = self.index_of(value)
        if position == -1:
            raise ValueError(f"{value!r} is not in sequence")
        self.remove_at(position)

    def replace_at(self, index: int, item: T) -> None:
        """Substitute the element at ``index`` with ``item``."""
        self._check_reentrancy()
        index = self._check_index(index)

        with self._rollback_on_error():
            previous = self._hooks.on_set(self._items, index, item)

        self._publish(
            ChangeNotification.replace((item,), (previous,), index),
            count_changed=False,
        )

    def move_item(self, old_index: int, new_index: int) -> None:
        """Relocate one element, keeping every other element's relative order."""
        self._check_reentrancy()
        old_index = self._check_index(old_index)
        new_index = self._check_index(new_index)

        with self._rollback_on_error():
            item = self._hooks.on_move(self._items, old_index, new_index)

        self._publish(
            ChangeNotification.move(item, new_index, old_index), count_changed=False
        )

    move = move_item

    # ------------------------------------------------------------------
    # Range mutation
    # ------------------------------------------------------------------

    def append_range(self, items: Iterable[T]) -> None:
        """Append every element of ``items``, in order, as one Add."""
        self._check_reentrancy()
        block = self._snapshot_input(items)
        self._insert_block(block, len(self._items))

    def extend(self, items: Iterable[T]) -> None:
        self.append_range(items)

    def insert_range(self, items: Iterable[T], start_index: int) -> None:
        """Insert ``items`` as a contiguous block starting at ``start_index``."""
        self._check_reentrancy()
        block = self._snapshot_input(items)
        start_index = self._check_insert_index(start_index)
        self._insert_block(block, start_index)

    def remove_range(self, index: int, count: int) -> None:
        """Remove ``count`` contiguous elements starting at ``index``."""
        self._check_reentrancy()
        index, count = self._check_span(index, count)

        with self._rollback_on_error():
            removed = self._remove_block(index, count)

        self._publish(ChangeNotification.remove(removed, index), count_changed=True)

    def replace_range(self, index: int, count: int, items: Iterable[T]) -> None:
        """
        Replace ``count`` elements starting at ``index`` with ``items``.

        ``items`` may be shorter or longer than ``count``. The final state
        equals ``remove_range(index, count)`` followed by
        ``insert_range(items, index)``, but a single Replace is sent.
        """
        self._check_reentrancy()
        block = self._snapshot_input(items)
        index, count = self._check_span(index, count)

        with self._rollback_on_error():
            removed = self._remove_block(index, count)
            for offset, item in enumerate(block):
                self._hooks.on_insert(self._items, index + offset, item)

        self._publish(
            ChangeNotification.replace(block, removed, index),
            count_changed=len(block) != count,
        )

    def clear(self) -> None:
        """Remove everything. Always sends a Reset, even when already empty."""
        self._check_reentrancy()

        with self._rollback_on_error():
            for position in range(len(self._items) - 1, -1, -1):
                self._hooks.on_remove(self._items, position)

        self._publish(ChangeNotification.reset(), count_changed=True)

    # ------------------------------------------------------------------
    # Python protocol mutation
    # ------------------------------------------------------------------

    def __setitem__(self, index: Union[int, slice], value: Any) -> None:
        if isinstance(index, slice):
            start, count = self._slice_span(index)
            self.replace_range(start, count, value)
        else:
            self.replace_at(self._normalize(index), value)

    def __delitem__(self, index: Union[int, slice]) -> None:
        if isinstance(index, slice):
            start, count = self._slice_span(index)
            self.remove_range(start, count)
        else:
            self.remove_at(self._normalize(index))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _rollback_on_error(self) -> Iterator[None]:
        """Restore the contents from before the body if a hook raises."""
        before = list(self._items)
        try:
            yield
        except BaseException:
            self._items[:] = before
            raise

    def _insert_block(self, block: List[T], start_index: int) -> None:
        with self._rollback_on_error():
            for offset, item in enumerate(block):
                self._hooks.on_insert(self._items, start_index + offset, item)

        self._publish(ChangeNotification.add(block, start_index), count_changed=True)

    def _remove_block(self, index: int, count: int) -> List[T]:
        # Highest index first so the indices still to be visited stay valid.
        removed: List[Any] = [None] * count
        for position in range(index + count - 1, index - 1, -1):
            removed[position - index] = self._hooks.on_remove(self._items, position)
        return removed

    @staticmethod
    def _snapshot_input(items: Iterable[T]) -> List[T]:
        if items is None:
            raise InvalidArgumentError("Items must not be None")
        return list(items)

    def _normalize(self, index: int) -> int:
        index = operator.index(index)
        if index < 0:
            index += len(self._items)
        return index

    def _check_index(self, index: int) -> int:
        index = operator.index(index)
        length = len(self._items)
        if not 0 <= index < length:
            raise IndexOutOfRangeError(
                f"Index {index} is out of range for length {length}",
                index=index,
                length=length,
            )
        return index

    def _check_insert_index(self, index: int) -> int:
        index = operator.index(index)
        length = len(self._items)
        if not 0 <= index <= length:
            raise IndexOutOfRangeError(
                f"Insert index {index} is out of range for length {length}",
                index=index,
                length=length,
            )
        return index

    def _check_span(self, index: int, count: int) -> Tuple[int, int]:
        index = operator.index(index)
        count = operator.index(count)
        length = len(self._items)
        if index < 0 or count < 0 or index + count > length:
            raise IndexOutOfRangeError(
                f"Span of {count} at index {index} is out of range for length {length}",
                index=index,
                count=count,
                length=length,
            )
        return index, count

    def _slice_span(self, index: slice) -> Tuple[int, int]:
        start, stop, step = index.indices(len(self._items))
        if step != 1:
            raise InvalidArgumentError("Only contiguous slices (step 1) are supported")
        return start, max(stop - start, 0)

    # ------------------------------------------------------------------
    # Notification dispatch
    # ------------------------------------------------------------------

    def _publish(self, notification: ChangeNotification, count_changed: bool) -> None:
        """
        Send the property signals and then ``notification``, all under the guard.

        A property listener that mutates the sequence would otherwise hand the
        change listeners a notification describing a state that no longer
        exists.
        """
        with self._guard.block():
            if count_changed:
                self._on_count_changed()
            self._on_indexer_changed()
            self._on_collection_changed(notification)

    def _on_count_changed(self) -> None:
        self._on_property_changed(COUNT_PROPERTY)

    def _on_indexer_changed(self) -> None:
        self._on_property_changed(INDEXER_PROPERTY)

    def _on_property_changed(self, name: str) -> None:
        self._property_listeners.notify_all(name)

    def _on_collection_changed(self, notification: ChangeNotification) -> None:
        """
        Send ``notification`` to every change listener.

        Called with the guard held. Subclasses that dispatch from elsewhere
        must hold ``block_reentrancy()`` themselves.
        """
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Dispatching {notification.to_dict()} "
                f"to {len(self._change_listeners)} listeners"
            )
        self._change_listeners.notify_all(notification)
