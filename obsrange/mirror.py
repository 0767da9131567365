"""
obsrange Mirror - Reference Consumer of Change Notifications
============================================================

SequenceMirror keeps a plain-list copy of a RangeObservableSequence purely by
replaying the notifications it receives. It is the smallest consumer that
honours the listener contract:

- it subscribes before the mutations it has to see
- it never mutates the source from inside its callback
- on Reset it discards its copy and re-reads the source by index

With ``expand=True`` it applies range notifications one element at a time
through ``ChangeNotification.expand()``, the way a single-index consumer would.
"""

import logging
from typing import Any, Generic, List, TypeVar

from .notifications import ChangeAction, ChangeNotification
from .sequence import RangeObservableSequence

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SequenceMirror(Generic[T]):
    """Plain-list replica of a sequence, maintained from notifications only."""

    def __init__(self, source: RangeObservableSequence[T], expand: bool = False):
        self._source = source
        self._expand = expand
        self._items: List[T] = [source.get(i) for i in range(len(source))]
        self.received: List[ChangeNotification] = []
        self.resets = 0
        source.subscribe(self._on_change)

    @property
    def items(self) -> List[T]:
        return list(self._items)

    def detach(self) -> None:
        """Stop following the source."""
        self._source.unsubscribe(self._on_change)

    def in_sync(self) -> bool:
        """True when the replica matches the source element for element."""
        return self._items == list(self._source)

    def _on_change(self, notification: ChangeNotification) -> None:
        self.received.append(notification)
        if notification.action is ChangeAction.RESET:
            self.resets += 1
            self._reload()
            return
        steps = notification.expand() if self._expand else (notification,)
        for step in steps:
            step.apply_to(self._items)

    def _reload(self) -> None:
        source = self._source
        self._items = [source.get(i) for i in range(len(source))]
        logger.debug(f"Mirror reloaded {len(self._items)} items after reset")

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Any:
        return self._items[index]
