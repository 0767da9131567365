"""
obsrange - Range-Aware Observable Sequences
===========================================

An ordered, mutable container that publishes one structured change
notification per operation, including bulk insert/remove/replace operations,
and guards itself against listeners that try to change it mid-dispatch.
"""

import logging

from .errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    ObsRangeError,
    ReentrancyViolationError,
)
from .hooks import ItemHooks, ListItemHooks
from .mirror import SequenceMirror
from .notifications import (
    COUNT_PROPERTY,
    INDEXER_PROPERTY,
    ChangeAction,
    ChangeNotification,
)
from .sequence import RangeObservableSequence

# Silent unless the application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Container
    "RangeObservableSequence",
    "SequenceMirror",
    # Notifications
    "ChangeAction",
    "ChangeNotification",
    "COUNT_PROPERTY",
    "INDEXER_PROPERTY",
    # Hooks
    "ItemHooks",
    "ListItemHooks",
    # Errors
    "ObsRangeError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "ReentrancyViolationError",
]
