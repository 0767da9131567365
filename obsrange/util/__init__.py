"""
obsrange Utilities
==================

Building blocks used by RangeObservableSequence.

Classes:
- OrderedObserverSet: registration-ordered listener set with snapshot dispatch
- ReentrancyGuard: nested-dispatch depth counter with scoped blocking

Functions:
- values_equal: numpy-aware element equality
"""

from .equality import values_equal
from .observer_set import OrderedObserverSet
from .reentrancy import ReentrancyGuard

__all__ = [
    "OrderedObserverSet",
    "ReentrancyGuard",
    "values_equal",
]
