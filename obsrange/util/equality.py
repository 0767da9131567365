"""
Element Equality
================

Value comparison used for lookups by value (``index_of``, ``in``, ``remove``).

Plain ``==`` is not enough for sequences that hold numpy arrays: comparing two
arrays yields an array, and asking that array for its truth value raises.
Arrays are therefore compared with ``numpy.array_equal`` and only against other
arrays.
"""

from typing import Any

import numpy as np


def values_equal(left: Any, right: Any) -> bool:
    """Return True when ``left`` and ``right`` hold the same value."""
    if left is right:
        return True
    try:
        if isinstance(left, np.ndarray) or isinstance(right, np.ndarray):
            if type(left) != type(right):
                return False
            return bool(np.array_equal(left, right))
        result = left == right
        if isinstance(result, (bool, np.bool_)):
            return bool(result)
        return False
    except (ValueError, TypeError):
        return False
