"""Unbiased shuffling used for question order and option order."""
from __future__ import annotations

import random
from typing import Iterable, List, Optional, TypeVar

T = TypeVar("T")


def shuffle(items: Iterable[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a new list with the items in uniformly random order.

    Fisher-Yates over a copy, so the caller's sequence is left untouched.
    Pass a seeded ``random.Random`` to get a reproducible order.
    """
    source = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = source.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result
