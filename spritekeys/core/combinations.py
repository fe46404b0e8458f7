"""Enumeration of strictly increasing integer tuples.

Used by the discovery driver to walk every candidate set of key pixels,
expressed as row-major linear pixel indices, in ascending lexicographic order.
"""
from __future__ import annotations

import math
from typing import Iterator, List, Optional, Tuple

from .exceptions import InvalidArgumentError


def count_combinations(k: int, bound: int) -> int:
    """Number of k-element combinations drawn from ``[0, bound]``."""
    if k < 1 or bound < k - 1:
        return 0
    return math.comb(bound + 1, k)


class CombinationEnumerator:
    """Steps through every k-tuple ``c[0] < c[1] < ... < c[k-1]`` in ``[0, bound]``.

    The enumerator is resumable through its explicit state: the current tuple
    and the ``exhausted`` flag. Restart by building a new instance.

    >>> e = CombinationEnumerator(2, 3)
    >>> [c for c in e]
    [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]
    """

    def __init__(self, k: int, bound: int):
        if isinstance(k, bool) or not isinstance(k, int):
            raise InvalidArgumentError("k must be an integer.")
        if isinstance(bound, bool) or not isinstance(bound, int):
            raise InvalidArgumentError("bound must be an integer.")
        if k < 1:
            raise InvalidArgumentError("k must be at least 1.")
        self.k = k
        self.bound = bound
        self._current: List[int] = list(range(k))
        self._exhausted = bound < k - 1

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def current(self) -> Optional[Tuple[int, ...]]:
        """The active tuple, or ``None`` once the sequence is exhausted."""
        if self._exhausted:
            return None
        return tuple(self._current)

    def advance(self) -> None:
        """Move to the next tuple; a no-op once exhausted."""
        if self._exhausted:
            return
        k = self.k
        i = k - 1
        # position i may grow up to bound - (k - 1 - i)
        while i >= 0 and self._current[i] >= self.bound - (k - 1 - i):
            i -= 1
        if i < 0:
            self._exhausted = True
            return
        self._current[i] += 1
        for j in range(i + 1, k):
            self._current[j] = self._current[j - 1] + 1

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        while not self._exhausted:
            yield tuple(self._current)
            self.advance()

    def __repr__(self) -> str:
        return (f"CombinationEnumerator(k={self.k}, bound={self.bound}, "
                f"current={self.current()}, exhausted={self._exhausted})")
