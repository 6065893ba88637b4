"""
Candidate Minimizers

A Candidate is a box that became small enough to stop splitting while
still possibly holding a global minimizer, together with the enclosure
[flo, fhi] of the objective over it.

CandidateSet keeps candidates sorted by ascending flo so that every
entry made obsolete by a tighter upper bound sits in one contiguous
suffix and can be dropped in a single slice.
"""

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from .box import Box


@dataclass(frozen=True, order=True)
class Candidate:
    """A small box that may contain a global minimizer."""
    sort_key: Tuple[float, ...] = field(init=False, repr=False)
    box: Box = field(compare=False)
    flo: float = field(compare=False)
    fhi: float = field(compare=False)

    def __post_init__(self):
        key = (
            self.flo,
            self.fhi,
            self.box.x.lo,
            self.box.x.hi,
            self.box.y.lo,
            self.box.y.hi,
        )
        object.__setattr__(self, "sort_key", key)

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "box": self.box.to_canonical(),
            "flo": self.flo,
            "fhi": self.fhi,
        }

    def format(self, precision: int = 16) -> str:
        """One-line rendering: box bounds followed by the enclosure."""
        x, y = self.box.x, self.box.y
        return (
            f"[{x.lo:.{precision}g}, {x.hi:.{precision}g}] x "
            f"[{y.lo:.{precision}g}, {y.hi:.{precision}g}] : "
            f"[{self.flo:.{precision}g}, {self.fhi:.{precision}g}]"
        )


class CandidateSet:
    """
    Ordered multiset of candidates, ascending by flo.

    Not thread-safe: each search owns its own instance.
    """

    def __init__(self, candidates: Iterable[Candidate] = ()):
        self._items: List[Candidate] = []
        self._keys: List[Tuple[float, ...]] = []
        self.merge(candidates)

    def insert(self, candidate: Candidate) -> None:
        """Insert keeping the order; identical entries are allowed."""
        idx = bisect_left(self._keys, candidate.sort_key)
        self._keys.insert(idx, candidate.sort_key)
        self._items.insert(idx, candidate)

    def merge(self, candidates: Iterable[Candidate]) -> None:
        for candidate in candidates:
            self.insert(candidate)

    def evict_from(self, bound: float) -> int:
        """
        Remove every candidate with flo >= bound.

        Returns:
            Number of candidates removed
        """
        # (bound,) sorts before any full key whose flo equals bound
        start = bisect_left(self._keys, (bound,))
        removed = len(self._items) - start
        del self._keys[start:]
        del self._items[start:]
        return removed

    def is_consistent(self, bound: float) -> bool:
        """True if every candidate has flo strictly below bound."""
        return not self._items or self._items[-1].flo < bound

    def size(self) -> int:
        return len(self._items)

    def to_list(self) -> List[Candidate]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"CandidateSet(size={len(self._items)})"
