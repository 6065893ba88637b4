"""
Branch-and-Bound Engine

Depth-first interval branch-and-bound over a 2D box:
- Evaluate the objective enclosure on the current box
- Prune boxes whose enclosure lies entirely above the incumbent bound
- Tighten the upper bound with the enclosure's right end, evicting
  candidates that can no longer hold the minimum
- Record boxes narrower than the threshold as candidate minimizers
- Otherwise split into four quadrants and recurse

All mutable state lives in a SearchContext owned by a single search.
The engine trusts the enclosure guarantee of the objective completely;
pruning is only sound if that guarantee holds.
"""

import math
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from ..bounds.interval import Interval
from ..box import Box, split_box
from ..errors import ConfigurationError
from ..minimizers import Candidate, CandidateSet


IntervalFunction = Callable[[Interval, Interval], Interval]


def validate_threshold(threshold: float) -> float:
    """Return threshold as float, rejecting values that cannot terminate."""
    try:
        value = float(threshold)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Threshold must be a number, got {threshold!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"Threshold must be finite and positive, got {threshold!r}")
    return value


def max_search_depth(box: Box, threshold: float) -> int:
    """Deepest recursion level reached before x-width drops to threshold."""
    if box.width <= threshold:
        return 0
    return math.ceil(math.log2(box.width / threshold))


@dataclass
class SearchConfig:
    """Configuration for a sequential search."""
    threshold: float
    log_frequency: int = 0

    def __post_init__(self):
        self.threshold = validate_threshold(self.threshold)
        if self.log_frequency < 0:
            raise ConfigurationError("log_frequency must be >= 0")


@dataclass
class SearchContext:
    """Mutable state threaded through one recursive search."""
    upper_bound: float = float('inf')
    candidates: CandidateSet = field(default_factory=CandidateSet)

    nodes_explored: int = 0
    nodes_pruned: int = 0
    bound_updates: int = 0
    max_depth: int = 0

    log_frequency: int = 0
    start_time: float = field(default_factory=time.time)

    def tighten(self, bound: float) -> None:
        self.upper_bound = bound
        self.bound_updates += 1
        self.candidates.evict_from(bound)

    def log_progress(self) -> None:
        elapsed = time.time() - self.start_time
        print(
            f"Nodes: {self.nodes_explored:,} | "
            f"Pruned: {self.nodes_pruned:,} | "
            f"Candidates: {len(self.candidates):,} | "
            f"UB: {self.upper_bound:.6g} | "
            f"Time: {elapsed:.2f}s"
        )


def minimize(
    objective: IntervalFunction,
    box: Box,
    threshold: float,
    context: SearchContext,
    depth: int = 0,
) -> None:
    """
    Recursive branch-and-bound step on one box.

    Args:
        objective: Interval extension f(x, y) enclosing the true range
        box: Current region
        threshold: Stop splitting once the x-width is at most this
        context: Incumbent bound and candidate set, updated in place
        depth: Recursion depth of this box
    """
    context.nodes_explored += 1
    if depth > context.max_depth:
        context.max_depth = depth
    if context.log_frequency and context.nodes_explored % context.log_frequency == 0:
        context.log_progress()

    fxy = objective(box.x, box.y)

    # Box cannot contain the minimum
    if fxy.lo > context.upper_bound:
        context.nodes_pruned += 1
        return

    if fxy.hi < context.upper_bound:
        context.tighten(fxy.hi)

    # x and y shrink together, so the x-width alone decides
    if box.x.width <= threshold:
        context.candidates.insert(Candidate(box, fxy.lo, fxy.hi))
        return

    for sub_box in split_box(box):
        minimize(objective, sub_box, threshold, context, depth + 1)


@dataclass
class SearchResult:
    """Outcome of one sequential search."""
    upper_bound: float
    candidates: List[Candidate]
    nodes_explored: int = 0
    nodes_pruned: int = 0
    max_depth: int = 0
    elapsed: float = 0.0

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "upper_bound": self.upper_bound,
            "candidates": [c.to_canonical() for c in self.candidates],
            "n_candidates": len(self.candidates),
            "nodes_explored": self.nodes_explored,
            "nodes_pruned": self.nodes_pruned,
            "max_depth": self.max_depth,
        }


class BranchAndBound:
    """
    Rank-agnostic sequential solver.

    Every call to search() starts from an infinite upper bound and an
    empty candidate set, so one instance can serve many boxes.
    """

    def __init__(self, objective: IntervalFunction, config: SearchConfig):
        self.objective = objective
        self.config = config

    def search(self, box: Box) -> SearchResult:
        context = SearchContext(log_frequency=self.config.log_frequency)
        minimize(self.objective, box, self.config.threshold, context)
        return SearchResult(
            upper_bound=context.upper_bound,
            candidates=context.candidates.to_list(),
            nodes_explored=context.nodes_explored,
            nodes_pruned=context.nodes_pruned,
            max_depth=context.max_depth,
            elapsed=time.time() - context.start_time,
        )
