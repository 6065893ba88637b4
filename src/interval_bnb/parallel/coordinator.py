"""
Worker Coordinator

Distributes the first level of the search tree across a fixed set of
WORKER_COUNT workers and combines their results:

1. The coordinator splits the initial domain into four quadrants and
   pairs quadrant i with worker rank i (plan_run).
2. The identical RunParameters are handed to every worker (broadcast).
3. Each worker searches only its own quadrant, sequentially, from an
   infinite bound and an empty candidate set (run_worker).
4. The local upper bounds are reduced with min; candidate lists are
   gathered and evicted once against the reduced bound (combine).

Workers share no mutable state. There are no timeouts or retries: a
worker that never returns stalls the run.
"""

import time
from concurrent.futures import Future, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..box import QUADRANT_COUNT, Box, split_box
from ..errors import ConfigurationError, TopologyError, WorkerError
from ..functions import get_objective
from ..minimizers import Candidate, CandidateSet
from ..solver.engine import BranchAndBound, SearchConfig, validate_threshold


# Number of cooperating workers; fixed by the decomposition scheme
WORKER_COUNT = 4

COORDINATOR_RANK = 0


def check_topology(size: int, expected: int = WORKER_COUNT) -> None:
    """Raise TopologyError unless exactly `expected` workers take part."""
    if size != expected:
        raise TopologyError(size, expected)


@dataclass(frozen=True)
class WorkAssignment:
    """A quadrant of the initial domain and the worker that owns it."""
    rank: int
    box: Box


@dataclass(frozen=True)
class RunParameters:
    """Read-only parameters every worker receives before searching."""
    objective_name: str
    threshold: float
    assignment: Tuple[WorkAssignment, ...]

    def box_for(self, rank: int) -> Box:
        for item in self.assignment:
            if item.rank == rank:
                return item.box
        raise ConfigurationError(f"No quadrant assigned to rank {rank}")

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "objective": self.objective_name,
            "threshold": self.threshold,
            "assignment": [
                {"rank": a.rank, "box": a.box.to_canonical()}
                for a in self.assignment
            ],
        }


def plan_run(
    objective_name: str,
    threshold: float,
    domain: Optional[Box] = None,
) -> RunParameters:
    """
    Build the run parameters on the coordinator.

    Args:
        objective_name: Registry identifier of the objective
        threshold: Box width at which splitting stops
        domain: Initial box (default: the objective's registered domain)

    Returns:
        RunParameters with one quadrant per worker rank
    """
    objective = get_objective(objective_name)
    threshold = validate_threshold(threshold)
    if domain is None:
        domain = objective.domain

    quadrants = split_box(domain)
    # One quadrant per worker only works while the two counts agree
    check_topology(QUADRANT_COUNT, WORKER_COUNT)

    assignment = tuple(
        WorkAssignment(rank=rank, box=quadrant)
        for rank, quadrant in enumerate(quadrants)
    )
    return RunParameters(
        objective_name=objective_name,
        threshold=threshold,
        assignment=assignment,
    )


@dataclass
class WorkerResult:
    """Local outcome of one worker's quadrant search."""
    rank: int
    upper_bound: float
    candidates: List[Candidate]
    nodes_explored: int = 0
    elapsed: float = 0.0


def run_worker(params: RunParameters, rank: int, log_frequency: int = 0) -> WorkerResult:
    """Search the quadrant assigned to `rank`; identical code on every worker."""
    box = params.box_for(rank)
    objective = get_objective(params.objective_name)
    solver = BranchAndBound(
        objective,
        SearchConfig(threshold=params.threshold, log_frequency=log_frequency),
    )
    result = solver.search(box)
    return WorkerResult(
        rank=rank,
        upper_bound=result.upper_bound,
        candidates=result.candidates,
        nodes_explored=result.nodes_explored,
        elapsed=result.elapsed,
    )


@dataclass
class DistributedResult:
    """Combined outcome of a four-worker run."""
    upper_bound: float
    candidates: List[Candidate]
    merged: bool = True
    local_bounds: Dict[int, float] = field(default_factory=dict)
    nodes_explored: int = 0
    elapsed: float = 0.0

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "upper_bound": self.upper_bound,
            "candidates": [c.to_canonical() for c in self.candidates],
            "n_candidates": len(self.candidates),
            "merged": self.merged,
            "local_bounds": {str(k): v for k, v in sorted(self.local_bounds.items())},
            "nodes_explored": self.nodes_explored,
        }


def finalize(
    upper_bound: float,
    candidate_lists: Iterable[Sequence[Candidate]],
) -> List[Candidate]:
    """
    Gather candidate lists and evict against the reduced bound.

    Local candidates only satisfy flo < local bound; one eviction pass
    against the global bound restores the invariant for the union.
    """
    candidates = CandidateSet()
    for local in candidate_lists:
        candidates.merge(local)
    candidates.evict_from(upper_bound)
    return candidates.to_list()


def combine(
    results: Sequence[WorkerResult],
    merge_candidates: bool = True,
    coordinator_rank: int = COORDINATOR_RANK,
) -> DistributedResult:
    """
    Min-reduce the local bounds and assemble the final candidate list.

    With merge_candidates=False only the coordinator's own candidates are
    kept, as in a bound-only reduction.
    """
    check_topology(len(results))
    ranks = sorted(r.rank for r in results)
    if ranks != list(range(WORKER_COUNT)):
        raise ConfigurationError(f"Expected one result per rank 0..{WORKER_COUNT - 1}, got {ranks}")

    upper_bound = min(r.upper_bound for r in results)

    if merge_candidates:
        lists = [r.candidates for r in results]
    else:
        lists = [r.candidates for r in results if r.rank == coordinator_rank]

    candidates = finalize(upper_bound, lists)
    return DistributedResult(
        upper_bound=upper_bound,
        candidates=candidates,
        merged=merge_candidates,
        local_bounds={r.rank: r.upper_bound for r in results},
        nodes_explored=sum(r.nodes_explored for r in results),
        elapsed=max(r.elapsed for r in results),
    )


@dataclass
class CoordinatorConfig:
    """Configuration for an in-process four-worker run."""
    worker_count: int = WORKER_COUNT
    mode: str = "process"  # "process" or "thread"
    merge_candidates: bool = True
    log_frequency: int = 0

    def __post_init__(self):
        check_topology(self.worker_count)
        if self.mode not in ("process", "thread"):
            raise ConfigurationError(f"Unknown mode '{self.mode}' (expected 'process' or 'thread')")


class Coordinator:
    """
    Runs the four workers concurrently on this machine.

    Each worker is a separate process (or thread) executing run_worker on
    the same RunParameters; the coordinator then blocks until all four
    results are available and combines them.
    """

    def __init__(
        self,
        objective_name: str,
        threshold: float,
        config: CoordinatorConfig = None,
        domain: Optional[Box] = None,
    ):
        self.config = config or CoordinatorConfig()
        self.params = plan_run(objective_name, threshold, domain)
        self.worker_results: List[WorkerResult] = []

    def run(self) -> DistributedResult:
        start = time.time()

        ExecutorCls = ProcessPoolExecutor if self.config.mode == "process" else ThreadPoolExecutor
        futures: List[Future] = []
        with ExecutorCls(max_workers=self.config.worker_count) as pool:
            for rank in range(self.config.worker_count):
                futures.append(
                    pool.submit(run_worker, self.params, rank, self.config.log_frequency)
                )

            results = []
            for rank, fut in enumerate(futures):
                try:
                    results.append(fut.result())
                except Exception as exc:
                    for pending in futures[rank + 1:]:
                        pending.cancel()
                    raise WorkerError(rank, str(exc)) from exc

        self.worker_results = results
        combined = combine(results, merge_candidates=self.config.merge_candidates)
        combined.elapsed = time.time() - start
        return combined
