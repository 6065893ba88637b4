"""
Interval Branch-and-Bound - Certified 2D Global Minimization

Computes a guaranteed upper bound on the global minimum of a bivariate
function over a box, together with small boxes that may contain the
minimizers, using interval arithmetic.

Key Features:
- Outward-rounded interval arithmetic for sound enclosures
- Depth-first branch-and-bound with candidate eviction
- Four-worker decomposition of the first split (processes, threads or MPI)
- Registry of classic test functions with their domains
"""

from .bounds.interval import (
    Interval,
    ROUND_EPS,
)
from .box import (
    Box,
    QUADRANT_COUNT,
    split_box,
)
from .minimizers import (
    Candidate,
    CandidateSet,
)
from .errors import (
    ConfigurationError,
    UnknownObjectiveError,
    TopologyError,
    WorkerError,
)
from .functions import (
    Objective,
    OBJECTIVES,
    available_objectives,
    get_objective,
)
from .solver.engine import (
    BranchAndBound,
    SearchConfig,
    SearchContext,
    SearchResult,
    minimize,
)
from .parallel.coordinator import (
    WORKER_COUNT,
    Coordinator,
    CoordinatorConfig,
    DistributedResult,
    RunParameters,
    check_topology,
    combine,
    plan_run,
    run_worker,
)
from .parallel.mpi import run_mpi

__version__ = "0.1.0"

__all__ = [
    # Intervals and boxes
    "Interval",
    "ROUND_EPS",
    "Box",
    "QUADRANT_COUNT",
    "split_box",
    # Candidates
    "Candidate",
    "CandidateSet",
    # Errors
    "ConfigurationError",
    "UnknownObjectiveError",
    "TopologyError",
    "WorkerError",
    # Objectives
    "Objective",
    "OBJECTIVES",
    "available_objectives",
    "get_objective",
    # Solver
    "BranchAndBound",
    "SearchConfig",
    "SearchContext",
    "SearchResult",
    "minimize",
    # Parallel
    "WORKER_COUNT",
    "Coordinator",
    "CoordinatorConfig",
    "DistributedResult",
    "RunParameters",
    "check_topology",
    "combine",
    "plan_run",
    "run_worker",
    "run_mpi",
]
