"""
MPI entry point (run with `mpiexec -n 4`).

Every rank executes run_mpi. Rank 0 plans the run and broadcasts the
parameters; each rank searches its quadrant; the local bounds are
min-reduced to rank 0 and, when merging, the local candidate lists are
gathered there as well. There is no communication during the search.
"""

import time
from typing import Any, Callable, Optional

from ..box import Box
from .coordinator import (
    COORDINATOR_RANK,
    DistributedResult,
    check_topology,
    finalize,
    plan_run,
    run_worker,
)


def run_mpi(
    objective_name: Optional[str] = None,
    threshold: Optional[float] = None,
    comm: Any = None,
    merge_candidates: bool = True,
    domain: Optional[Box] = None,
    log_frequency: int = 0,
    min_op: Optional[Callable] = None,
) -> Optional[DistributedResult]:
    """
    Run one rank of the distributed search.

    Args:
        objective_name: Objective identifier (only read on rank 0)
        threshold: Stopping width (only read on rank 0)
        comm: mpi4py communicator (default: MPI.COMM_WORLD)
        merge_candidates: Gather every rank's candidates on rank 0
        domain: Initial box (default: the objective's registered domain)
        log_frequency: Progress print interval for each local search
        min_op: Reduction operator (default: MPI.MIN)

    Returns:
        DistributedResult on rank 0, None on the other ranks
    """
    if comm is None or min_op is None:
        from mpi4py import MPI
        comm = comm if comm is not None else MPI.COMM_WORLD
        min_op = min_op if min_op is not None else MPI.MIN

    # Fails identically on every rank, before any communication
    check_topology(comm.Get_size())
    rank = comm.Get_rank()
    start = time.time()

    params = None
    if rank == COORDINATOR_RANK:
        params = plan_run(objective_name, threshold, domain)
    params = comm.bcast(params, root=COORDINATOR_RANK)

    local = run_worker(params, rank, log_frequency)

    upper_bound = comm.reduce(local.upper_bound, op=min_op, root=COORDINATOR_RANK)

    if merge_candidates:
        gathered = comm.gather(local.candidates, root=COORDINATOR_RANK)
    else:
        gathered = [local.candidates] if rank == COORDINATOR_RANK else None

    if rank != COORDINATOR_RANK:
        return None

    return DistributedResult(
        upper_bound=upper_bound,
        candidates=finalize(upper_bound, gathered),
        merged=merge_candidates,
        # Only the bound is reduced; node counts stay local
        nodes_explored=local.nodes_explored,
        elapsed=time.time() - start,
    )
