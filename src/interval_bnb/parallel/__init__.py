"""
Parallel Module - Four-Worker Decomposition

Provides:
- Coordinator: in-process run with a process or thread pool
- run_mpi: SPMD entry point for mpiexec -n 4
- plan_run / run_worker / combine: the protocol steps
"""

from .coordinator import (
    WORKER_COUNT,
    COORDINATOR_RANK,
    Coordinator,
    CoordinatorConfig,
    DistributedResult,
    RunParameters,
    WorkAssignment,
    WorkerResult,
    check_topology,
    combine,
    finalize,
    plan_run,
    run_worker,
)
from .mpi import run_mpi

__all__ = [
    'WORKER_COUNT',
    'COORDINATOR_RANK',
    'Coordinator',
    'CoordinatorConfig',
    'DistributedResult',
    'RunParameters',
    'WorkAssignment',
    'WorkerResult',
    'check_topology',
    'combine',
    'finalize',
    'plan_run',
    'run_worker',
    'run_mpi',
]
