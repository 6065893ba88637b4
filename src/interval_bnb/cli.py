"""
Interval Branch-and-Bound Command-Line Interface

Runs a minimization sequentially, with four local workers, or as one
rank of an MPI job. The function and precision are prompted for when
not given on the command line.
"""

import sys
import argparse
import time
from pathlib import Path
from typing import Callable, List, Optional, TextIO

from . import __version__
from .core.canonical_json import canonical_dumps
from .errors import ConfigurationError, TopologyError, WorkerError
from .functions import OBJECTIVES, available_objectives, get_objective
from .minimizers import Candidate
from .parallel.coordinator import COORDINATOR_RANK, Coordinator, CoordinatorConfig, check_topology
from .parallel.mpi import run_mpi
from .solver.engine import BranchAndBound, SearchConfig, validate_threshold


# Significant digits for printed bounds
OUTPUT_PRECISION = 16


def prompt_objective(
    read: Callable[[str], str] = None,
    out: TextIO = None,
    err: TextIO = None,
) -> str:
    """Ask for a function name until a registered one is given."""
    read = read or input
    out = out or sys.stdout
    err = err or sys.stderr
    while True:
        print("Which function to optimize?", file=out)
        print("Possible choices: " + " ".join(available_objectives()), file=out)
        name = read("").strip()
        try:
            get_objective(name)
        except ConfigurationError:
            print("Bad choice", file=err)
            continue
        return name


def prompt_precision(
    read: Callable[[str], str] = None,
    err: TextIO = None,
) -> float:
    """Ask for the splitting threshold until a positive number is given."""
    read = read or input
    err = err or sys.stderr
    while True:
        raw = read("Precision? ").strip()
        try:
            return validate_threshold(raw)
        except ConfigurationError as exc:
            print(f"Bad precision: {exc}", file=err)


def resolve_inputs(args, read: Callable[[str], str] = None):
    """Fill in function and precision from args, prompting for what is missing."""
    name = args.function
    if name is None:
        name = prompt_objective(read)
    else:
        get_objective(name)

    precision = args.precision
    if precision is None:
        precision = prompt_precision(read)
    else:
        precision = validate_threshold(precision)
    return name, precision


def print_minimizers(
    candidates: List[Candidate],
    upper_bound: float,
    out: TextIO = None,
) -> None:
    """Print candidates one per line, then their count and the bound."""
    out = out or sys.stdout
    for candidate in candidates:
        print(candidate.format(OUTPUT_PRECISION), file=out)
    print(f"Number of minimizers: {len(candidates)}", file=out)
    print(f"Upper bound for minimum: {upper_bound:.{OUTPUT_PRECISION}g}", file=out)


def _save(path: str, payload: dict) -> None:
    Path(path).write_text(canonical_dumps(payload, indent=2))
    print(f"\nResults saved to: {path}")


def _banner(title: str, name: str, precision: float) -> None:
    print("=" * 60)
    print(title)
    print("=" * 60)
    print(f"Function: {name} ({OBJECTIVES[name].description})")
    print(f"Domain: {OBJECTIVES[name].domain!r}")
    print(f"Precision: {precision}")


def cmd_solve(args):
    """Sequential search over the whole domain."""
    name, precision = resolve_inputs(args)
    _banner("Interval Branch-and-Bound (sequential)", name, precision)

    objective = get_objective(name)
    solver = BranchAndBound(
        objective,
        SearchConfig(threshold=precision, log_frequency=args.log_frequency),
    )
    start = time.time()
    result = solver.search(objective.domain)
    elapsed = time.time() - start

    print_minimizers(result.candidates, result.upper_bound)
    print(f"Nodes explored: {result.nodes_explored} (pruned {result.nodes_pruned})")
    print(f"Time: {elapsed:.3f}s")

    if args.output:
        payload = result.to_canonical()
        payload.update({"function": name, "precision": precision})
        _save(args.output, payload)
    return 0


def cmd_run(args):
    """Four local workers, one quadrant each."""
    name, precision = resolve_inputs(args)
    _banner(f"Interval Branch-and-Bound ({args.mode} workers)", name, precision)

    config = CoordinatorConfig(
        mode=args.mode,
        merge_candidates=not args.no_merge,
        log_frequency=args.log_frequency,
    )
    coordinator = Coordinator(name, precision, config)
    result = coordinator.run()

    print_minimizers(result.candidates, result.upper_bound)
    for rank, bound in sorted(result.local_bounds.items()):
        print(f"Worker {rank} upper bound: {bound:.{OUTPUT_PRECISION}g}")
    print(f"Nodes explored: {result.nodes_explored}")
    print(f"Time: {result.elapsed:.3f}s")

    if args.output:
        payload = result.to_canonical()
        payload.update({"function": name, "precision": precision})
        _save(args.output, payload)
    return 0


def cmd_mpi(args):
    """One rank of `mpiexec -n 4 ibnb mpi`."""
    from mpi4py import MPI

    comm = MPI.COMM_WORLD
    rank = comm.Get_rank()
    try:
        check_topology(comm.Get_size())
    except TopologyError as exc:
        if rank == COORDINATOR_RANK:
            print(f"Error: {exc}", file=sys.stderr)
        return 1

    name, precision = None, None
    if rank == COORDINATOR_RANK:
        try:
            name, precision = resolve_inputs(args)
        except (ConfigurationError, EOFError) as exc:
            # Other ranks are already waiting in the broadcast
            print(f"Error: {exc}", file=sys.stderr)
            comm.Abort(1)

    result = run_mpi(
        name,
        precision,
        comm=comm,
        merge_candidates=not args.no_merge,
        log_frequency=args.log_frequency,
    )
    if result is None:
        return 0

    print_minimizers(result.candidates, result.upper_bound)
    if args.output:
        payload = result.to_canonical()
        payload.update({"function": name, "precision": precision})
        _save(args.output, payload)
    return 0


def cmd_list(args):
    """List the registered functions."""
    for name in available_objectives():
        obj = OBJECTIVES[name]
        print(f"{name:18} {obj.domain!r}  {obj.description}")
    return 0


def cmd_version(args):
    """Print version information."""
    print(f"interval-bnb {__version__}")
    print("Certified 2D global minimization with interval branch-and-bound")
    return 0


def _add_run_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('function', nargs='?', default=None,
                        help='Function to optimize (prompted if omitted)')
    parser.add_argument('--precision', '-p', type=float, default=None,
                        help='Box width at which splitting stops (prompted if omitted)')
    parser.add_argument('--log-frequency', type=int, default=0,
                        help='Print progress every N nodes (default: off)')
    parser.add_argument('--output', '-o', type=str,
                        help='Output JSON file')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ibnb',
        description='Interval branch-and-bound global minimization in 2D'
    )
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    solve_parser = subparsers.add_parser('solve', help='Sequential search')
    _add_run_arguments(solve_parser)
    solve_parser.set_defaults(func=cmd_solve)

    run_parser = subparsers.add_parser('run', help='Search with four local workers')
    _add_run_arguments(run_parser)
    run_parser.add_argument('--mode', choices=['process', 'thread'], default='process',
                            help='Worker kind (default: process)')
    run_parser.add_argument('--no-merge', action='store_true',
                            help="Report only the coordinator's own candidates")
    run_parser.set_defaults(func=cmd_run)

    mpi_parser = subparsers.add_parser('mpi', help='Run as one rank of mpiexec -n 4')
    _add_run_arguments(mpi_parser)
    mpi_parser.add_argument('--no-merge', action='store_true',
                            help="Report only rank 0's own candidates")
    mpi_parser.set_defaults(func=cmd_mpi)

    list_parser = subparsers.add_parser('list', help='List available functions')
    list_parser.set_defaults(func=cmd_list)

    ver_parser = subparsers.add_parser('version', help='Print version')
    ver_parser.set_defaults(func=cmd_version)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except (ConfigurationError, WorkerError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except EOFError:
        print("Error: input ended before a choice was made", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
