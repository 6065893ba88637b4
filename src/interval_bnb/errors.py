"""
Error types raised by the minimizer.

Only configuration problems are detected. The enclosure guarantee of
objective functions is trusted and never validated.
"""


class ConfigurationError(ValueError):
    """Invalid run configuration (threshold, mode, worker layout)."""


class UnknownObjectiveError(ConfigurationError):
    """Objective identifier is not present in the registry."""

    def __init__(self, name: str, available=()):
        self.name = name
        self.available = list(available)
        message = f"Unknown function '{name}'"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class TopologyError(ConfigurationError):
    """Number of participating workers differs from WORKER_COUNT."""

    def __init__(self, size: int, expected: int):
        self.size = size
        self.expected = expected
        super().__init__(
            f"Exactly {expected} workers are required, got {size}"
        )


class WorkerError(RuntimeError):
    """A worker failed while searching its assigned box."""

    def __init__(self, rank: int, message: str):
        self.rank = rank
        super().__init__(f"Worker {rank} failed: {message}")
