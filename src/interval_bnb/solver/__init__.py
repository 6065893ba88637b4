"""
Solver Module - Sequential Branch-and-Bound

Provides:
- minimize: recursive prune / tighten / split step
- BranchAndBound: rank-agnostic entry point returning a SearchResult
"""

from .engine import (
    BranchAndBound,
    SearchConfig,
    SearchContext,
    SearchResult,
    minimize,
    max_search_depth,
    validate_threshold,
)

__all__ = [
    'BranchAndBound',
    'SearchConfig',
    'SearchContext',
    'SearchResult',
    'minimize',
    'max_search_depth',
    'validate_threshold',
]
