"""
Bounds Module — Interval Enclosures

Interval arithmetic with outward rounding; the only bounding tier
used by the branch-and-bound search.
"""

from .interval import (
    Interval,
    ROUND_EPS,
)

__all__ = [
    'Interval',
    'ROUND_EPS',
]
