"""
Box Definition and Splitting

Defines the two-dimensional search region used by branch-and-bound:
- Box: an immutable pair of intervals (x-range, y-range)
- split_box: bisection of a box into four equal quadrants

The four-way split is a property of 2D bisection. It is unrelated to
the number of workers, even though both happen to be four.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .bounds.interval import Interval


# Number of sub-boxes produced by bisecting both dimensions
QUADRANT_COUNT = 4


@dataclass(frozen=True)
class Box:
    """
    A rectangular region [x.lo, x.hi] x [y.lo, y.hi].

    Attributes:
        x: Range of the first variable
        y: Range of the second variable
    """
    x: Interval
    y: Interval

    @classmethod
    def from_bounds(cls, bounds: List[Tuple[float, float]]) -> 'Box':
        """Create from [(x_lo, x_hi), (y_lo, y_hi)]."""
        if len(bounds) != 2:
            raise ValueError(f"A box needs exactly 2 ranges, got {len(bounds)}")
        (x_lo, x_hi), (y_lo, y_hi) = bounds
        return cls(Interval(float(x_lo), float(x_hi)), Interval(float(y_lo), float(y_hi)))

    @property
    def width(self) -> float:
        """Width along x, used as the termination metric."""
        return self.x.width

    @property
    def area(self) -> float:
        return self.x.width * self.y.width

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x.midpoint, self.y.midpoint)

    def contains_point(self, px: float, py: float) -> bool:
        return self.x.contains(px) and self.y.contains(py)

    def to_canonical(self) -> Dict[str, Any]:
        return {"x": self.x.to_canonical(), "y": self.y.to_canonical()}

    def __repr__(self) -> str:
        return f"Box({self.x!r} x {self.y!r})"


def split_box(box: Box) -> Tuple[Box, Box, Box, Box]:
    """
    Split a box into four sub-boxes by halving both dimensions.

    Returns the quadrants in the order (xl,yl), (xl,yr), (xr,yl), (xr,yr).
    A zero-width dimension still splits, into zero-width halves.
    """
    xm = box.x.midpoint
    ym = box.y.midpoint
    xl = Interval(box.x.lo, xm)
    xr = Interval(xm, box.x.hi)
    yl = Interval(box.y.lo, ym)
    yr = Interval(ym, box.y.hi)
    return (
        Box(xl, yl),
        Box(xl, yr),
        Box(xr, yl),
        Box(xr, yr),
    )
