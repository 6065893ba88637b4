"""
Interval Arithmetic

Provides rigorous interval enclosures for evaluating the objective
functions over boxes. Each operation widens its result outward so
the true value is always contained in the resulting interval.

This is the soundness foundation of the branch-and-bound search:
- Lower end of an objective enclosure is a certified lower bound
- Upper end is a certified upper bound on the minimum over the box

Rounding: endpoints are computed in round-to-nearest and then moved
outward by ROUND_EPS plus one ulp (np.nextafter). The ulp step keeps the
widening effective at any magnitude; ROUND_EPS alone vanishes once
|v| > 1. Results of libm calls (pow, exp, sin) get an extra ulp since
they are not guaranteed to be correctly rounded.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union
import numpy as np


# Absolute widening applied before the ulp step
ROUND_EPS = 1e-15

Number = Union[int, float]


def round_down(v: float, ulps: int = 1) -> float:
    """Largest safe lower endpoint for a round-to-nearest result v."""
    v = np.float64(v) - ROUND_EPS
    for _ in range(ulps):
        v = np.nextafter(v, -np.inf)
    return float(v)


def round_up(v: float, ulps: int = 1) -> float:
    """Smallest safe upper endpoint for a round-to-nearest result v."""
    v = np.float64(v) + ROUND_EPS
    for _ in range(ulps):
        v = np.nextafter(v, np.inf)
    return float(v)


@dataclass(frozen=True)
class Interval:
    """
    A closed interval [lo, hi] with arithmetic operations.

    Intervals are immutable values. All operations are computed with
    outward rounding to ensure the true result is always contained.
    """
    lo: float
    hi: float

    def __post_init__(self):
        if not self.lo <= self.hi:
            raise ValueError(f"Invalid interval: [{self.lo}, {self.hi}]")

    @classmethod
    def point(cls, x: float) -> 'Interval':
        """Create a point interval [x, x]."""
        return cls(x, x)

    def left(self) -> float:
        return self.lo

    def right(self) -> float:
        return self.hi

    def mid(self) -> float:
        return self.midpoint

    @property
    def width(self) -> float:
        return self.hi - self.lo

    @property
    def midpoint(self) -> float:
        return (self.lo + self.hi) / 2.0

    def contains(self, x: float) -> bool:
        return self.lo <= x <= self.hi

    def hull(self, other: 'Interval') -> 'Interval':
        """Convex hull of two intervals."""
        return Interval(min(self.lo, other.lo), max(self.hi, other.hi))

    # Arithmetic operations with outward rounding

    def __neg__(self) -> 'Interval':
        return Interval(-self.hi, -self.lo)

    def __add__(self, other: Union['Interval', Number]) -> 'Interval':
        if isinstance(other, (int, float)):
            other = Interval.point(float(other))
        return Interval(
            round_down(self.lo + other.lo),
            round_up(self.hi + other.hi)
        )

    def __radd__(self, other: Number) -> 'Interval':
        return self.__add__(Interval.point(float(other)))

    def __sub__(self, other: Union['Interval', Number]) -> 'Interval':
        if isinstance(other, (int, float)):
            other = Interval.point(float(other))
        return Interval(
            round_down(self.lo - other.hi),
            round_up(self.hi - other.lo)
        )

    def __rsub__(self, other: Number) -> 'Interval':
        return Interval.point(float(other)).__sub__(self)

    def __mul__(self, other: Union['Interval', Number]) -> 'Interval':
        if isinstance(other, (int, float)):
            other = Interval.point(float(other))

        products = [
            self.lo * other.lo,
            self.lo * other.hi,
            self.hi * other.lo,
            self.hi * other.hi
        ]
        return Interval(
            round_down(min(products)),
            round_up(max(products))
        )

    def __rmul__(self, other: Number) -> 'Interval':
        return self.__mul__(Interval.point(float(other)))

    def __truediv__(self, other: Union['Interval', Number]) -> 'Interval':
        """Division by a scalar or an interval not containing zero."""
        if isinstance(other, (int, float)):
            other = Interval.point(float(other))
        if other.lo <= 0.0 <= other.hi:
            raise ZeroDivisionError(f"Division by interval containing zero: {other!r}")

        quotients = [
            self.lo / other.lo,
            self.lo / other.hi,
            self.hi / other.lo,
            self.hi / other.hi
        ]
        return Interval(
            round_down(min(quotients)),
            round_up(max(quotients))
        )

    def __pow__(self, n: int) -> 'Interval':
        """Integer power x^n."""
        if not isinstance(n, int) or n < 0:
            raise ValueError(f"Only non-negative integer powers are supported, got {n!r}")
        if n == 0:
            return Interval.point(1.0)
        elif n == 1:
            return self
        elif n == 2:
            return self.square()
        # float ** int goes through libm pow: one extra ulp
        elif n % 2 == 0:
            if self.hi <= 0:
                return Interval(
                    round_down(self.hi ** n, 2),
                    round_up(self.lo ** n, 2)
                )
            elif self.lo >= 0:
                return Interval(
                    round_down(self.lo ** n, 2),
                    round_up(self.hi ** n, 2)
                )
            else:
                return Interval(
                    round_down(0.0),
                    round_up(max(self.lo ** n, self.hi ** n), 2)
                )
        else:
            # Odd powers are monotone
            return Interval(
                round_down(self.lo ** n, 2),
                round_up(self.hi ** n, 2)
            )

    def square(self) -> 'Interval':
        """Optimized x^2 computation."""
        if self.hi <= 0:
            return Interval(
                round_down(self.hi * self.hi),
                round_up(self.lo * self.lo)
            )
        elif self.lo >= 0:
            return Interval(
                round_down(self.lo * self.lo),
                round_up(self.hi * self.hi)
            )
        else:
            # Interval contains zero
            return Interval(
                round_down(0.0),
                round_up(max(self.lo * self.lo, self.hi * self.hi))
            )

    def abs(self) -> 'Interval':
        """Absolute value."""
        if self.lo >= 0:
            return self
        elif self.hi <= 0:
            return Interval(-self.hi, -self.lo)
        else:
            return Interval(0.0, max(-self.lo, self.hi))

    def sqrt(self) -> 'Interval':
        """Square root (defined for non-negative)."""
        if self.hi < 0:
            raise ValueError(f"sqrt undefined on {self!r}")

        # IEEE sqrt is correctly rounded
        lo = max(0.0, self.lo)
        return Interval(
            max(0.0, round_down(np.sqrt(lo))),
            round_up(np.sqrt(self.hi))
        )

    def exp(self) -> 'Interval':
        """Exponential function."""
        return Interval(
            max(0.0, round_down(np.exp(self.lo), 2)),
            round_up(np.exp(self.hi), 2)
        )

    def sin(self) -> 'Interval':
        """Sine function with proper range handling."""
        # For wide intervals, return [-1, 1]
        if self.width >= 2 * np.pi:
            return Interval(-1.0, 1.0)

        # Reduce to [0, 2*pi] to locate the extrema
        lo_red = self.lo % (2 * np.pi)
        hi_red = lo_red + self.width

        # Endpoint values from the unreduced arguments
        vals = [float(np.sin(self.lo)), float(np.sin(self.hi))]

        # Max at pi/2 + 2k*pi
        if lo_red <= np.pi/2 <= hi_red or lo_red <= np.pi/2 + 2*np.pi <= hi_red:
            vals.append(1.0)
        # Min at 3*pi/2 + 2k*pi
        if lo_red <= 3*np.pi/2 <= hi_red or lo_red <= 3*np.pi/2 + 2*np.pi <= hi_red:
            vals.append(-1.0)

        return Interval(
            max(-1.0, round_down(min(vals), 2)),
            min(1.0, round_up(max(vals), 2))
        )

    def cos(self) -> 'Interval':
        """Cosine function."""
        return (self + HALF_PI).sin()

    def to_canonical(self) -> Dict[str, Any]:
        return {"lo": self.lo, "hi": self.hi}

    def __repr__(self) -> str:
        return f"[{self.lo:.6g}, {self.hi:.6g}]"


# np.pi is pi rounded to nearest; one ulp either side encloses the real pi
PI = Interval(float(np.nextafter(np.pi, -np.inf)), float(np.nextafter(np.pi, np.inf)))
HALF_PI = PI * 0.5
