"""
Objective Function Registry

Classic bivariate test problems written as natural interval extensions.
Each evaluator maps a box (two intervals) to an interval enclosing the
true range of the function over that box, which is what pruning relies on.

Registry entries pair the evaluator with the initial search domain.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from .bounds.interval import PI, Interval
from .box import Box
from .errors import UnknownObjectiveError


@dataclass(frozen=True)
class Objective:
    """An interval objective together with its initial domain."""
    name: str
    evaluator: Callable[[Interval, Interval], Interval]
    domain: Box
    description: str = ""

    def __call__(self, x: Interval, y: Interval) -> Interval:
        return self.evaluator(x, y)


def sphere(x: Interval, y: Interval) -> Interval:
    """f(x, y) = x^2 + y^2, minimum 0 at the origin."""
    return x.square() + y.square()


def double_well(x: Interval, y: Interval) -> Interval:
    """f(x, y) = (x^2 - 1)^2, minima 0 along x = -1 and x = 1."""
    return (x.square() - 1).square()


def booth(x: Interval, y: Interval) -> Interval:
    return (x + 2 * y - 7).square() + (2 * x + y - 5).square()


def beale(x: Interval, y: Interval) -> Interval:
    return (
        (1.5 - x + x * y).square()
        + (2.25 - x + x * y.square()).square()
        + (2.625 - x + x * y ** 3).square()
    )


def matyas(x: Interval, y: Interval) -> Interval:
    return 13 * (x.square() + y.square()) / 50 - 12 * (x * y) / 25


def three_hump_camel(x: Interval, y: Interval) -> Interval:
    return (
        2 * x.square()
        - 21 * x ** 4 / 20
        + x ** 6 / 6
        + x * y
        + y.square()
    )


def six_hump_camel(x: Interval, y: Interval) -> Interval:
    x2 = x.square()
    y2 = y.square()
    return (
        (4 - 21 * x2 / 10 + x ** 4 / 3) * x2
        + x * y
        + (-4 + 4 * y2) * y2
    )


def goldstein_price(x: Interval, y: Interval) -> Interval:
    a = 1 + (x + y + 1).square() * (
        19 - 14 * x + 3 * x.square() - 14 * y + 6 * (x * y) + 3 * y.square()
    )
    b = 30 + (2 * x - 3 * y).square() * (
        18 - 32 * x + 12 * x.square() + 48 * y - 36 * (x * y) + 27 * y.square()
    )
    return a * b


def rosenbrock(x: Interval, y: Interval) -> Interval:
    return 100 * (y - x.square()).square() + (1 - x).square()


def himmelblau(x: Interval, y: Interval) -> Interval:
    return (x.square() + y - 11).square() + (x + y.square() - 7).square()


def levi(x: Interval, y: Interval) -> Interval:
    return (
        (3 * PI * x).sin().square()
        + (x - 1).square() * (1 + (3 * PI * y).sin().square())
        + (y - 1).square() * (1 + (2 * PI * y).sin().square())
    )


def _register(name, evaluator, bounds, description) -> Objective:
    return Objective(
        name=name,
        evaluator=evaluator,
        domain=Box.from_bounds(bounds),
        description=description,
    )


OBJECTIVES: Dict[str, Objective] = {
    obj.name: obj for obj in [
        _register("sphere", sphere, [(-2.0, 2.0), (-2.0, 2.0)],
                  "x^2 + y^2, f* = 0 at (0, 0)"),
        _register("double_well", double_well, [(-2.0, 2.0), (-1.0, 1.0)],
                  "(x^2 - 1)^2, f* = 0 at x = +-1"),
        _register("booth", booth, [(-10.0, 10.0), (-10.0, 10.0)],
                  "f* = 0 at (1, 3)"),
        _register("beale", beale, [(-4.5, 4.5), (-4.5, 4.5)],
                  "f* = 0 at (3, 0.5)"),
        _register("matyas", matyas, [(-10.0, 10.0), (-10.0, 10.0)],
                  "f* = 0 at (0, 0)"),
        _register("three_hump_camel", three_hump_camel, [(-5.0, 5.0), (-5.0, 5.0)],
                  "f* = 0 at (0, 0)"),
        _register("six_hump_camel", six_hump_camel, [(-3.0, 3.0), (-2.0, 2.0)],
                  "f* = -1.0316 at (0.0898, -0.7126) and (-0.0898, 0.7126)"),
        _register("goldstein_price", goldstein_price, [(-2.0, 2.0), (-2.0, 2.0)],
                  "f* = 3 at (0, -1)"),
        _register("rosenbrock", rosenbrock, [(-5.0, 5.0), (-5.0, 5.0)],
                  "f* = 0 at (1, 1)"),
        _register("himmelblau", himmelblau, [(-5.0, 5.0), (-5.0, 5.0)],
                  "f* = 0 at four points"),
        _register("levi", levi, [(-10.0, 10.0), (-10.0, 10.0)],
                  "f* = 0 at (1, 1)"),
    ]
}


def available_objectives() -> List[str]:
    return sorted(OBJECTIVES)


def get_objective(name: str) -> Objective:
    """Look up an objective by name, raising UnknownObjectiveError if absent."""
    try:
        return OBJECTIVES[name]
    except KeyError:
        raise UnknownObjectiveError(name, available_objectives()) from None
