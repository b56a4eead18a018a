"""
Root finding for "what input produces this output" questions.

Both calculators need to invert a forward function: payroll (gross -> net
salary) and freelance (gross income -> net income). `func` is assumed to be
non-decreasing in its argument.

Two methods:
  fixed_point  x += residual * step_factor, the factor standing in for
               1 / slope of func. Cheap and converges in a handful of steps
               when the factor is close to that inverse.
  bisection    bracket between a lower bound and an expanding upper bound,
               then halve.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

METHODS = ("fixed_point", "bisection")


@dataclass(frozen=True)
class SolverSettings:
    tolerance: float
    max_iterations: int = 50
    method: str = "fixed_point"


@dataclass(frozen=True)
class StepPolicy:
    default: float
    tiers: Tuple[Tuple[float, float], ...] = ()   # (abs residual below, factor)

    def factor(self, residual: float) -> float:
        for threshold, factor in sorted(self.tiers):
            if abs(residual) < threshold:
                return factor
        return self.default


@dataclass
class Solution:
    value: float
    converged: bool
    iterations: int
    residual: float


def find_input_for_target(func: Callable[[float], float], target: float, seed: float,
                          settings: SolverSettings, step: StepPolicy = StepPolicy(1.0),
                          floor: Optional[float] = None,
                          floor_reset: Optional[float] = None) -> Solution:
    """
    Find x with |target - func(x)| < settings.tolerance.

    floor/floor_reset: with fixed_point, an update landing below `floor` is
    replaced by `floor_reset` (default: floor) and iteration stops.
    With bisection, `floor` is the lower end of the search bracket.
    """
    if settings.method == "fixed_point":
        sol = _fixed_point(func, target, seed, settings, step, floor, floor_reset)
    elif settings.method == "bisection":
        sol = _bisection(func, target, seed, settings, floor)
    else:
        raise ValueError(f"Unknown solver method {settings.method!r}; expected one of {METHODS}")

    if not sol.converged:
        logger.warning("%s did not converge after %d iterations (target=%.2f, value=%.2f, residual=%.4f)",
                       settings.method, sol.iterations, target, sol.value, sol.residual)
    return sol


def _fixed_point(func, target, seed, settings, step, floor, floor_reset) -> Solution:
    x = seed
    iterations = 0
    while iterations < settings.max_iterations:
        residual = target - func(x)
        if abs(residual) < settings.tolerance:
            return Solution(x, True, iterations, residual)
        x += residual * step.factor(residual)
        logger.debug("fixed_point #%d: residual=%.4f -> x=%.4f", iterations, residual, x)
        if floor is not None and x < floor:
            x = floor if floor_reset is None else floor_reset
            break
        iterations += 1

    residual = target - func(x)
    return Solution(x, abs(residual) < settings.tolerance, iterations, residual)


def _bisection(func, target, seed, settings, floor) -> Solution:
    lo = 0.0 if floor is None else floor
    residual = target - func(lo)
    if residual <= 0:
        # root at or below the lower bound
        return Solution(lo, abs(residual) < settings.tolerance, 0, residual)

    hi = max(seed, lo + 1.0)
    expansions = 0
    while target - func(hi) > 0 and expansions < settings.max_iterations:
        hi = lo + (hi - lo) * 2.0
        expansions += 1

    x = hi
    residual = target - func(hi)
    iterations = 0
    while abs(residual) >= settings.tolerance and iterations < settings.max_iterations:
        x = (lo + hi) / 2.0
        residual = target - func(x)
        if residual > 0:
            lo = x
        else:
            hi = x
        iterations += 1
        logger.debug("bisection #%d: [%.4f, %.4f] residual=%.4f", iterations, lo, hi, residual)

    return Solution(x, abs(residual) < settings.tolerance, iterations, residual)
