# src/core/finance/goal_seek.py
"""
Newton-Raphson goal seek over a scalar function.

Finds x with f(x) == 0 inside [xmin, xmax], starting from a guess. The
derivative is either supplied by the caller or estimated by a symmetric
finite difference. Convergence uses a relative step test, so the same
tolerance works whatever the magnitude of the root.

Returns a tagged outcome (`Converged` | `Failed`) instead of raising; the
typed errors in `errors.py` are only used internally and to label failures.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from src.core.logs import get_logger
from src.schemas.models import SolverBounds

from .bracket import Bracket
from .derivative import estimate_derivative
from .errors import (
    SOLVER_ERRORS,
    FailureReason,
    FlatDerivativeError,
    NonConvergenceError,
    OutOfBoundsError,
    failure_reason,
)

logger = get_logger(__name__)

DEFAULT_GUESS = 1.1  # 1 + 10%
MAX_ITERATIONS = 100
OVERSHOOT = 1.000001  # Newton step is stretched by this factor


class Objective(Protocol):
    def __call__(self, x: float, /) -> float: ...


@dataclass(frozen=True)
class Converged:
    root: float
    iterations: int
    bracket: Bracket = field(default_factory=Bracket, compare=False, repr=False)

    ok = True


@dataclass(frozen=True)
class Failed:
    reason: FailureReason
    detail: str
    iterations: int
    bracket: Bracket = field(default_factory=Bracket, compare=False, repr=False)

    ok = False


SolveOutcome = Converged | Failed


def _newton_step(x: float, y: float, df: float) -> float:
    if df == 0.0:
        raise FlatDerivativeError(f"derivative is zero at x={x!r}")
    return x - OVERSHOOT * y / df


def _relative_step(x: float, x1: float) -> float:
    denom = abs(x) + abs(x1)
    if denom == 0.0:
        return 0.0
    return abs(x1 - x) / denom


def goal_seek(
    objective: Objective,
    x0: float = DEFAULT_GUESS,
    *,
    bounds: SolverBounds | None = None,
    derivative: Callable[[float], float] | None = None,
    max_iter: int = MAX_ITERATIONS,
) -> SolveOutcome:
    """
    Drive Newton iterations until convergence or a terminal failure.

    Args:
        objective:  f(x); may raise DomainError for points it cannot evaluate.
        x0:         initial guess.
        bounds:     search interval and relative tolerance (defaults: SolverBounds()).
        derivative: analytic f'(x); finite differences are used when None.
        max_iter:   iteration budget.

    Returns:
        Converged(root, iterations) or Failed(reason, detail, iterations).
    """
    bounds = bounds or SolverBounds()
    bracket = Bracket()
    x = float(x0)
    iteration = 0

    try:
        while iteration < max_iter:
            iteration += 1

            if not bounds.contains(x):
                raise OutOfBoundsError(f"iterate x={x!r} left [{bounds.xmin}, {bounds.xmax}]")

            y = objective(x)
            if bracket.update(x, y):
                logger.debug("goal_seek: exact root x=%r after %d iteration(s)", x, iteration)
                return Converged(root=x, iterations=iteration, bracket=bracket)

            if derivative is not None:
                df = derivative(x)
            else:
                df = estimate_derivative(objective, x, bracket, bounds)

            x1 = _newton_step(x, y, df)
            stepsize = _relative_step(x, x1)
            logger.debug("goal_seek[%d]: x=%r f=%r df=%r step=%.3e", iteration, x, y, df, stepsize)

            x = x1
            if stepsize < bounds.precision / 2.0:
                bracket.root = x
                return Converged(root=x, iterations=iteration, bracket=bracket)

        raise NonConvergenceError(f"no convergence within {max_iter} iterations (last x={x!r})")
    except SOLVER_ERRORS as exc:
        reason = failure_reason(exc)
        logger.debug("goal_seek failed after %d iteration(s): %s: %s", iteration, reason.value, exc)
        return Failed(reason=reason, detail=str(exc), iterations=iteration, bracket=bracket)


__all__ = [
    "DEFAULT_GUESS",
    "MAX_ITERATIONS",
    "Objective",
    "Converged",
    "Failed",
    "SolveOutcome",
    "goal_seek",
]
