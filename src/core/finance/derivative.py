# src/core/finance/derivative.py

from __future__ import annotations

from collections.abc import Callable

from src.schemas.models import SolverBounds

from .bracket import Bracket
from .errors import BoundaryDerivativeError

STEP_DIVISOR = 1e6


def _step_size(x: float, bracket: Bracket, bounds: SolverBounds) -> float:
    if abs(x) >= bounds.precision:
        return abs(x) / STEP_DIVISOR
    # Near zero a relative step vanishes; borrow a scale from the bracket or the bounds
    width = bracket.width
    if width is not None:
        return width / STEP_DIVISOR
    return bounds.width / STEP_DIVISOR


def estimate_derivative(
    objective: Callable[[float], float],
    x: float,
    bracket: Bracket,
    bounds: SolverBounds,
) -> float:
    """
    Symmetric difference quotient of `objective` around `x`.

    Probes that would leave [xmin, xmax] are pulled back onto x, so the
    quotient degrades to a one-sided difference at a bound. Errors raised by
    the objective propagate unchanged.

    Raises:
        BoundaryDerivativeError: both probes collapsed onto x.
    """
    step = _step_size(x, bracket, bounds)

    xl = x - step
    if xl < bounds.xmin:
        xl = x
    xr = x + step
    if xr > bounds.xmax:
        xr = x

    if xl == xr:
        raise BoundaryDerivativeError(f"cannot estimate derivative at x={x!r} (step={step!r})")

    yl = objective(xl)
    yr = objective(xr)
    return (yr - yl) / (xr - xl)
