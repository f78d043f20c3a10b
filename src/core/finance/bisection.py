# src/core/finance/bisection.py
"""
Fallback used when Newton fails: widen a net of probes around the guess
until the bracket holds both signs, then bisect it.
"""

from __future__ import annotations

from collections.abc import Callable

from src.core.logs import get_logger
from src.schemas.models import SolverBounds

from .bracket import Bracket
from .errors import DomainError, FailureReason
from .goal_seek import Converged, Failed, SolveOutcome

logger = get_logger(__name__)

NET_MAX_FACTOR = 100
BISECTION_MAX_ITERATIONS = 160  # 100 + 4 per decimal digit of a double


def probe(objective: Callable[[float], float], bracket: Bracket, bounds: SolverBounds, x: float) -> bool:
    """
    Sample one point into the bracket. Points outside the bounds or where the
    objective is undefined are skipped. Returns True on an exact root.
    """
    if not bounds.contains(x):
        return False
    try:
        y = objective(x)
    except DomainError:
        return False
    return bracket.update(x, y)


def lay_net(objective: Callable[[float], float], bracket: Bracket, bounds: SolverBounds, center: float) -> bool:
    """Probe center * 2**k and center / 2**k until both signs are known. True on an exact root."""
    factor = 2
    while not (bracket.has_positive and bracket.has_negative) and factor < NET_MAX_FACTOR:
        if probe(objective, bracket, bounds, center * factor):
            return True
        if probe(objective, bracket, bounds, center / factor):
            return True
        factor *= 2
    return False


def bisect(
    objective: Callable[[float], float],
    bracket: Bracket,
    bounds: SolverBounds,
    *,
    max_iter: int = BISECTION_MAX_ITERATIONS,
) -> SolveOutcome:
    """
    Bisect between the bracket's positive and negative samples until the
    relative width drops below `bounds.precision`.
    """
    if bracket.positive is None or bracket.negative is None:
        return Failed(FailureReason.NON_CONVERGENCE, "no sign change found to bisect", 0, bracket)

    x_pos, _ = bracket.positive
    x_neg, _ = bracket.negative
    for iteration in range(1, max_iter + 1):
        xmid = (x_pos + x_neg) / 2.0
        try:
            ymid = objective(xmid)
        except DomainError as e:
            return Failed(FailureReason.DOMAIN_ERROR, str(e), iteration, bracket)

        if ymid == 0.0:
            bracket.update(xmid, ymid)
            return Converged(xmid, iteration, bracket)
        if ymid > 0.0:
            x_pos = xmid
        else:
            x_neg = xmid

        width = abs(x_pos - x_neg) / (abs(x_pos) + abs(x_neg))
        if width < bounds.precision:
            bracket.root = xmid
            logger.debug("bisect: root=%r after %d iteration(s)", xmid, iteration)
            return Converged(xmid, iteration, bracket)

    return Failed(FailureReason.NON_CONVERGENCE, f"bisection did not converge within {max_iter} iterations", max_iter, bracket)


def net_and_bisect(
    objective: Callable[[float], float],
    bracket: Bracket,
    bounds: SolverBounds,
    center: float,
) -> SolveOutcome:
    """Lay a net around `center` then bisect; reuses samples already in `bracket`."""
    if lay_net(objective, bracket, bounds, center):
        return Converged(bracket.root, 0, bracket)
    return bisect(objective, bracket, bounds)


__all__ = ["probe", "lay_net", "bisect", "net_and_bisect", "BISECTION_MAX_ITERATIONS"]
