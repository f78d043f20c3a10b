# src/core/finance/__init__.py

from .bisection import bisect, lay_net, net_and_bisect, probe
from .bracket import Bracket
from .calculator import XirrCalculator, round_half_up, to_series, validate_series, xirr, xirr_percent
from .derivative import estimate_derivative
from .errors import (
    SOLVER_ERRORS,
    BoundaryDerivativeError,
    DomainError,
    FailureReason,
    FlatDerivativeError,
    InvalidCashFlowsError,
    NegativeDayOffsetError,
    NonConvergenceError,
    OutOfBoundsError,
    XirrError,
    failure_reason,
)
from .goal_seek import DEFAULT_GUESS, MAX_ITERATIONS, Converged, Failed, SolveOutcome, goal_seek
from .npv import NpvObjective, day_offsets, days_between, xnpv, xnpv_derivative

__all__ = [
    "Bracket",
    "probe",
    "lay_net",
    "bisect",
    "net_and_bisect",
    "estimate_derivative",
    "goal_seek",
    "Converged",
    "Failed",
    "SolveOutcome",
    "DEFAULT_GUESS",
    "MAX_ITERATIONS",
    "NpvObjective",
    "days_between",
    "day_offsets",
    "xnpv",
    "xnpv_derivative",
    "XirrCalculator",
    "round_half_up",
    "to_series",
    "validate_series",
    "xirr",
    "xirr_percent",
    "XirrError",
    "InvalidCashFlowsError",
    "DomainError",
    "NegativeDayOffsetError",
    "OutOfBoundsError",
    "FlatDerivativeError",
    "BoundaryDerivativeError",
    "NonConvergenceError",
    "FailureReason",
    "SOLVER_ERRORS",
    "failure_reason",
]
