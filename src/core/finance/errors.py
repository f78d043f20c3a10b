# src/core/finance/errors.py
"""
Typed errors for the XIRR goal seek.

Exports
-------
- XirrError, InvalidCashFlowsError, DomainError, NegativeDayOffsetError,
  OutOfBoundsError, FlatDerivativeError, BoundaryDerivativeError,
  NonConvergenceError
- FailureReason
- SOLVER_ERRORS
- failure_reason(exc)

XirrCalculator turns every one of these into a
"no result" and keeps the reason on XirrResult.failure.
"""

from __future__ import annotations

from enum import Enum

# =========================
# Failure reasons
# =========================


class FailureReason(str, Enum):
    INVALID_INPUT = "invalid_input"
    DOMAIN_ERROR = "domain_error"
    OUT_OF_BOUNDS = "out_of_bounds"
    FLAT_DERIVATIVE = "flat_derivative"
    BOUNDARY_DERIVATIVE = "boundary_derivative"
    NON_CONVERGENCE = "non_convergence"


# =========================
# Exception types
# =========================


class XirrError(ArithmeticError):
    """Base class for XIRR / goal seek failures."""

    reason: FailureReason = FailureReason.NON_CONVERGENCE


class InvalidCashFlowsError(XirrError, ValueError):
    """Series is empty, lists are misaligned, or amounts never change sign."""

    reason = FailureReason.INVALID_INPUT


class DomainError(XirrError):
    """The objective cannot be evaluated at the requested point."""

    reason = FailureReason.DOMAIN_ERROR


class NegativeDayOffsetError(DomainError):
    """A cash flow is dated before the reference (first) cash flow."""


class OutOfBoundsError(XirrError):
    """An iterate left [xmin, xmax]."""

    reason = FailureReason.OUT_OF_BOUNDS


class FlatDerivativeError(XirrError, ZeroDivisionError):
    """Derivative is exactly zero; the Newton step is undefined."""

    reason = FailureReason.FLAT_DERIVATIVE


class BoundaryDerivativeError(XirrError):
    """Both finite-difference probes collapsed onto x at a bound."""

    reason = FailureReason.BOUNDARY_DERIVATIVE


class NonConvergenceError(XirrError):
    """Iteration budget exhausted before the relative step tolerance was met."""

    reason = FailureReason.NON_CONVERGENCE


# Selector tuple for grouped exception handling inside the solver
SOLVER_ERRORS = (
    DomainError,
    OutOfBoundsError,
    FlatDerivativeError,
    BoundaryDerivativeError,
    NonConvergenceError,
)


def failure_reason(exc: BaseException) -> FailureReason:
    """Map an exception raised during a solve to its FailureReason."""
    if isinstance(exc, XirrError):
        return exc.reason
    if isinstance(exc, ZeroDivisionError):
        return FailureReason.FLAT_DERIVATIVE
    if isinstance(exc, ValueError | OverflowError):
        return FailureReason.DOMAIN_ERROR
    return FailureReason.NON_CONVERGENCE


__all__ = [
    "FailureReason",
    "XirrError",
    "InvalidCashFlowsError",
    "DomainError",
    "NegativeDayOffsetError",
    "OutOfBoundsError",
    "FlatDerivativeError",
    "BoundaryDerivativeError",
    "NonConvergenceError",
    "SOLVER_ERRORS",
    "failure_reason",
]
