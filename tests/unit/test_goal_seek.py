# tests/unit/test_goal_seek.py
from __future__ import annotations

import logging
import math

import pytest

from src.core.finance.errors import DomainError, FailureReason
from src.core.finance.goal_seek import MAX_ITERATIONS, Converged, Failed, goal_seek
from src.core.finance.npv import NpvObjective, xnpv_derivative
from src.schemas.models import SolverBounds
from tests.utils import WIDE_BOUNDS, CountingObjective


def _signed_sqrt(x: float) -> float:
    return math.copysign(math.sqrt(abs(x)), x)


def _signed_sqrt_prime(x: float) -> float:
    return 1.0 / (2.0 * math.sqrt(abs(x)))


@pytest.mark.parametrize("analytic", [True, False])
def test_square_root_of_two(analytic):
    derivative = (lambda x: 2.0 * x) if analytic else None
    out = goal_seek(lambda x: x * x - 2.0, 1.1, bounds=WIDE_BOUNDS, derivative=derivative)
    assert isinstance(out, Converged) and out.ok
    assert out.root == pytest.approx(math.sqrt(2.0), rel=1e-9)
    assert 1 <= out.iterations < 20
    assert out.bracket.has_root


def test_exact_root_on_first_evaluation():
    out = goal_seek(lambda x: x - 1.1, 1.1, bounds=WIDE_BOUNDS)
    assert out == Converged(root=1.1, iterations=1)


def test_start_outside_bounds_fails_immediately():
    f = CountingObjective(lambda x: x - 1.0)
    out = goal_seek(f, 2000.0, bounds=SolverBounds.for_discount_factor())
    assert isinstance(out, Failed)
    assert out.reason is FailureReason.OUT_OF_BOUNDS
    assert f.calls == 0


def test_iterate_leaving_bounds_fails():
    # Newton on x**3 - 1000 from 1.1 jumps far above 10
    out = goal_seek(lambda x: x**3 - 1000.0, 1.1, bounds=WIDE_BOUNDS, derivative=lambda x: 3 * x * x)
    assert isinstance(out, Failed)
    assert out.reason is FailureReason.OUT_OF_BOUNDS


@pytest.mark.parametrize("derivative", [lambda x: 0.0, None])
def test_flat_function_fails(derivative):
    out = goal_seek(lambda x: 5.0, 1.1, bounds=WIDE_BOUNDS, derivative=derivative)
    assert isinstance(out, Failed)
    assert out.reason is FailureReason.FLAT_DERIVATIVE
    assert out.iterations == 1


def test_domain_error_from_objective_becomes_failure():
    def f(x: float) -> float:
        raise DomainError("undefined here")

    out = goal_seek(f, 1.1, bounds=WIDE_BOUNDS)
    assert isinstance(out, Failed)
    assert out.reason is FailureReason.DOMAIN_ERROR
    assert "undefined here" in out.detail


def test_oscillating_objective_stops_at_iteration_cap():
    # Newton maps x → -1.000002 x on a signed square root: never a root, never a small step
    f = CountingObjective(_signed_sqrt)
    out = goal_seek(f, 1.1, bounds=WIDE_BOUNDS, derivative=_signed_sqrt_prime)
    assert isinstance(out, Failed)
    assert out.reason is FailureReason.NON_CONVERGENCE
    assert out.iterations == MAX_ITERATIONS
    assert f.calls == MAX_ITERATIONS


def test_custom_iteration_budget():
    out = goal_seek(_signed_sqrt, 1.1, bounds=WIDE_BOUNDS, derivative=_signed_sqrt_prime, max_iter=5)
    assert isinstance(out, Failed) and out.iterations == 5


def test_analytic_npv_derivative_matches_numeric_solution(excel_series):
    f = NpvObjective(excel_series)
    bounds = SolverBounds.for_discount_factor()
    numeric = goal_seek(f, 1.1, bounds=bounds)
    analytic = goal_seek(f, 1.1, bounds=bounds, derivative=lambda x: xnpv_derivative(x, excel_series))
    assert isinstance(numeric, Converged) and isinstance(analytic, Converged)
    assert numeric.root == pytest.approx(analytic.root, rel=1e-9)


def test_iterations_are_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="src.core.finance.goal_seek"):
        goal_seek(lambda x: x * x - 2.0, 1.1, bounds=WIDE_BOUNDS)
    assert any("goal_seek[1]" in r.getMessage() for r in caplog.records)
