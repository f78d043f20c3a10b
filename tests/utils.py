# tests/utils.py
"""
Single source of truth for test data, factories, and canonical scenarios.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from src.schemas.models import CashFlow, SolverBounds

# -----------------------------
# Canonical scenarios (dates, amounts, expected percent)
# -----------------------------

EXCEL_DATES = [date(2008, 1, 1), date(2008, 3, 1), date(2008, 10, 30), date(2009, 2, 15), date(2009, 4, 1)]
EXCEL_AMOUNTS = [-10000.0, 2750.0, 4250.0, 3250.0, 2750.0]
EXCEL_PERCENT = 37.34
EXCEL_RATE = 0.373362535

LOSS_DATES = [date(2013, 12, 30), date(2014, 5, 2), date(2015, 4, 17), date(2015, 7, 30)]
LOSS_AMOUNTS = [-15_000_000.0, 142_371.0, 238_467.0, 955_477.0]
LOSS_PERCENT = -80.59

RECOVERY_DATES = [*LOSS_DATES, date(2015, 10, 31)]
RECOVERY_AMOUNTS = [*LOSS_AMOUNTS, 14_997_088.0]
RECOVERY_PERCENT = 4.85

SCENARIOS: list[tuple[str, list[date], list[float], float]] = [
    ("excel_doc_example", EXCEL_DATES, EXCEL_AMOUNTS, EXCEL_PERCENT),
    ("heavy_loss", LOSS_DATES, LOSS_AMOUNTS, LOSS_PERCENT),
    ("late_recovery", RECOVERY_DATES, RECOVERY_AMOUNTS, RECOVERY_PERCENT),
]

# Bounds wide enough that tests exercising the generic solver never hit them by accident
WIDE_BOUNDS = SolverBounds(xmin=-10.0, xmax=10.0, precision=1e-10)


# -----------------------------
# Factories
# -----------------------------


def make_series(dates: list[date], amounts: list[float]) -> list[CashFlow]:
    return [CashFlow(date=d, amount=a) for d, a in zip(dates, amounts, strict=True)]


def make_one_year_flat(amount: float = 1000.0, start: date = date(2020, 1, 1)) -> list[CashFlow]:
    """Out `amount` at start, back exactly `amount` 365 days later: 0%."""
    return [CashFlow(date=start, amount=-amount), CashFlow(date=start + timedelta(days=365), amount=amount)]


def make_flows_payload(dates: list[date], amounts: list[float]) -> list[dict[str, Any]]:
    """JSON-ready [{date, amount}, ...] payload."""
    return [{"date": d.isoformat(), "amount": a} for d, a in zip(dates, amounts, strict=True)]


class CountingObjective:
    """Wraps f(x) and counts evaluations."""

    def __init__(self, fn):
        self.fn = fn
        self.calls = 0

    def __call__(self, x: float) -> float:
        self.calls += 1
        return self.fn(x)
