# src/core/finance/npv.py

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Sequence

from src.schemas.models import CashFlow

from .errors import DomainError, NegativeDayOffsetError

DAYS_PER_YEAR = 365.0


def days_between(start: dt.date, end: dt.date) -> int:
    """Signed whole days from `start` to `end`."""
    return (end - start).days


def day_offsets(series: Sequence[CashFlow]) -> list[int]:
    """
    Day offsets of every flow relative to the FIRST flow in the series.

    The reference is index 0, not the earliest date. Unsorted input therefore
    yields negative offsets, which the objective rejects.
    """
    if not series:
        return []
    d0 = series[0].date
    return [days_between(d0, cf.date) for cf in series]


def _discount(amount: float, factor: float, years: float) -> float:
    try:
        return amount / math.pow(factor, years)
    except (ValueError, OverflowError, ZeroDivisionError) as e:
        raise DomainError(f"cannot discount at factor={factor!r} over {years:.4f} years: {e}") from e


class NpvObjective:
    """
    NPV of a cash-flow series as a function of the discount factor (1 + rate).

    A factor of exactly 1.0 is a 0% annual rate. Instances are pure: calling
    one never touches the series or any solver state.
    """

    def __init__(self, series: Sequence[CashFlow]):
        self._amounts = [float(cf.amount) for cf in series]
        self._days = day_offsets(series)

    def __call__(self, factor: float) -> float:
        total = 0.0
        for i, (amount, days) in enumerate(zip(self._amounts, self._days, strict=True)):
            if days < 0:
                raise NegativeDayOffsetError(f"cash flow #{i} is dated {-days} day(s) before the first cash flow")
            total += _discount(amount, factor, days / DAYS_PER_YEAR)
        return total

    def __len__(self) -> int:
        return len(self._amounts)


def xnpv(rate: float, series: Sequence[CashFlow]) -> float:
    """XNPV at an annual rate given as a fraction (0.09 = 9%)."""
    return NpvObjective(series)(1.0 + rate)


def xnpv_derivative(factor: float, series: Sequence[CashFlow]) -> float:
    """Analytic d(NPV)/d(factor): sum of -t * amount / factor ** (t + 1)."""
    total = 0.0
    for i, (cf, days) in enumerate(zip(series, day_offsets(series), strict=True)):
        if days < 0:
            raise NegativeDayOffsetError(f"cash flow #{i} is dated {-days} day(s) before the first cash flow")
        if days == 0:
            continue
        t = days / DAYS_PER_YEAR
        total += -t * _discount(float(cf.amount), factor, t + 1.0)
    return total
