# src/core/finance/calculator.py
"""
XIRR: annualized return of irregularly dated cash flows.

Solves NPV(factor) == 0 for the discount factor (1 + rate) with the Newton
goal seek, then reports (factor - 1) * 100 rounded half-up to 2 decimals.
When Newton fails (typically a first step that lands below -100% for deep
losses) the samples it gathered seed a net-and-bisect fallback.
Any invalid input or solver failure is reported as "no result" (None);
`XirrCalculator.evaluate()` keeps the reason for diagnostics.

Day offsets are measured from the FIRST flow in the list, not the earliest.
Callers should pass flows in chronological order; a flow dated before the
first one yields no result.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import ValidationError

from src.core.logs import get_logger
from src.schemas.models import CashFlow, SolverSettings, XirrResult

from .bisection import net_and_bisect
from .errors import InvalidCashFlowsError
from .goal_seek import Converged, Failed, goal_seek
from .npv import NpvObjective

logger = get_logger(__name__)

DateLike = dt.date | dt.datetime | str
CashFlowLike = CashFlow | tuple[DateLike, float]


def round_half_up(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def validate_series(series: Sequence[CashFlow]) -> None:
    """Raise InvalidCashFlowsError unless the series has an inflow and an outflow."""
    if not series:
        raise InvalidCashFlowsError("no cash flows")
    if not any(cf.amount > 0 for cf in series):
        raise InvalidCashFlowsError("no positive cash flow")
    if not any(cf.amount < 0 for cf in series):
        raise InvalidCashFlowsError("no negative cash flow")


def _to_cash_flow(item: CashFlowLike | Any) -> CashFlow:
    if isinstance(item, CashFlow):
        return item
    if isinstance(item, dict):
        return CashFlow.model_validate(item)
    when, amount = item
    return CashFlow(date=when, amount=amount)


def to_series(items: Iterable[CashFlowLike]) -> list[CashFlow]:
    """Normalize (date, amount) pairs, dicts or CashFlow objects; order is preserved."""
    try:
        return [_to_cash_flow(it) for it in items]
    except ValidationError as e:
        raise ValueError(f"Invalid cash flow:\n{e}") from e


class XirrCalculator:
    """
    Stateful front end: accumulate flows one by one, or pass parallel lists.

    Every calculation builds a fresh objective and solver state, so repeated
    calls with the same flows give the same answer.
    """

    def __init__(self, settings: SolverSettings | None = None):
        self.settings = settings or SolverSettings()
        self._flows: list[CashFlow] = []

    @property
    def cash_flows(self) -> tuple[CashFlow, ...]:
        return tuple(self._flows)

    def add_cash_flow(self, when: DateLike | None, amount: float | None) -> None:
        """Append one flow. Silently ignored if either argument is missing."""
        if when is None or amount is None:
            return
        self._flows.append(CashFlow(date=when, amount=amount))

    def clear(self) -> None:
        self._flows = []

    def calculate(self, dates: Sequence[DateLike], amounts: Sequence[float]) -> float | None:
        """
        Replace the accumulated flows with `dates`/`amounts` and compute XIRR.

        Returns:
            Percentage rounded to 2 decimals (37.34 for 37.34%), or None.
        """
        self.clear()
        if len(dates) != len(amounts):
            logger.info("xirr: %d dates but %d amounts; no result", len(dates), len(amounts))
            return None
        for when, amount in zip(dates, amounts, strict=True):
            self.add_cash_flow(when, amount)
        return self.result()

    def result(self) -> float | None:
        """XIRR percentage of the accumulated flows, or None."""
        return self.evaluate().percent

    def evaluate(self) -> XirrResult:
        series = list(self._flows)
        try:
            validate_series(series)
        except InvalidCashFlowsError as e:
            logger.info("xirr: invalid cash flows: %s", e)
            return XirrResult(failure=f"{e.reason.value}: {e}")

        objective = NpvObjective(series)
        bounds = self.settings.bounds()
        outcome = goal_seek(objective, self.settings.guess, bounds=bounds, max_iter=self.settings.max_iter)
        newton_iterations = outcome.iterations
        fallback_iterations = 0

        if isinstance(outcome, Failed) and self.settings.bisection_fallback:
            logger.debug("xirr: newton failed (%s), trying bisection", outcome.reason.value)
            fallback = net_and_bisect(objective, outcome.bracket, bounds, self.settings.guess)
            bracketed = fallback.bracket.has_positive and fallback.bracket.has_negative
            if isinstance(fallback, Converged) or bracketed:
                outcome = fallback
                fallback_iterations = fallback.iterations

        if isinstance(outcome, Failed):
            logger.info("xirr: solver failed (%s): %s", outcome.reason.value, outcome.detail)
            return XirrResult(
                failure=f"{outcome.reason.value}: {outcome.detail}",
                iterations=newton_iterations,
                fallback_iterations=fallback_iterations,
            )

        factor = outcome.root
        rate = factor - 1.0
        logger.debug("xirr: factor=%r after %d+%d iteration(s)", factor, newton_iterations, fallback_iterations)
        return XirrResult(
            percent=round_half_up(rate * 100.0, 2),
            rate=rate,
            factor=factor,
            iterations=newton_iterations,
            fallback_iterations=fallback_iterations,
        )


def xirr_percent(
    dates: Sequence[DateLike],
    amounts: Sequence[float],
    *,
    settings: SolverSettings | None = None,
) -> float | None:
    """One-shot XIRR percentage for parallel date/amount lists."""
    return XirrCalculator(settings).calculate(dates, amounts)


def xirr(cash_flows: Iterable[CashFlowLike], *, guess: float = 0.1) -> float | None:
    """
    XIRR as a decimal annual rate (0.3734 for 37.34%), unrounded.

    Accepts (date, amount) pairs, {"date", "amount"} dicts or CashFlow objects.
    `guess` is an annual rate, like Excel's XIRR.
    """
    calc = XirrCalculator(SolverSettings(guess=1.0 + guess))
    for cf in to_series(cash_flows):
        calc.add_cash_flow(cf.date, cf.amount)
    return calc.evaluate().rate


__all__ = [
    "XirrCalculator",
    "round_half_up",
    "validate_series",
    "to_series",
    "xirr",
    "xirr_percent",
]
