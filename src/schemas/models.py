# src/schemas/models.py

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Solver defaults for the generic goal seek
DEFAULT_XMIN = -1e10
DEFAULT_XMAX = 1e10
DEFAULT_PRECISION = 1e-10

# A discount factor (1 + rate) can never go below -100% and is capped at 1000x
DISCOUNT_FACTOR_FLOOR = -1.0
DISCOUNT_FACTOR_CAP = 1000.0

# =========================
# Cash flows
# =========================


class CashFlow(BaseModel):
    """
    One dated cash flow. Negative amounts are outflows (investments),
    positive amounts are inflows (distributions).
    """

    date: dt.date = Field(..., description="Calendar date of the flow. Datetimes are truncated to their date.")
    amount: float = Field(..., description="Signed amount in currency units (negative = outflow).")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_datetime(cls, v: Any) -> Any:
        if isinstance(v, dt.datetime):
            return v.date()
        return v

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.amount:+,.2f}"


# =========================
# Solver configuration
# =========================


class SolverBounds(BaseModel):
    """
    Search interval and tolerance for the goal seek.

    `precision` is a *relative* step tolerance: iteration stops once
    |x1 - x| / (|x| + |x1|) < precision / 2.
    """

    xmin: float = Field(DEFAULT_XMIN, description="Lowest admissible iterate.")
    xmax: float = Field(DEFAULT_XMAX, description="Highest admissible iterate.")
    precision: float = Field(DEFAULT_PRECISION, gt=0, description="Relative step tolerance used for convergence.")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="after")
    def _check_interval(self) -> SolverBounds:
        if not self.xmin < self.xmax:
            raise ValueError(f"xmin ({self.xmin}) must be < xmax ({self.xmax})")
        return self

    @classmethod
    def for_discount_factor(
        cls,
        *,
        xmin: float = DEFAULT_XMIN,
        xmax: float = DEFAULT_XMAX,
        precision: float = DEFAULT_PRECISION,
        cap: float = DISCOUNT_FACTOR_CAP,
    ) -> SolverBounds:
        """Bounds for solving over 1 + rate: floor at -1, cap at `cap`."""
        return cls(xmin=max(xmin, DISCOUNT_FACTOR_FLOOR), xmax=min(cap, xmax), precision=precision)

    def contains(self, x: float) -> bool:
        return self.xmin <= x <= self.xmax

    @property
    def width(self) -> float:
        return self.xmax - self.xmin


class SolverSettings(BaseModel):
    """
    User-tunable knobs for an XIRR run. `guess` is a discount factor
    (1 + rate), so 1.1 means "start at 10% a year".
    """

    guess: float = Field(1.1, description="Initial discount factor for Newton iterations.")
    max_iter: int = Field(100, ge=1, le=10_000, description="Iteration budget for the goal seek.")
    precision: float = Field(DEFAULT_PRECISION, gt=0, description="Relative step tolerance.")
    xmin: float = Field(DEFAULT_XMIN, description="Requested lower bound; floored at -1 for discount factors.")
    xmax: float = Field(DEFAULT_XMAX, description="Requested upper bound; capped at `xmax_cap`.")
    xmax_cap: float = Field(DISCOUNT_FACTOR_CAP, gt=0, description="Hard cap on the discount factor.")
    bisection_fallback: bool = Field(
        True, description="If Newton fails, probe around the guess for a sign change and bisect it."
    )

    model_config = ConfigDict(frozen=True, extra="ignore")

    def bounds(self) -> SolverBounds:
        return SolverBounds.for_discount_factor(xmin=self.xmin, xmax=self.xmax, precision=self.precision, cap=self.xmax_cap)


# =========================
# Computed outputs
# =========================


class XirrResult(BaseModel):
    """
    Outcome of one XIRR calculation. Either `percent` is set, or `failure`
    explains why there is no result.
    """

    percent: float | None = Field(None, description="Annualized return in percent, rounded half-up to 2 decimals.")
    rate: float | None = Field(None, description="Unrounded annual rate as a fraction (0.3734 = 37.34%).")
    factor: float | None = Field(None, description="Converged discount factor, i.e. 1 + rate.")
    failure: str | None = Field(None, description="Failure reason when no result could be computed.")
    iterations: int = Field(0, ge=0, description="Newton iterations performed (0 when input was rejected); never above max_iter.")
    fallback_iterations: int = Field(0, ge=0, description="Bisection steps taken after Newton failed (0 when unused).")

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.percent is not None

    def summary(self) -> str:
        if self.percent is None:
            return f"XIRR: no result ({self.failure or 'unknown'})"
        return f"XIRR: {self.percent:.2f}%"

    def __str__(self) -> str:
        return self.summary()
