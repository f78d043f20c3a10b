# src/core/finance/bracket.py

from __future__ import annotations

from dataclasses import dataclass

Sample = tuple[float, float]  # (x, f(x))


@dataclass
class Bracket:
    """
    Best known samples on each side of zero, gathered while goal seeking.

    Not a bisection solver: the pair only sizes finite-difference steps near
    x == 0 and records an exact root if one is hit. One instance per solve.
    """

    positive: Sample | None = None
    negative: Sample | None = None
    root: float | None = None

    @property
    def has_positive(self) -> bool:
        return self.positive is not None

    @property
    def has_negative(self) -> bool:
        return self.negative is not None

    @property
    def has_root(self) -> bool:
        return self.root is not None

    @property
    def width(self) -> float | None:
        """|xPos - xNeg| once both sides are known."""
        if self.positive is None or self.negative is None:
            return None
        return abs(self.positive[0] - self.negative[0])

    def update(self, x: float, y: float) -> bool:
        """Record (x, y). Returns True iff y is exactly zero (x is a root)."""
        if y == 0.0:
            self.root = x
            return True

        if y > 0.0:
            if self.positive is None:
                self.positive = (x, y)
            elif self.negative is not None:
                # Both sides known: keep the positive sample nearest the negative one
                x_neg = self.negative[0]
                if abs(x - x_neg) < abs(self.positive[0] - x_neg):
                    self.positive = (x, y)
            elif y < self.positive[1]:
                self.positive = (x, y)
        else:
            if self.negative is None:
                self.negative = (x, y)
            elif self.positive is not None:
                x_pos = self.positive[0]
                if abs(x - x_pos) < abs(x_pos - self.negative[0]):
                    self.negative = (x, y)
            elif -y < -self.negative[1]:
                self.negative = (x, y)

        return False
