# src/inputs/inputs.py
"""
Inputs loader for XIRR runs.

Goals
-----
- File-first inputs with validation via Pydantic.
- Accepts a bare list of cash flows or a structured document with solver
  settings and run options.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Bare list (root = cash flows)
   [
     {"date": "2008-01-01", "amount": -10000},
     {"date": "2008-03-01", "amount": 2750}
   ]

2) Structured (root = AppInputs)
   {
     "cash_flows": [ ... as above ... ],
     "solver": {"guess": 1.1, "max_iter": 100, "precision": 1e-10, "bisection_fallback": true},
     "run": {"out": "xirr.txt", "verbose": false}
   }

Environment overrides (optional)
--------------------------------
- XIRR_GUESS      -> AppInputs.solver.guess (float)
- XIRR_MAX_ITER   -> AppInputs.solver.max_iter (int)
- XIRR_PRECISION  -> AppInputs.solver.precision (float)
- XIRR_OUT        -> AppInputs.run.out

Notes
-----
- Cash-flow order is kept as written: the first entry is the day-count reference.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from src.schemas.models import CashFlow, SolverSettings

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling the run."""

    out: str | None = Field(None, description="Optional path to write the result line to.")
    verbose: bool = Field(False, description="Log solver progress at INFO level.")


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        cash_flows: Dated amounts, in the order they should be discounted.
        solver:     Goal-seek settings.
        run:        Non-financial runtime options.
    """

    cash_flows: list[CashFlow] = Field(default_factory=list)
    solver: SolverSettings = SolverSettings()
    run: RunOptions = RunOptions()


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Responsibilities:
        - Read JSON from a file or string
        - Accept both the bare-list and structured shapes
        - Validate with Pydantic
        - Apply environment overrides for solver and run options
    """

    env_prefix: str = "XIRR_"

    # ---------- Public API ----------

    def load(self, path: str | Path) -> AppInputs:
        """Load inputs from a JSON file."""
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Inputs file not found: {p}")
        raw = self._read_json_file(p)
        return self._finish(raw)

    def load_json(self, text: str) -> AppInputs:
        """Load inputs from a JSON string (either shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        return self._finish(raw)

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        guess: float | None = None,
        max_iter: int | None = None,
        precision: float | None = None,
        out: str | None = None,
        verbose: bool | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied.
        Does not mutate the original instance.
        """
        solver_updates: dict[str, Any] = {}
        if guess is not None:
            solver_updates["guess"] = guess
        if max_iter is not None:
            solver_updates["max_iter"] = max_iter
        if precision is not None:
            solver_updates["precision"] = precision

        run_updates: dict[str, Any] = {}
        if out is not None:
            run_updates["out"] = out
        if verbose is not None:
            run_updates["verbose"] = verbose

        return self._updated(cfg, solver_updates, run_updates)

    # ---------- Internals ----------

    def _finish(self, raw: Any) -> AppInputs:
        data = self._maybe_wrap_bare_list(raw)
        cfg = self._parse_root(data)
        return self._apply_env_overrides(cfg)

    def _read_json_file(self, p: Path) -> Any:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e

    def _maybe_wrap_bare_list(self, raw: Any) -> dict[str, Any]:
        if isinstance(raw, list):
            return {"cash_flows": raw}
        if isinstance(raw, dict):
            return raw
        raise ValueError(f"Inputs root must be a list or an object, got {type(raw).__name__}")

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _updated(self, cfg: AppInputs, solver_updates: dict[str, Any], run_updates: dict[str, Any]) -> AppInputs:
        if not solver_updates and not run_updates:
            return cfg
        try:
            # model_copy skips validation; round-trip through the model to re-check bounds
            solver_new = SolverSettings.model_validate({**cfg.solver.model_dump(), **solver_updates})
        except ValidationError as e:
            raise ValueError(f"Invalid solver override:\n{e}") from e
        run_new = cfg.run.model_copy(update=run_updates)
        return cfg.model_copy(update={"solver": solver_new, "run": run_new})

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """
        Apply light, optional overrides from environment variables.
        Unparsable values are ignored.
        """
        prefix = self.env_prefix
        solver_updates: dict[str, Any] = {}
        run_updates: dict[str, Any] = {}

        guess = os.getenv(f"{prefix}GUESS")
        if guess:
            try:
                solver_updates["guess"] = float(guess)
            except ValueError:
                pass

        max_iter = os.getenv(f"{prefix}MAX_ITER")
        if max_iter:
            try:
                solver_updates["max_iter"] = int(max_iter)
            except ValueError:
                pass

        precision = os.getenv(f"{prefix}PRECISION")
        if precision:
            try:
                solver_updates["precision"] = float(precision)
            except ValueError:
                pass

        out = os.getenv(f"{prefix}OUT")
        if out:
            run_updates["out"] = out

        return self._updated(cfg, solver_updates, run_updates)


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
