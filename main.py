# main.py
"""
Entry Point: XIRR calculator

Purpose
-------
Compute the annualized internal rate of return of dated cash flows:
  1) Load cash flows from --config JSON and/or repeated --flow DATE:AMOUNT.
  2) Run the Newton goal seek on NPV(1 + rate) == 0, bisecting if Newton fails.
  3) Print the rate in percent (2 decimals) or "no result".

Usage
-----
    python main.py --flow 2008-01-01:-10000 --flow 2008-03-01:2750 \
                   --flow 2008-10-30:4250 --flow 2009-02-15:3250 --flow 2009-04-01:2750
    python main.py --config flows.json --json --out xirr.txt

Exit status: 0 with a result, 1 for "no result", 2 for bad arguments.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from src.core.finance import XirrCalculator
from src.core.logs import configure_logging
from src.inputs.inputs import AppInputs, InputsLoader
from src.schemas.models import CashFlow


def _parse_flow(val: str) -> CashFlow:
    when, sep, amount = val.rpartition(":")
    if not sep or not when:
        raise argparse.ArgumentTypeError(f"expected DATE:AMOUNT, got {val!r}")
    try:
        return CashFlow(date=when.strip(), amount=float(amount))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid cash flow {val!r}: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="XIRR of irregularly dated cash flows")
    p.add_argument("--config", type=str, default=None, help="Path to JSON inputs (list of flows or AppInputs).")
    p.add_argument(
        "--flow",
        type=_parse_flow,
        action="append",
        default=[],
        metavar="DATE:AMOUNT",
        help="Cash flow, e.g. 2008-01-01:-10000. Repeatable; appended after --config flows.",
    )
    p.add_argument("--guess", type=float, default=None, help="Initial discount factor (1.1 = 10%%).")
    p.add_argument("--max-iter", type=int, default=None, help="Iteration budget (default 100).")
    p.add_argument("--out", type=str, default=None, help="Also write the result line to this file.")
    p.add_argument("--json", action="store_true", help="Print the full result as JSON.")
    p.add_argument("--verbose", action="store_true", default=None, help="Log solver progress.")
    return p


def load_app_inputs(args: argparse.Namespace) -> AppInputs:
    loader = InputsLoader()
    cfg = loader.load(args.config) if args.config else loader.load_json("[]")
    cfg = loader.with_overrides(cfg, guess=args.guess, max_iter=args.max_iter, out=args.out, verbose=args.verbose)
    if args.flow:
        cfg = cfg.model_copy(update={"cash_flows": [*cfg.cash_flows, *args.flow]})
    return cfg


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_app_inputs(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    configure_logging(cfg.run.verbose)

    calc = XirrCalculator(cfg.solver)
    for cf in cfg.cash_flows:
        calc.add_cash_flow(cf.date, cf.amount)
    result = calc.evaluate()

    line = json.dumps(result.model_dump()) if args.json else result.summary()
    print(line)
    if cfg.run.out:
        out = Path(cfg.run.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(line + "\n", encoding="utf-8")

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
