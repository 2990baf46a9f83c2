# entrypoints/cli/analyze_property.py
"""
Print the numbers for one property from a JSON file shaped like the
/calculate request body:

  python entrypoints/cli/analyze_property.py deal.json --alos
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path

import pandas as pd

from staymodel.adapters.config import config
from staymodel.analysis.alos import MAX_ALOS_NIGHTS, calculate_alos_sensitivity, summarize_alos
from staymodel.analysis.finance import calculate
from staymodel.analysis.tables import alos_frame, projection_frame, result_summary
from staymodel.api.schemas import CalculateRequest
from staymodel.services.inputs import build_calculation_input, coerce_expense_rows


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("input_json", type=Path)
    ap.add_argument("--alos", action="store_true", help="also print the ALOS sensitivity sweep")
    ap.add_argument("--alos-min", type=int, default=config.ALOS_MIN)
    ap.add_argument("--alos-max", type=int, default=config.ALOS_MAX)
    args = ap.parse_args()

    if not 1 <= args.alos_min <= args.alos_max <= MAX_ALOS_NIGHTS:
        ap.error(f"need 1 <= --alos-min <= --alos-max <= {MAX_ALOS_NIGHTS}")

    if not args.input_json.exists():
        raise SystemExit(f"Input file not found: {args.input_json}")

    req = CalculateRequest.model_validate(json.loads(args.input_json.read_text()))
    inp = build_calculation_input(
        acquisition=req.acquisition,
        financing=req.financing,
        income=req.income,
        expenses=coerce_expense_rows(e.model_dump() for e in req.expenses),
        unit_count=req.unit_count,
    )
    result = calculate(inp)

    pd.set_option("display.float_format", "{:,.2f}".format)

    print("Year-1 metrics:")
    print(pd.Series(result_summary(result)).to_string())
    print("\n10-year projection:")
    print(projection_frame(result))

    if args.alos:
        points = calculate_alos_sensitivity(
            inp.income,
            inp.expenses,
            annual_revenue=result.annual_revenue,
            annual_debt_service=result.annual_debt_service,
            alos_range=(args.alos_min, args.alos_max),
        )
        ind = summarize_alos(points, inp.expenses)
        print("\nALOS sensitivity:")
        print(alos_frame(points))
        print(
            f"\nsweet spot: {ind.sweet_spot} | break-even ALOS: {ind.break_even_alos} | "
            f"sensitivity: {ind.sensitivity_score:,.0f}/night ({ind.sensitivity_level})"
        )


if __name__ == "__main__":
    main()
