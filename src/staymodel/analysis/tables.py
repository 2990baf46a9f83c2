# src/staymodel/analysis/tables.py

from __future__ import annotations

import math
from dataclasses import asdict, fields
from typing import Any, Sequence

import pandas as pd

from staymodel.domain.underwriting import AlosDataPoint, CalculationResult, YearProjectionPoint

_PROJECTION_COLUMNS = [f.name for f in fields(YearProjectionPoint)]
_ALOS_COLUMNS = [f.name for f in fields(AlosDataPoint)]


def projection_frame(result: CalculationResult) -> pd.DataFrame:
    """Ten-year projection as a DataFrame indexed by year."""
    df = pd.DataFrame([asdict(p) for p in result.ten_year_projection], columns=_PROJECTION_COLUMNS)
    return df.set_index("year")


def alos_frame(points: Sequence[AlosDataPoint]) -> pd.DataFrame:
    """ALOS sweep as a DataFrame indexed by alos (empty frame for an empty sweep)."""
    df = pd.DataFrame([asdict(p) for p in points], columns=_ALOS_COLUMNS)
    return df.set_index("alos")


def _json_float(v: float) -> float | None:
    return v if math.isfinite(v) else None


def result_summary(result: CalculationResult) -> dict[str, Any]:
    """
    Single-year figures as a JSON-safe dict.

    JSON has no infinity, so an unbounded DSCR is emitted as dscr=None with
    dscr_unbounded=True.
    """
    out: dict[str, Any] = {}
    for f in fields(CalculationResult):
        if f.name == "ten_year_projection":
            continue
        value = getattr(result, f.name)
        out[f.name] = _json_float(value) if isinstance(value, float) else value
    out["dscr_unbounded"] = math.isinf(result.dscr) and result.dscr > 0
    return out


def result_payload(result: CalculationResult) -> dict[str, Any]:
    """result_summary() plus the projection rows."""
    return result_summary(result) | {
        "ten_year_projection": [asdict(p) for p in result.ten_year_projection],
    }
