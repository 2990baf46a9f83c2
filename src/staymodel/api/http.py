# src/staymodel/api/http.py
from __future__ import annotations

import math
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException

from staymodel.adapters.config import config
from staymodel.adapters.logging_utils import get_logger, log_context
from staymodel.adapters.memory_repo import InMemoryFinancialsRepository
from staymodel.analysis.alos import calculate_alos_sensitivity, summarize_alos
from staymodel.analysis.finance import calculate
from staymodel.analysis.tables import result_payload, result_summary
from staymodel.domain.property import CalculationInput
from staymodel.services.comparison import best_by, compare_properties
from staymodel.services.inputs import build_calculation_input, coerce_expense_rows
from staymodel.services.portfolio import PropertyOutcome, summarize_portfolio
from .schemas import (
    AlosRequest,
    AlosResponse,
    CalculateRequest,
    CalculateResponse,
    CompareResponse,
    PortfolioResponse,
    PropertiesRequest,
)

logger = get_logger(__name__)

app = FastAPI(title="staymodel")

# Metrics reported as "best" in a comparison
_COMPARE_METRICS = ("cash_on_cash", "cap_rate", "dscr", "monthly_cash_flow", "cagr", "break_even_occupancy")


def _to_input(req: CalculateRequest) -> CalculationInput:
    return build_calculation_input(
        acquisition=req.acquisition,
        financing=req.financing,
        income=req.income,
        expenses=coerce_expense_rows(e.model_dump() for e in req.expenses),
        unit_count=req.unit_count,
    )


def _json_safe(d: dict[str, Any]) -> dict[str, Any]:
    return {k: (None if isinstance(v, float) and not math.isfinite(v) else v) for k, v in d.items()}


def _repo_from(req: PropertiesRequest) -> InMemoryFinancialsRepository:
    if not req.properties:
        raise HTTPException(status_code=400, detail="properties must not be empty")
    return InMemoryFinancialsRepository(
        {pid: (_to_input(body) if body is not None else None) for pid, body in req.properties.items()}
    )


def _outcome_row(o: PropertyOutcome) -> dict[str, Any]:
    return {
        "property_id": o.property_id,
        "error": o.error,
        "metrics": result_summary(o.result) if o.result is not None else None,
    }


@app.post("/calculate", response_model=CalculateResponse)
def calculate_endpoint(payload: CalculateRequest) -> CalculateResponse:
    result = calculate(_to_input(payload))
    logger.debug(
        "calculate",
        extra=log_context(noi=result.noi, dscr=result.dscr, cagr=result.cagr),
    )
    return CalculateResponse(**result_payload(result))


@app.post("/alos", response_model=AlosResponse)
def alos_endpoint(payload: AlosRequest) -> AlosResponse:
    lo = payload.alos_min if payload.alos_min is not None else config.ALOS_MIN
    hi = payload.alos_max if payload.alos_max is not None else config.ALOS_MAX
    if lo > hi:
        raise HTTPException(status_code=400, detail=f"alos_min ({lo}) must be <= alos_max ({hi})")

    inp = _to_input(payload)
    result = calculate(inp)
    points = calculate_alos_sensitivity(
        inp.income,
        inp.expenses,
        annual_revenue=result.annual_revenue,
        annual_debt_service=result.annual_debt_service,
        alos_range=(lo, hi),
    )
    indicators = summarize_alos(points, inp.expenses)
    return AlosResponse(
        points=[asdict(p) for p in points],
        indicators=asdict(indicators),
    )


@app.post("/compare", response_model=CompareResponse)
def compare_endpoint(payload: PropertiesRequest) -> CompareResponse:
    repo = _repo_from(payload)
    try:
        rows = compare_properties(repo, repo.list_property_ids(), workers=payload.workers)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return CompareResponse(
        rows=[_outcome_row(r) for r in rows],
        best={m: best_by(rows, m) for m in _COMPARE_METRICS},
    )


@app.post("/portfolio", response_model=PortfolioResponse)
def portfolio_endpoint(payload: PropertiesRequest) -> PortfolioResponse:
    repo = _repo_from(payload)
    summary, outcomes = summarize_portfolio(repo, workers=payload.workers)
    return PortfolioResponse(
        portfolio=_json_safe(asdict(summary)),
        properties=[_outcome_row(o) for o in outcomes],
    )
