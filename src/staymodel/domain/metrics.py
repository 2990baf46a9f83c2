from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from staymodel.domain.underwriting import CalculationResult


@dataclass(frozen=True)
class PortfolioSummary:
    """
    Aggregated totals and DSCR / CoC stats across a set of properties.

    This is the 'reduction' result of a map-style per-property computation.
    """
    property_count: int
    total_revenue: float
    total_cash_flow: float
    total_noi: float
    total_invested: float
    cash_on_cash: float
    mean_dscr: float
    p5_dscr: float
    p50_dscr: float
    p95_dscr: float
    mean_coc: float
    p5_coc: float
    p50_coc: float
    p95_coc: float


def _finite(x: np.ndarray) -> np.ndarray:
    return x[np.isfinite(x)]


def _stats(x: np.ndarray) -> tuple[float, float, float, float]:
    if x.size == 0:
        nan = float("nan")
        return nan, nan, nan, nan
    return (
        float(np.mean(x)),
        float(np.quantile(x, 0.05)),
        float(np.quantile(x, 0.50)),
        float(np.quantile(x, 0.95)),
    )


def reduce_portfolio(results: Iterable[CalculationResult]) -> PortfolioSummary:
    """
    Totals are annualized from the monthly figures. DSCR stats skip the +inf
    values that all-cash properties produce.
    """
    results = list(results)

    monthly_revenue = np.array([r.monthly_revenue for r in results], dtype=float)
    monthly_cash_flow = np.array([r.monthly_cash_flow for r in results], dtype=float)
    noi = np.array([r.noi for r in results], dtype=float)
    invested = np.array([r.total_cash_invested for r in results], dtype=float)
    dscr = np.array([r.dscr for r in results], dtype=float)
    coc = np.array([r.cash_on_cash for r in results], dtype=float)

    total_revenue = float(np.sum(monthly_revenue * 12.0))
    total_cash_flow = float(np.sum(monthly_cash_flow * 12.0))
    total_invested = float(np.sum(invested))

    mean_dscr, p5_dscr, p50_dscr, p95_dscr = _stats(_finite(dscr))
    mean_coc, p5_coc, p50_coc, p95_coc = _stats(_finite(coc))

    return PortfolioSummary(
        property_count=len(results),
        total_revenue=total_revenue,
        total_cash_flow=total_cash_flow,
        total_noi=float(np.sum(noi)),
        total_invested=total_invested,
        cash_on_cash=total_cash_flow / total_invested if total_invested > 0 else 0.0,
        mean_dscr=mean_dscr,
        p5_dscr=p5_dscr,
        p50_dscr=p50_dscr,
        p95_dscr=p95_dscr,
        mean_coc=mean_coc,
        p5_coc=p5_coc,
        p50_coc=p50_coc,
        p95_coc=p95_coc,
    )
