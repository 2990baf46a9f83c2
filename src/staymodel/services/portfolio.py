# src/staymodel/services/portfolio.py

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Hashable, Sequence

from loguru import logger

from staymodel.adapters.config import config
from staymodel.analysis.finance import calculate
from staymodel.domain.metrics import PortfolioSummary, reduce_portfolio
from staymodel.domain.ports import FinancialsRepository
from staymodel.domain.underwriting import CalculationResult

NOT_FOUND = "not found"


@dataclass(frozen=True)
class PropertyOutcome:
    property_id: Hashable
    result: CalculationResult | None
    error: str | None = None


def _compute_one(repo: FinancialsRepository, property_id: Hashable) -> PropertyOutcome:
    inp = repo.get_calculation_input(property_id)
    if inp is None:
        return PropertyOutcome(property_id=property_id, result=None, error=NOT_FOUND)
    return PropertyOutcome(property_id=property_id, result=calculate(inp))


def _resolve_workers(workers: int | None, n_items: int) -> int:
    # avoid runaway pools on tiny machines
    cpu = os.cpu_count() or 4
    w = workers if workers is not None else config.PORTFOLIO_WORKERS
    return max(1, min(int(w), cpu * 4, max(n_items, 1)))


def compute_many(
    repo: FinancialsRepository,
    property_ids: Sequence[Hashable],
    *,
    workers: int | None = None,
) -> list[PropertyOutcome]:
    """
    Run calculate() for every id in a thread pool. Calculations share no
    state, so the only coordination is collecting results back in input
    order. A failing property becomes an error outcome; the rest still run.
    """
    ids = list(property_ids)
    if not ids:
        return []

    n_workers = _resolve_workers(workers, len(ids))
    outcomes: dict[int, PropertyOutcome] = {}

    with ThreadPoolExecutor(max_workers=n_workers) as ex:
        futures = {ex.submit(_compute_one, repo, pid): i for i, pid in enumerate(ids)}
        for fut in as_completed(futures):
            i = futures[fut]
            try:
                outcomes[i] = fut.result()
            except Exception as exc:
                logger.exception("Property calculation failed", property_id=ids[i], exc=exc)
                outcomes[i] = PropertyOutcome(property_id=ids[i], result=None, error=f"calculation failed: {exc}")

    return [outcomes[i] for i in range(len(ids))]


def summarize_portfolio(
    repo: FinancialsRepository,
    property_ids: Sequence[Hashable] | None = None,
    *,
    workers: int | None = None,
) -> tuple[PortfolioSummary, list[PropertyOutcome]]:
    """
    Portfolio totals plus per-property outcomes. Defaults to every property
    the repository knows about; properties without financials are listed but
    do not count toward the totals.
    """
    ids = list(property_ids) if property_ids is not None else repo.list_property_ids()

    logger.info("Starting portfolio summary", n_properties=len(ids))

    outcomes = compute_many(repo, ids, workers=workers)
    summary = reduce_portfolio(o.result for o in outcomes if o.result is not None)

    logger.info(
        "Portfolio summary completed",
        property_count=summary.property_count,
        skipped=len(outcomes) - summary.property_count,
        cash_on_cash=summary.cash_on_cash,
    )
    return summary, outcomes
