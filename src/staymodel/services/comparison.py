# src/staymodel/services/comparison.py
from __future__ import annotations

import math
from typing import Hashable, Sequence

from staymodel.adapters.logging_utils import get_logger, log_context
from staymodel.domain.ports import FinancialsRepository
from staymodel.domain.underwriting import CalculationResult
from staymodel.services.portfolio import PropertyOutcome, compute_many

logger = get_logger(__name__)

# Result fields where lower is better
_LOWER_IS_BETTER = {"break_even_occupancy", "grm", "price_per_door"}


def compare_properties(
    repo: FinancialsRepository,
    property_ids: Sequence[Hashable],
    *,
    workers: int | None = None,
) -> list[PropertyOutcome]:
    """
    Side-by-side results for several properties, in the order requested.
    Unknown ids come back as error rows instead of failing the comparison.
    """
    if not property_ids:
        raise ValueError("property_ids must not be empty")

    rows = compute_many(repo, property_ids, workers=workers)

    missing = [r.property_id for r in rows if r.error]
    if missing:
        logger.warning("compare_missing_properties", extra=log_context(property_ids=missing))
    return rows


def best_by(rows: Sequence[PropertyOutcome], metric: str) -> Hashable | None:
    """
    Id of the property that wins on `metric` (any CalculationResult field).
    Higher wins, except for cost-style ratios where lower wins. NaN values
    and error rows are ignored.
    """
    if metric not in CalculationResult.__dataclass_fields__:
        raise ValueError(f"unknown metric: {metric}")

    candidates = []
    for row in rows:
        if row.result is None:
            continue
        value = getattr(row.result, metric)
        if isinstance(value, float) and math.isnan(value):
            continue
        candidates.append((value, row.property_id))

    if not candidates:
        return None

    if metric in _LOWER_IS_BETTER:
        return min(candidates, key=lambda c: c[0])[1]
    return max(candidates, key=lambda c: c[0])[1]
