# src/staymodel/services/inputs.py
"""
Assemble a CalculationInput from whatever a record store hands back.

Missing financing / income rows are replaced with baseline assumptions from
config; stored expense rows are loosely typed and get coerced here.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from staymodel.adapters.config import AppConfig, config
from staymodel.domain.expenses import (
    FixedExpense,
    PercentageExpense,
    expense_from_record,
)
from staymodel.domain.property import (
    AcquisitionCost,
    CalculationInput,
    FinancingTerms,
    IncomeAssumption,
)

DEFAULT_UNIT_COUNT = 1


def _to_num_optional(val: Any) -> float:
    """
    Lenient converter for stored numeric fields:
      - 75 / 75.0
      - "75" / " 75 "
      - "10%"
    Returns 0.0 when missing/blank/garbage.
    """
    if val is None or isinstance(val, bool):
        return 0.0
    if isinstance(val, (int, float)):
        return float(val)
    if isinstance(val, str):
        s = val.strip().replace(",", "").lstrip("$")
        if not s:
            return 0.0
        if s.endswith("%"):
            s = s[:-1]
        try:
            return float(s)
        except ValueError:
            return 0.0
    return 0.0


def _to_bool(val: Any) -> bool:
    if isinstance(val, str):
        return val.strip().lower() in {"1", "true", "yes", "y", "t"}
    return bool(val)


def coerce_expense_rows(rows: Iterable[Mapping[str, Any]]) -> list[FixedExpense | PercentageExpense]:
    """
    Stored rows look like {"amount": "75", "frequency": "per_stay",
    "is_percentage": false, "category": "cleaning"}. An amount written as
    "10%" is a percentage row even without the flag.
    """
    items: list[FixedExpense | PercentageExpense] = []
    for row in rows:
        raw_amount = row.get("amount")
        is_pct = _to_bool(row.get("is_percentage", False))
        if isinstance(raw_amount, str) and raw_amount.strip().endswith("%"):
            is_pct = True
        items.append(
            expense_from_record(
                amount=_to_num_optional(raw_amount),
                frequency=row.get("frequency"),
                is_percentage=is_pct,
                category=row.get("category"),
            )
        )
    return items


def default_financing(settings: AppConfig = config) -> FinancingTerms:
    return FinancingTerms(
        down_payment_pct=settings.DEFAULT_DOWN_PAYMENT_PCT,
        interest_rate=settings.DEFAULT_INTEREST_RATE,
        loan_term_years=settings.DEFAULT_LOAN_TERM_YEARS,
        is_cash_purchase=False,
    )


def default_income(settings: AppConfig = config) -> IncomeAssumption:
    return IncomeAssumption(
        nightly_rate=0.0,
        occupancy_pct=settings.DEFAULT_OCCUPANCY_PCT,
        avg_stay_nights=settings.DEFAULT_AVG_STAY_NIGHTS,
    )


def build_calculation_input(
    acquisition: AcquisitionCost | None = None,
    financing: FinancingTerms | None = None,
    income: IncomeAssumption | None = None,
    expenses: Iterable[FixedExpense | PercentageExpense] = (),
    unit_count: int | None = None,
    settings: AppConfig = config,
) -> CalculationInput:
    return CalculationInput(
        acquisition=acquisition or AcquisitionCost(purchase_price=0.0),
        financing=financing or default_financing(settings),
        income=income or default_income(settings),
        expenses=tuple(expenses),
        unit_count=unit_count if unit_count is not None else DEFAULT_UNIT_COUNT,
    )
