# src/staymodel/domain/expenses.py
from __future__ import annotations

from typing import Annotated, Any, Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

BillingBasis = Literal["monthly", "annual", "per_turnover"]

MONTHLY = "monthly"
ANNUAL = "annual"
PER_TURNOVER = "per_turnover"

# Input spellings that mean "once per guest checkout"
_PER_TURNOVER_ALIASES = {"per_turnover", "per_stay", "per-turnover", "per-stay", "turnover"}

# Floors applied when estimating turnovers from revenue
MIN_NIGHTLY_RATE_FOR_TURNOVERS = 1.0
MIN_STAY_NIGHTS_FOR_TURNOVERS = 3.0


class FixedExpense(BaseModel):
    """
    A dollar amount billed monthly, annually or once per guest turnover.

    Unknown bases are kept as given and annualized like a monthly bill.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed"] = "fixed"
    amount: float
    billing_basis: str | None = MONTHLY
    category: str | None = None

    @field_validator("billing_basis", mode="before")
    @classmethod
    def _normalize_basis(cls, v: Any) -> Any:
        if v is None:
            return None
        s = str(v).strip().lower()
        if s in _PER_TURNOVER_ALIASES:
            return PER_TURNOVER
        return s


class PercentageExpense(BaseModel):
    """A share of annual revenue, e.g. pct=3 for a 3% platform fee."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["percentage"] = "percentage"
    pct: float
    category: str | None = None


ExpenseItem = Annotated[Union[FixedExpense, PercentageExpense], Field(discriminator="kind")]


def expense_from_record(
    amount: float,
    frequency: str | None = MONTHLY,
    is_percentage: bool = False,
    category: str | None = None,
) -> FixedExpense | PercentageExpense:
    """
    Build an expense from a flat stored row (amount, frequency, is_percentage).
    A percentage row drops its frequency entirely.
    """
    if is_percentage:
        return PercentageExpense(pct=amount, category=category)
    return FixedExpense(amount=amount, billing_basis=frequency, category=category)


def is_per_turnover(item: FixedExpense | PercentageExpense) -> bool:
    return isinstance(item, FixedExpense) and item.billing_basis == PER_TURNOVER


def has_per_stay_expenses(items: Iterable[FixedExpense | PercentageExpense]) -> bool:
    return any(is_per_turnover(e) and e.amount > 0 for e in items)


def estimated_turnovers(annual_revenue: float, nightly_rate: float, avg_stay_nights: float) -> float:
    nights_booked = annual_revenue / max(nightly_rate, MIN_NIGHTLY_RATE_FOR_TURNOVERS)
    return nights_booked / max(avg_stay_nights, MIN_STAY_NIGHTS_FOR_TURNOVERS)


def normalize_to_annual(
    item: FixedExpense | PercentageExpense,
    annual_revenue: float,
    nightly_rate: float,
    avg_stay_nights: float,
) -> float:
    """Annual dollars for one expense item."""
    if isinstance(item, PercentageExpense):
        # already an annual figure
        return (item.pct / 100.0) * annual_revenue

    if item.billing_basis == ANNUAL:
        return item.amount
    if item.billing_basis == PER_TURNOVER:
        return item.amount * estimated_turnovers(annual_revenue, nightly_rate, avg_stay_nights)
    return item.amount * 12.0
