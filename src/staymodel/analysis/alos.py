# src/staymodel/analysis/alos.py
"""
Average-length-of-stay (ALOS) sensitivity.

Holds booked nights and revenue fixed and asks: if the same nights were sold
as fewer, longer stays, how much do per-turnover costs (cleaning, linens,
restocking) fall and what happens to NOI and cash flow?
"""
from __future__ import annotations

from typing import Iterable, Sequence

from staymodel.domain.expenses import (
    FixedExpense,
    PercentageExpense,
    has_per_stay_expenses,
    is_per_turnover,
    normalize_to_annual,
)
from staymodel.domain.property import IncomeAssumption
from staymodel.domain.underwriting import AlosDataPoint, AlosIndicators, SensitivityLevel

DEFAULT_ALOS_RANGE = (2, 14)
DAYS_PER_YEAR = 365
# Longest stay a sweep will consider
MAX_ALOS_NIGHTS = 365

# Margin gain per extra night below which longer stays stop paying off
SWEET_SPOT_MARGIN_GAIN = 0.01

# $/night NOI change thresholds
HIGH_SENSITIVITY = 2000.0
MODERATE_SENSITIVITY = 500.0


def calculate_alos_sensitivity(
    income: IncomeAssumption,
    expenses: Iterable[FixedExpense | PercentageExpense],
    annual_revenue: float,
    annual_debt_service: float,
    alos_range: tuple[int, int] = DEFAULT_ALOS_RANGE,
) -> list[AlosDataPoint]:
    """
    One point per integer ALOS in the inclusive range, ascending.

    Non-turnover expenses are annualized once (the sweep does not move them);
    per-turnover amounts are multiplied by stays/year at each ALOS.
    """
    expenses = list(expenses)
    total_nights_booked = DAYS_PER_YEAR * income.occupancy_pct / 100.0

    per_stay_cost_per_turn = sum((e.amount for e in expenses if is_per_turnover(e)), 0.0)
    fixed_expenses_annual = sum(
        (
            normalize_to_annual(e, annual_revenue, income.nightly_rate, income.avg_stay_nights)
            for e in expenses
            if not is_per_turnover(e)
        ),
        0.0,
    )

    # stays shorter than one night are not bookable
    lo, hi = max(alos_range[0], 1), alos_range[1]
    points: list[AlosDataPoint] = []
    for alos in range(lo, hi + 1):
        stays_per_year = total_nights_booked / alos
        per_stay_costs_annual = per_stay_cost_per_turn * stays_per_year
        total_expenses = fixed_expenses_annual + per_stay_costs_annual
        noi = annual_revenue - total_expenses

        points.append(
            AlosDataPoint(
                alos=alos,
                stays_per_year=stays_per_year,
                per_stay_costs_annual=per_stay_costs_annual,
                fixed_expenses_annual=fixed_expenses_annual,
                total_expenses=total_expenses,
                revenue=annual_revenue,
                noi=noi,
                noi_margin=noi / annual_revenue if annual_revenue > 0 else 0.0,
                cash_flow=noi - annual_debt_service,
                per_stay_cost_pct=per_stay_costs_annual / annual_revenue if annual_revenue > 0 else 0.0,
            )
        )

    return points


def find_sweet_spot(points: Sequence[AlosDataPoint]) -> int | None:
    """First ALOS whose NOI-margin gain over the previous point is under 1pt."""
    for prev, cur in zip(points, points[1:]):
        if cur.noi_margin - prev.noi_margin < SWEET_SPOT_MARGIN_GAIN:
            return cur.alos
    return None


def find_break_even_alos(points: Sequence[AlosDataPoint]) -> int | None:
    for pt in points:
        if pt.cash_flow >= 0:
            return pt.alos
    return None


def sensitivity_score(points: Sequence[AlosDataPoint]) -> float:
    """Average NOI change per one-night increase in stay length (signed)."""
    if len(points) < 2:
        return 0.0
    return (points[-1].noi - points[0].noi) / (len(points) - 1)


def classify_sensitivity(score: float) -> SensitivityLevel:
    magnitude = abs(score)
    if magnitude > HIGH_SENSITIVITY:
        return "high"
    if magnitude > MODERATE_SENSITIVITY:
        return "moderate"
    return "low"


def summarize_alos(
    points: Sequence[AlosDataPoint],
    expenses: Iterable[FixedExpense | PercentageExpense],
) -> AlosIndicators:
    score = sensitivity_score(points)
    return AlosIndicators(
        sweet_spot=find_sweet_spot(points),
        break_even_alos=find_break_even_alos(points),
        sensitivity_score=score,
        sensitivity_level=classify_sensitivity(score),
        has_per_stay_costs=has_per_stay_expenses(expenses),
    )
