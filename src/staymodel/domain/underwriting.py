from dataclasses import dataclass
from typing import Literal, Optional, Tuple

SensitivityLevel = Literal["low", "moderate", "high"]


@dataclass(frozen=True)
class YearProjectionPoint:
    year: int                   # 1..10
    revenue: float
    expenses: float
    noi: float
    debt_service: float         # flat for a fixed-rate loan
    cash_flow: float
    property_value: float
    equity: float               # property value minus loan balance
    cumulative_cash_flow: float


@dataclass(frozen=True)
class TenYearProjection:
    points: Tuple[YearProjectionPoint, ...]
    ten_year_net_return: float
    cagr: float


@dataclass(frozen=True)
class CalculationResult:
    # Revenue
    monthly_revenue: float
    annual_revenue: float

    # Loan
    monthly_pi: float
    annual_debt_service: float
    loan_amount: float
    down_payment: float

    # Expenses
    annual_expenses: float

    # Core metrics
    noi: float                  # annual net operating income
    total_cash_invested: float
    cash_on_cash: float
    gross_yield: float
    cap_rate: float
    dscr: float                 # inf for an all-cash, profitable purchase
    monthly_cash_flow: float
    annual_cash_flow: float
    break_even_occupancy: float # fraction of calendar nights
    grm: float
    price_per_door: float

    # 10-year projection
    ten_year_projection: Tuple[YearProjectionPoint, ...]
    ten_year_net_return: float
    cagr: float


@dataclass(frozen=True)
class AlosDataPoint:
    alos: int
    stays_per_year: float
    per_stay_costs_annual: float
    fixed_expenses_annual: float
    total_expenses: float
    revenue: float
    noi: float
    noi_margin: float
    cash_flow: float
    per_stay_cost_pct: float


@dataclass(frozen=True)
class AlosIndicators:
    sweet_spot: Optional[int]        # first ALOS where margin gain < 1pt
    break_even_alos: Optional[int]   # first ALOS with cash flow >= 0
    sensitivity_score: float         # avg NOI change per extra night
    sensitivity_level: SensitivityLevel
    has_per_stay_costs: bool
