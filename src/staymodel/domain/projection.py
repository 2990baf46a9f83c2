# src/staymodel/domain/projection.py
from __future__ import annotations

from staymodel.domain.amortization import remaining_balance
from staymodel.domain.underwriting import TenYearProjection, YearProjectionPoint

# Fixed growth policy, not configurable
APPRECIATION_RATE = 0.03
EXPENSE_GROWTH_RATE = 0.02
REVENUE_GROWTH_RATE = 0.03
PROJECTION_YEARS = 10


def project_ten_years(
    *,
    annual_revenue: float,
    annual_expenses: float,
    annual_debt_service: float,
    purchase_price: float,
    loan_amount: float,
    interest_rate: float,
    loan_term_years: int,
    is_cash_purchase: bool,
    total_cash_invested: float,
) -> TenYearProjection:
    """
    Roll year-1 figures forward ten years.

    Revenue grows 3%/yr, expenses 2%/yr, the property appreciates 3%/yr and
    debt service stays flat. Equity is appreciated value minus the amortized
    loan balance at the end of each year.
    """
    points: list[YearProjectionPoint] = []
    cumulative_cash_flow = 0.0
    total_months = loan_term_years * 12

    for year in range(1, PROJECTION_YEARS + 1):
        year_revenue = annual_revenue * (1 + REVENUE_GROWTH_RATE) ** (year - 1)
        year_expenses = annual_expenses * (1 + EXPENSE_GROWTH_RATE) ** (year - 1)
        year_noi = year_revenue - year_expenses
        year_cash_flow = year_noi - annual_debt_service
        cumulative_cash_flow += year_cash_flow

        property_value = purchase_price * (1 + APPRECIATION_RATE) ** year
        if is_cash_purchase:
            loan_balance = 0.0
        else:
            loan_balance = remaining_balance(loan_amount, interest_rate, total_months, year * 12)

        points.append(
            YearProjectionPoint(
                year=year,
                revenue=year_revenue,
                expenses=year_expenses,
                noi=year_noi,
                debt_service=annual_debt_service,
                cash_flow=year_cash_flow,
                property_value=property_value,
                equity=property_value - loan_balance,
                cumulative_cash_flow=cumulative_cash_flow,
            )
        )

    final = points[-1]
    ten_year_net_return = final.cumulative_cash_flow + final.equity - total_cash_invested

    # A non-positive ending value has no real root; report 0 instead.
    ending_value = total_cash_invested + ten_year_net_return
    cagr = 0.0
    if total_cash_invested > 0 and ending_value > 0:
        cagr = (ending_value / total_cash_invested) ** (1 / PROJECTION_YEARS) - 1

    return TenYearProjection(
        points=tuple(points),
        ten_year_net_return=ten_year_net_return,
        cagr=cagr,
    )
