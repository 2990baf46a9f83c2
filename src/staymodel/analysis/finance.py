from staymodel.domain.amortization import monthly_principal_and_interest
from staymodel.domain.expenses import normalize_to_annual
from staymodel.domain.projection import project_ten_years
from staymodel.domain.property import CalculationInput
from staymodel.domain.underwriting import CalculationResult

# Revenue uses a 30-day month, 12 months a year
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365


def _revenue(nightly_rate: float, occupancy_pct: float) -> tuple[float, float]:
    monthly = nightly_rate * DAYS_PER_MONTH * (occupancy_pct / 100.0)
    return monthly, monthly * 12.0


def _loan(inp: CalculationInput) -> tuple[float, float, float]:
    """
    Returns (down_payment, loan_amount, monthly P&I).
    A cash purchase carries no loan regardless of the other financing fields.
    """
    price = inp.acquisition.purchase_price
    fin = inp.financing

    if fin.is_cash_purchase:
        return price, 0.0, 0.0

    down_payment = price * (fin.down_payment_pct / 100.0)
    loan_amount = price - down_payment
    monthly_pi = monthly_principal_and_interest(
        principal=loan_amount,
        annual_rate_pct=fin.interest_rate,
        years=fin.loan_term_years,
    )
    return down_payment, loan_amount, monthly_pi


def calculate(inp: CalculationInput) -> CalculationResult:
    """
    Core underwriting brain for a short-term rental.

    Never raises on degenerate economics (zero price, zero occupancy, no
    debt...). Guarded ratios fall back to 0, and DSCR is +inf when there is
    no debt and NOI is positive.
    """
    acq = inp.acquisition
    income = inp.income
    purchase_price = acq.purchase_price

    # --- income side ---
    monthly_revenue, annual_revenue = _revenue(income.nightly_rate, income.occupancy_pct)

    # --- financing ---
    down_payment, loan_amount, monthly_pi = _loan(inp)
    annual_debt_service = monthly_pi * 12.0

    # --- operating expenses ---
    annual_expenses = sum(
        (
            normalize_to_annual(e, annual_revenue, income.nightly_rate, income.avg_stay_nights)
            for e in inp.expenses
        ),
        0.0,
    )

    # --- NOI / cash flow ---
    # NOI is income after operating expenses, BEFORE debt.
    noi = annual_revenue - annual_expenses
    total_cash_invested = down_payment + acq.closing_costs + acq.renovation
    annual_cash_flow = noi - annual_debt_service
    monthly_cash_flow = annual_cash_flow / 12.0

    cash_on_cash = annual_cash_flow / total_cash_invested if total_cash_invested > 0 else 0.0
    gross_yield = annual_revenue / purchase_price if purchase_price > 0 else 0.0
    cap_rate = noi / purchase_price if purchase_price > 0 else 0.0

    if annual_debt_service > 0:
        dscr = noi / annual_debt_service
    else:
        dscr = float("inf") if noi > 0 else 0.0

    # Share of calendar nights that must be booked to cover opex + debt
    break_even_occupancy = 0.0
    if income.nightly_rate > 0:
        break_even_occupancy = (annual_expenses + annual_debt_service) / (
            income.nightly_rate * DAYS_PER_YEAR
        )

    grm = purchase_price / annual_revenue if annual_revenue > 0 else 0.0
    price_per_door = purchase_price / inp.unit_count if inp.unit_count > 0 else purchase_price

    projection = project_ten_years(
        annual_revenue=annual_revenue,
        annual_expenses=annual_expenses,
        annual_debt_service=annual_debt_service,
        purchase_price=purchase_price,
        loan_amount=loan_amount,
        interest_rate=inp.financing.interest_rate,
        loan_term_years=inp.financing.loan_term_years,
        is_cash_purchase=inp.financing.is_cash_purchase,
        total_cash_invested=total_cash_invested,
    )

    return CalculationResult(
        monthly_revenue=monthly_revenue,
        annual_revenue=annual_revenue,
        monthly_pi=monthly_pi,
        annual_debt_service=annual_debt_service,
        loan_amount=loan_amount,
        down_payment=down_payment,
        annual_expenses=annual_expenses,
        noi=noi,
        total_cash_invested=total_cash_invested,
        cash_on_cash=cash_on_cash,
        gross_yield=gross_yield,
        cap_rate=cap_rate,
        dscr=dscr,
        monthly_cash_flow=monthly_cash_flow,
        annual_cash_flow=annual_cash_flow,
        break_even_occupancy=break_even_occupancy,
        grm=grm,
        price_per_door=price_per_door,
        ten_year_projection=projection.points,
        ten_year_net_return=projection.ten_year_net_return,
        cagr=projection.cagr,
    )
