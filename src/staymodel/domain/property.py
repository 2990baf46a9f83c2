from pydantic import BaseModel, ConfigDict, Field

from staymodel.domain.expenses import ExpenseItem


class AcquisitionCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    purchase_price: float = Field(..., description="Purchase price ($)")
    closing_costs: float = Field(0.0, description="Closing costs ($)")
    renovation: float = Field(0.0, description="Up-front renovation / furnishing ($)")


class FinancingTerms(BaseModel):
    """
    Fixed-rate loan terms. Percentages use the 0-100 scale (20 means 20% down).

    For a cash purchase every other field is ignored and the down payment is
    the whole purchase price.
    """
    model_config = ConfigDict(frozen=True)

    down_payment_pct: float = Field(20.0, description="e.g. 20 for 20% down")
    interest_rate: float = Field(7.0, description="Annual rate, e.g. 7.0 for 7% APR")
    loan_term_years: int = Field(30, description="Amortization period in years")
    is_cash_purchase: bool = False


class IncomeAssumption(BaseModel):
    model_config = ConfigDict(frozen=True)

    nightly_rate: float = Field(..., description="Average nightly rate ($)")
    occupancy_pct: float = Field(65.0, description="e.g. 65 for 65% of nights booked")
    avg_stay_nights: float = Field(3.0, description="Average length of stay (nights)")


class CalculationInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    acquisition: AcquisitionCost
    financing: FinancingTerms
    income: IncomeAssumption
    expenses: tuple[ExpenseItem, ...] = ()
    unit_count: int = 1
