# src/staymodel/domain/amortization.py
"""
Fixed-rate, level-payment loan math.

Rates are annual whole-number percents (7.0 means 7% APR).
"""


def _monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100.0 / 12.0


def monthly_principal_and_interest(principal: float, annual_rate_pct: float, years: int) -> float:
    """
    Standard fixed-rate amortization formula:
    M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
    P = loan principal
    r = monthly interest rate
    n = number of payments (months)

    Zero/negative principal or term -> 0. Zero/negative rate -> straight-line.
    """
    if principal <= 0 or years <= 0:
        return 0.0

    n = years * 12
    if annual_rate_pct <= 0:
        return principal / n

    r = _monthly_rate(annual_rate_pct)
    growth = (1 + r) ** n
    if growth == 1.0:
        # rate too small to register in floating point
        return principal / n
    return principal * (r * growth) / (growth - 1)


def remaining_balance(
    principal: float,
    annual_rate_pct: float,
    total_months: int,
    months_paid: int,
) -> float:
    """
    Outstanding balance after `months_paid` level payments:
    B = P * ((1+r)^N - (1+r)^k) / ((1+r)^N - 1)

    The amortizing formula is applied as-is for any k, so k > N goes negative.
    """
    if total_months <= 0:
        # nothing amortizes on a zero-length schedule
        return max(0.0, principal)

    if principal <= 0 or annual_rate_pct <= 0:
        return max(0.0, principal - (principal / total_months) * months_paid)

    r = _monthly_rate(annual_rate_pct)
    factor = (1 + r) ** total_months
    factor_paid = (1 + r) ** months_paid
    if factor == 1.0:
        return max(0.0, principal - (principal / total_months) * months_paid)
    return principal * (factor - factor_paid) / (factor - 1)
