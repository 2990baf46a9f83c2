import pytest

from staymodel.analysis.finance import calculate
from staymodel.domain.amortization import remaining_balance
from staymodel.domain.projection import (
    APPRECIATION_RATE,
    EXPENSE_GROWTH_RATE,
    PROJECTION_YEARS,
    REVENUE_GROWTH_RATE,
)

from sample_deals.properties import baseline_input, cash_input, money_pit_input


def test_growth_policy_constants():
    assert (APPRECIATION_RATE, EXPENSE_GROWTH_RATE, REVENUE_GROWTH_RATE) == (0.03, 0.02, 0.03)
    assert PROJECTION_YEARS == 10


def test_projection_has_ten_ordered_years():
    proj = calculate(baseline_input()).ten_year_projection
    assert len(proj) == 10
    assert [p.year for p in proj] == list(range(1, 11))


def test_year_one_matches_single_year_figures():
    r = calculate(baseline_input())
    y1 = r.ten_year_projection[0]
    assert y1.revenue == pytest.approx(r.annual_revenue)
    assert y1.expenses == pytest.approx(r.annual_expenses)
    assert y1.noi == pytest.approx(r.noi)
    assert y1.cash_flow == pytest.approx(r.annual_cash_flow)
    assert y1.cumulative_cash_flow == pytest.approx(r.annual_cash_flow)
    # value appreciates from day one
    assert y1.property_value == pytest.approx(300_000 * 1.03)


def test_growth_rates_and_flat_debt_service():
    r = calculate(baseline_input())
    y10 = r.ten_year_projection[9]
    assert y10.revenue == pytest.approx(r.annual_revenue * 1.03**9)
    assert y10.expenses == pytest.approx(r.annual_expenses * 1.02**9)
    assert y10.property_value == pytest.approx(300_000 * 1.03**10)
    assert all(p.debt_service == r.annual_debt_service for p in r.ten_year_projection)


def test_property_value_strictly_increases():
    values = [p.property_value for p in calculate(baseline_input()).ten_year_projection]
    assert all(a < b for a, b in zip(values, values[1:]))


def test_cumulative_cash_flow_is_running_total():
    proj = calculate(baseline_input()).ten_year_projection
    running = 0.0
    for p in proj:
        running += p.cash_flow
        assert p.cumulative_cash_flow == pytest.approx(running)
    assert proj[9].cumulative_cash_flow > proj[0].cumulative_cash_flow


def test_equity_is_value_minus_amortized_balance():
    r = calculate(baseline_input())
    for p in r.ten_year_projection:
        balance = remaining_balance(240_000, 7, 360, p.year * 12)
        assert p.equity == pytest.approx(p.property_value - balance)


def test_cash_purchase_equity_is_full_value():
    for p in calculate(cash_input()).ten_year_projection:
        assert p.equity == p.property_value


def test_ten_year_net_return_and_cagr():
    r = calculate(baseline_input())
    y10 = r.ten_year_projection[9]
    expected_net = y10.cumulative_cash_flow + y10.equity - r.total_cash_invested
    assert r.ten_year_net_return == pytest.approx(expected_net)

    ending = r.total_cash_invested + r.ten_year_net_return
    assert r.cagr == pytest.approx((ending / r.total_cash_invested) ** 0.1 - 1)
    assert r.cagr > 0


def test_negative_ending_value_reports_zero_cagr():
    r = calculate(money_pit_input())
    assert r.total_cash_invested + r.ten_year_net_return < 0
    assert r.cagr == 0


def test_short_loan_equity_uses_balance_formula_past_term():
    inp = baseline_input(financing=baseline_input().financing.model_copy(update={"loan_term_years": 5}))
    r = calculate(inp)
    proj = r.ten_year_projection

    assert proj[4].equity == pytest.approx(proj[4].property_value, abs=1e-6 * r.loan_amount)
    for p in proj[5:]:
        balance = remaining_balance(r.loan_amount, 7, 60, p.year * 12)
        assert balance < 0
        assert p.equity == pytest.approx(p.property_value - balance)

    final = proj[-1]
    assert r.ten_year_net_return == pytest.approx(
        final.cumulative_cash_flow + final.equity - r.total_cash_invested
    )
