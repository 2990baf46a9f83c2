import math

import pytest

from staymodel.adapters.memory_repo import InMemoryFinancialsRepository
from staymodel.analysis.finance import calculate
from staymodel.domain.metrics import reduce_portfolio
from staymodel.services.comparison import best_by, compare_properties
from staymodel.services.portfolio import NOT_FOUND, compute_many, summarize_portfolio

from sample_deals.properties import baseline_input, cash_input, money_pit_input


@pytest.fixture
def repo():
    return InMemoryFinancialsRepository(
        {
            "cabin": baseline_input(),
            "condo": cash_input(),
            "empty-lot": None,
        }
    )


def test_reduce_portfolio_totals():
    a, b = calculate(baseline_input()), calculate(cash_input())
    s = reduce_portfolio([a, b])

    assert s.property_count == 2
    assert s.total_revenue == pytest.approx((a.monthly_revenue + b.monthly_revenue) * 12)
    assert s.total_cash_flow == pytest.approx((a.monthly_cash_flow + b.monthly_cash_flow) * 12)
    assert s.total_noi == pytest.approx(a.noi + b.noi)
    assert s.total_invested == pytest.approx(84_000 + 324_000)
    assert s.cash_on_cash == pytest.approx(s.total_cash_flow / s.total_invested)

    # the all-cash deal's infinite DSCR is left out of the stats
    assert s.mean_dscr == pytest.approx(a.dscr)
    assert s.p50_coc == pytest.approx((a.cash_on_cash + b.cash_on_cash) / 2)


def test_reduce_empty_portfolio():
    s = reduce_portfolio([])
    assert s.property_count == 0
    assert s.total_invested == 0
    assert s.cash_on_cash == 0
    assert math.isnan(s.mean_dscr) and math.isnan(s.p95_coc)


def test_compute_many_keeps_order_and_reports_missing(repo):
    outcomes = compute_many(repo, ["empty-lot", "cabin", "nope", "condo"], workers=3)
    assert [o.property_id for o in outcomes] == ["empty-lot", "cabin", "nope", "condo"]
    assert outcomes[0].error == NOT_FOUND and outcomes[0].result is None
    assert outcomes[2].error == NOT_FOUND
    assert outcomes[1].result == calculate(baseline_input())
    assert compute_many(repo, []) == []


def test_summarize_portfolio_skips_properties_without_financials(repo):
    summary, outcomes = summarize_portfolio(repo, workers=2)
    assert len(outcomes) == 3
    assert summary.property_count == 2
    assert summary.total_invested == pytest.approx(408_000)


def test_summarize_selected_ids(repo):
    summary, outcomes = summarize_portfolio(repo, ["cabin"])
    assert [o.property_id for o in outcomes] == ["cabin"]
    assert summary.total_noi == pytest.approx(calculate(baseline_input()).noi)


def test_compare_properties(repo):
    repo.put("pit", money_pit_input())
    rows = compare_properties(repo, ["cabin", "condo", "pit", "missing"])

    assert [r.property_id for r in rows] == ["cabin", "condo", "pit", "missing"]
    assert rows[3].error == NOT_FOUND

    assert best_by(rows, "cash_on_cash") == "cabin"
    assert best_by(rows, "dscr") == "condo"
    # lower is better for break-even occupancy
    assert best_by(rows[:2], "break_even_occupancy") == "condo"


def test_compare_requires_ids(repo):
    with pytest.raises(ValueError):
        compare_properties(repo, [])


def test_best_by_unknown_metric_and_no_candidates(repo):
    rows = compare_properties(repo, ["empty-lot"])
    assert best_by(rows, "cap_rate") is None
    with pytest.raises(ValueError):
        best_by(rows, "vibes")
