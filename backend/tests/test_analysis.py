from datetime import date

import pytest

from lifesim.models.scenario import ScenarioKind
from lifesim.models.simulation import RiskLevel
from lifesim.simulation.analysis import (
    analyze_simulation,
    assess_risk_level,
    calculate_impact,
    snapshot_health_score,
)
from lifesim.simulation.engine import take_snapshot
from lifesim.simulation.state_builder import FinancialState


def _make_snapshot(month=0, **state):
    return take_snapshot(FinancialState(**state), date(2024, 1, 1), month)


def test_risk_low_for_comfortable_position():
    snap = _make_snapshot(
        emergency_fund=12_000, monthly_income=5000, monthly_expenses=1000, monthly_debt_payments=500,
    )
    assert assess_risk_level([snap]) == RiskLevel.LOW


def test_risk_most_severe_tier_wins():
    # Positive cash flow and no debt, but only half a month of savings
    snap = _make_snapshot(emergency_fund=500, monthly_income=5000, monthly_expenses=1000)
    assert assess_risk_level([snap]) == RiskLevel.CRITICAL


def test_risk_high_and_moderate_tiers():
    high = _make_snapshot(emergency_fund=2000, monthly_income=5000, monthly_expenses=1000)
    moderate = _make_snapshot(emergency_fund=4000, monthly_income=5000, monthly_expenses=1000)
    assert assess_risk_level([high]) == RiskLevel.HIGH
    assert assess_risk_level([moderate]) == RiskLevel.MODERATE


def test_risk_uses_final_snapshot():
    bad = _make_snapshot(month=0, emergency_fund=0, monthly_expenses=1000)
    good = _make_snapshot(month=1, emergency_fund=12_000, monthly_income=5000, monthly_expenses=1000)
    assert assess_risk_level([bad, good]) == RiskLevel.LOW


def test_impact_uses_three_month_averages():
    snaps = [
        _make_snapshot(month=m, total_assets=1000 * m, monthly_income=1000 + 100 * m)
        for m in range(6)
    ]
    net_worth, cash_flow = calculate_impact(snaps)
    assert net_worth == 5000
    assert cash_flow == 300  # mean(1300..1500) - mean(1000..1200)


def test_impact_with_short_series_uses_available_months():
    snaps = [_make_snapshot(month=m, monthly_income=1000 * (m + 1)) for m in range(2)]
    assert calculate_impact(snaps) == (0.0, 0.0)


def test_warnings_for_deteriorating_run():
    snaps = [
        _make_snapshot(month=0, total_assets=1000, monthly_income=5000, monthly_expenses=4000),
        _make_snapshot(month=1, total_liabilities=5000, monthly_income=1000, monthly_expenses=4000,
                       monthly_debt_payments=600),
    ]
    warnings, opportunities = analyze_simulation(snaps, ScenarioKind.CUSTOM)
    assert warnings == [
        "Emergency fund will drop below 3 months of expenses",
        "Monthly expenses will exceed income",
        "Debt-to-income ratio will exceed recommended 36%",
        "Net worth will be negative for 1 months",
    ]
    assert opportunities == []


def test_opportunities_for_home_purchase():
    snaps = [
        _make_snapshot(month=0, total_assets=100_000, investment_balance=10_000,
                       monthly_income=5000, monthly_expenses=4000),
        _make_snapshot(month=1, total_assets=150_000, investment_balance=20_000,
                       monthly_income=6000, monthly_expenses=4000),
    ]
    _, opportunities = analyze_simulation(snaps, ScenarioKind.HOME_PURCHASE)
    assert opportunities == [
        "Cash flow improves significantly over time",
        "Investment portfolio shows strong growth",
        "Home equity builds wealth despite initial costs",
    ]


def test_zero_baseline_raises_no_opportunities():
    snaps = [_make_snapshot(month=m) for m in range(3)]
    _, opportunities = analyze_simulation(snaps, ScenarioKind.CUSTOM)
    assert opportunities == []


def test_snapshot_health_score_bounds():
    strong = _make_snapshot(
        total_assets=100_000, investment_balance=40_000, emergency_fund=30_000,
        monthly_income=10_000, monthly_expenses=5000,
    )
    assert snapshot_health_score(strong) == 95
    assert 0 <= snapshot_health_score(_make_snapshot()) <= 100


def test_impact_is_not_rounded():
    snaps = [
        _make_snapshot(month=0, total_assets=100.0),
        _make_snapshot(month=1, total_assets=100.004),
    ]
    net_worth, _ = calculate_impact(snaps)
    assert net_worth == pytest.approx(0.004)
    assert net_worth != 0.0
