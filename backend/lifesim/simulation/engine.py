"""Monthly scenario simulation engine.

Steps a baseline FinancialState through a scenario's transition once per
month and records a SimulationSnapshot after each step. Runs are
deterministic: the same baseline, scenario and start date always produce the
same series.
"""
from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Any

from lifesim.models.scenario import ScenarioKind, ScenarioParameters
from lifesim.models.simulation import SimulationResult, SimulationSnapshot
from lifesim.simulation.analysis import (
    analyze_simulation,
    assess_risk_level,
    calculate_impact,
    snapshot_health_score,
)
from lifesim.simulation.scenarios import get_scenario, parse_parameters
from lifesim.simulation.state_builder import FinancialState

logger = logging.getLogger(__name__)


def add_months(start: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping to the month's last day."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def take_snapshot(state: FinancialState, snapshot_date: date, month: int) -> SimulationSnapshot:
    """Project a state into a snapshot with its derived ratios."""
    emergency_fund_months = (
        state.emergency_fund / state.monthly_expenses if state.monthly_expenses > 0 else 0.0
    )
    debt_to_income = (
        state.monthly_debt_payments / state.monthly_income if state.monthly_income > 0 else 0.0
    )
    return SimulationSnapshot(
        date=snapshot_date,
        months_from_start=month,
        net_worth=state.net_worth,
        total_assets=state.total_assets,
        total_liabilities=state.total_liabilities,
        liquid_assets=state.liquid_assets,
        emergency_fund=state.emergency_fund,
        monthly_income=state.monthly_income,
        monthly_expenses=state.monthly_expenses,
        monthly_debt_payments=state.monthly_debt_payments,
        cash_flow=state.cash_flow,
        emergency_fund_months=emergency_fund_months,
        debt_to_income_ratio=debt_to_income,
        investment_balance=state.investment_balance,
        retirement_balance=state.retirement_balance,
    )


def project_snapshots(
    baseline: FinancialState,
    scenario_type: str | ScenarioKind,
    parameters: ScenarioParameters,
    start_date: date,
    duration_months: int,
) -> list[SimulationSnapshot]:
    """Run the monthly loop for months 0..duration_months inclusive."""
    transition = get_scenario(scenario_type).transition
    state = baseline
    snapshots: list[SimulationSnapshot] = []
    for month in range(duration_months + 1):
        state = transition(state, baseline, parameters, month)
        snapshots.append(take_snapshot(state, add_months(start_date, month), month))
    return snapshots


def run_simulation(
    baseline: FinancialState,
    scenario_type: str | ScenarioKind,
    parameters: dict[str, Any] | ScenarioParameters | None,
    start_date: date,
    duration_months: int = 60,
) -> SimulationResult:
    """Simulate a scenario from a baseline and analyse the outcome.

    Unknown scenario types are simulated as CUSTOM.
    """
    if duration_months < 0:
        raise ValueError(f"duration_months must be non-negative, got {duration_months}")

    scenario = get_scenario(scenario_type)
    params = parse_parameters(scenario.kind, parameters)
    snapshots = project_snapshots(baseline, scenario.kind, params, start_date, duration_months)

    impact_on_net_worth, impact_on_cash_flow = calculate_impact(snapshots)
    warnings, opportunities = analyze_simulation(snapshots, scenario.kind)
    result = SimulationResult(
        scenario_type=scenario.kind.value,
        snapshots=snapshots,
        impact_on_net_worth=impact_on_net_worth,
        impact_on_cash_flow=impact_on_cash_flow,
        new_health_score=snapshot_health_score(snapshots[-1]),
        risk_level=assess_risk_level(snapshots),
        warnings=warnings,
        opportunities=opportunities,
    )
    logger.debug(
        "Simulated %s over %d months: risk=%s, net worth impact=%.2f",
        scenario.kind.value, duration_months, result.risk_level.value, impact_on_net_worth,
    )
    return result
