"""Post-run diagnostics over a snapshot series.

Impact deltas, terminal risk tier, narrative warnings/opportunities, and a
coarse health score for the projected end state.
"""
from __future__ import annotations

from lifesim.models.scenario import ScenarioKind
from lifesim.models.simulation import RiskLevel, SimulationSnapshot

_ROLLING_WINDOW = 3

# (emergency fund months below, cash flow below, DTI above) per tier, checked in order
_RISK_TIERS: list[tuple[RiskLevel, float, float, float]] = [
    (RiskLevel.CRITICAL, 1.0, -1000.0, 0.50),
    (RiskLevel.HIGH, 3.0, 0.0, 0.36),
    (RiskLevel.MODERATE, 6.0, 500.0, 0.28),
]


def _mean_cash_flow(snapshots: list[SimulationSnapshot]) -> float:
    return sum(s.cash_flow for s in snapshots) / len(snapshots)


def calculate_impact(snapshots: list[SimulationSnapshot]) -> tuple[float, float]:
    """Return (net worth impact, cash flow impact) between start and end.

    Cash flow is compared on 3-month averages to damp one-off months.
    """
    first, last = snapshots[0], snapshots[-1]
    impact_on_net_worth = last.net_worth - first.net_worth
    impact_on_cash_flow = (
        _mean_cash_flow(snapshots[-_ROLLING_WINDOW:])
        - _mean_cash_flow(snapshots[:_ROLLING_WINDOW])
    )
    return impact_on_net_worth, impact_on_cash_flow


def assess_risk_level(snapshots: list[SimulationSnapshot]) -> RiskLevel:
    """Classify the final month; the most severe matching tier wins."""
    final = snapshots[-1]
    for level, min_fund_months, min_cash_flow, max_dti in _RISK_TIERS:
        if (
            final.emergency_fund_months < min_fund_months
            or final.cash_flow < min_cash_flow
            or final.debt_to_income_ratio > max_dti
        ):
            return level
    return RiskLevel.LOW


def analyze_simulation(
    snapshots: list[SimulationSnapshot], kind: ScenarioKind,
) -> tuple[list[str], list[str]]:
    """Return (warnings, opportunities) for a finished run."""
    warnings: list[str] = []
    opportunities: list[str] = []
    first, final = snapshots[0], snapshots[-1]

    if final.emergency_fund_months < 3:
        warnings.append("Emergency fund will drop below 3 months of expenses")
    if final.cash_flow < 0:
        warnings.append("Monthly expenses will exceed income")
    if final.debt_to_income_ratio > 0.36:
        warnings.append("Debt-to-income ratio will exceed recommended 36%")

    negative_months = sum(1 for s in snapshots if s.net_worth < 0)
    if negative_months > 0:
        warnings.append(f"Net worth will be negative for {negative_months} months")

    if final.cash_flow > first.cash_flow * 1.2:
        opportunities.append("Cash flow improves significantly over time")
    if final.investment_balance > first.investment_balance * 1.5:
        opportunities.append("Investment portfolio shows strong growth")
    if kind == ScenarioKind.HOME_PURCHASE and final.net_worth > first.net_worth:
        opportunities.append("Home equity builds wealth despite initial costs")

    return warnings, opportunities


def snapshot_health_score(snapshot: SimulationSnapshot) -> int:
    """Five 20-point bands scored on a single projected month."""
    score = 0.0

    months = snapshot.emergency_fund_months
    if months >= 6:
        score += 20
    elif months >= 3:
        score += 15
    else:
        score += months / 3 * 15

    dti = snapshot.debt_to_income_ratio
    if dti <= 0.2:
        score += 20
    elif dti <= 0.36:
        score += 15
    elif dti <= 0.5:
        score += 10
    else:
        score += 5

    cash_flow_ratio = snapshot.cash_flow / max(snapshot.monthly_income, 1.0)
    if cash_flow_ratio >= 0.2:
        score += 20
    elif cash_flow_ratio >= 0.1:
        score += 15
    elif cash_flow_ratio >= 0:
        score += 10
    else:
        score += 5

    score += 15 if snapshot.net_worth > 0 else 5

    investment_ratio = snapshot.investment_balance / max(snapshot.total_assets, 1.0)
    if investment_ratio >= 0.3:
        score += 20
    else:
        score += investment_ratio * 66.67

    return round(score)
