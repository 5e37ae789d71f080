"""Scenario registry: maps scenario kinds to transitions and parameter models.

Unknown scenario names resolve to CUSTOM so a run never fails on kind.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from lifesim.models.scenario import (
    CustomParameters,
    HomePurchaseParameters,
    JobLossParameters,
    MarketDownturnParameters,
    MarriageParameters,
    NewBabyParameters,
    ScenarioKind,
    ScenarioParameters,
    ScenarioTemplate,
    StartBusinessParameters,
    VehiclePurchaseParameters,
)
from lifesim.simulation import state_transitions
from lifesim.simulation.state_builder import FinancialState

logger = logging.getLogger(__name__)

Transition = Callable[[FinancialState, FinancialState, Any, int], FinancialState]


@dataclass(frozen=True)
class ScenarioDefinition:
    """Transition function plus the parameter model it expects."""
    kind: ScenarioKind
    transition: Transition
    parameters_model: type


_SCENARIOS: dict[ScenarioKind, ScenarioDefinition] = {
    ScenarioKind.JOB_LOSS: ScenarioDefinition(
        ScenarioKind.JOB_LOSS, state_transitions.job_loss, JobLossParameters,
    ),
    ScenarioKind.MARKET_DOWNTURN: ScenarioDefinition(
        ScenarioKind.MARKET_DOWNTURN, state_transitions.market_downturn, MarketDownturnParameters,
    ),
    ScenarioKind.HOME_PURCHASE: ScenarioDefinition(
        ScenarioKind.HOME_PURCHASE, state_transitions.home_purchase, HomePurchaseParameters,
    ),
    ScenarioKind.VEHICLE_PURCHASE: ScenarioDefinition(
        ScenarioKind.VEHICLE_PURCHASE, state_transitions.vehicle_purchase, VehiclePurchaseParameters,
    ),
    ScenarioKind.MARRIAGE: ScenarioDefinition(
        ScenarioKind.MARRIAGE, state_transitions.marriage, MarriageParameters,
    ),
    ScenarioKind.NEW_BABY: ScenarioDefinition(
        ScenarioKind.NEW_BABY, state_transitions.new_baby, NewBabyParameters,
    ),
    ScenarioKind.START_BUSINESS: ScenarioDefinition(
        ScenarioKind.START_BUSINESS, state_transitions.start_business, StartBusinessParameters,
    ),
    ScenarioKind.CUSTOM: ScenarioDefinition(
        ScenarioKind.CUSTOM, state_transitions.custom, CustomParameters,
    ),
}


def resolve_kind(name: str | ScenarioKind) -> ScenarioKind:
    """Return the ScenarioKind for a name. Defaults to CUSTOM if unknown."""
    if isinstance(name, ScenarioKind):
        return name
    try:
        return ScenarioKind(str(name).upper())
    except ValueError:
        logger.info("Unknown scenario type %r, simulating as CUSTOM", name)
        return ScenarioKind.CUSTOM


def get_scenario(name: str | ScenarioKind) -> ScenarioDefinition:
    return _SCENARIOS[resolve_kind(name)]


def parse_parameters(
    name: str | ScenarioKind, raw: dict[str, Any] | ScenarioParameters | None,
) -> ScenarioParameters:
    """Validate raw parameters into the model for this scenario kind.

    Missing fields take their documented defaults; unrelated fields are ignored.
    """
    model = get_scenario(name).parameters_model
    if isinstance(raw, model):
        return raw
    if raw is None:
        return model()
    if not isinstance(raw, dict):
        raw = raw.model_dump()
    return model.model_validate(raw)


def list_scenario_kinds() -> list[ScenarioKind]:
    return list(_SCENARIOS.keys())


DEFAULT_TEMPLATES: list[ScenarioTemplate] = [
    ScenarioTemplate(
        template_id="job-loss",
        name="Job Loss",
        description="Simulate unemployment and recovery",
        scenario_type=ScenarioKind.JOB_LOSS,
        default_parameters={
            "income_reduction_pct": 100,
            "unemployment_benefits": True,
            "severance_months": 2,
        },
    ),
    ScenarioTemplate(
        template_id="market-downturn",
        name="Market Downturn",
        description="Portfolio drawdown followed by a gradual recovery",
        scenario_type=ScenarioKind.MARKET_DOWNTURN,
        default_parameters={"portfolio_drop_pct": 25, "recovery_months": 18},
    ),
    ScenarioTemplate(
        template_id="home-purchase",
        name="Home Purchase",
        description="Plan for buying a home",
        scenario_type=ScenarioKind.HOME_PURCHASE,
        default_parameters={
            "home_price": 400_000,
            "down_payment_pct": 20,
            "mortgage_rate_pct": 6.5,
            "mortgage_years": 30,
        },
    ),
    ScenarioTemplate(
        template_id="vehicle-purchase",
        name="Vehicle Purchase",
        description="Finance a new car",
        scenario_type=ScenarioKind.VEHICLE_PURCHASE,
        default_parameters={
            "vehicle_price": 35_000,
            "down_payment": 5_000,
            "loan_rate_pct": 5,
            "loan_term_months": 60,
        },
    ),
    ScenarioTemplate(
        template_id="marriage",
        name="Marriage",
        description="Combine finances with a spouse",
        scenario_type=ScenarioKind.MARRIAGE,
        default_parameters={"wedding_cost": 30_000},
    ),
    ScenarioTemplate(
        template_id="new-baby",
        name="New Baby",
        description="Parental leave, medical bills and childcare",
        scenario_type=ScenarioKind.NEW_BABY,
        default_parameters={
            "medical_costs": 5_000,
            "parental_leave_weeks": 12,
            "reduced_income_pct": 50,
            "monthly_childcare": 1_200,
        },
    ),
    ScenarioTemplate(
        template_id="start-business",
        name="Start a Business",
        description="Leave salaried work to launch a company",
        scenario_type=ScenarioKind.START_BUSINESS,
        default_parameters={
            "startup_costs": 25_000,
            "monthly_business_expenses": 2_000,
            "salary_reduction_pct": 100,
        },
    ),
]
