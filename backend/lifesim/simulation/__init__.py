"""Simulation engine: baseline state, scenario transitions and the monthly loop."""
from lifesim.simulation.amortization import loan_payment, mortgage_payment
from lifesim.simulation.engine import add_months, project_snapshots, run_simulation
from lifesim.simulation.scenarios import (
    DEFAULT_TEMPLATES,
    get_scenario,
    list_scenario_kinds,
    parse_parameters,
    resolve_kind,
)
from lifesim.simulation.state_builder import FinancialState, build_financial_state

__all__ = [
    "FinancialState",
    "build_financial_state",
    "DEFAULT_TEMPLATES",
    "get_scenario",
    "list_scenario_kinds",
    "parse_parameters",
    "resolve_kind",
    "mortgage_payment",
    "loan_payment",
    "add_months",
    "project_snapshots",
    "run_simulation",
]
