"""Simulation orchestration service.

Loads a user's baseline through a FinancialDataReader, runs one or more
scenarios against it and optionally persists the result.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from lifesim.config import settings
from lifesim.db.repository import FinancialDataReader, ResultRepository
from lifesim.models.scenario import ScenarioKind, ScenarioTemplate
from lifesim.models.simulation import SimulationResult
from lifesim.simulation.engine import run_simulation
from lifesim.simulation.scenarios import DEFAULT_TEMPLATES, list_scenario_kinds
from lifesim.simulation.state_builder import FinancialState, build_financial_state

logger = logging.getLogger(__name__)


def load_baseline(reader: FinancialDataReader, user_id: str, as_of: date) -> FinancialState:
    """Build the user's month-0 state. Read failures yield an empty baseline."""
    lookback = settings.BASELINE_LOOKBACK_MONTHS
    try:
        accounts = reader.get_accounts(user_id)
        transactions = reader.get_recent_transactions(user_id, lookback, as_of)
        investments = reader.get_investments(user_id)
    except Exception as e:
        logger.warning("Could not read financial data for %s, using empty baseline: %s", user_id, e)
        return FinancialState()
    return build_financial_state(accounts, transactions, investments, lookback)


def run_user_simulation(
    reader: FinancialDataReader,
    user_id: str,
    scenario_type: str,
    parameters: dict[str, Any] | None,
    start_date: date | None = None,
    duration_months: int | None = None,
) -> SimulationResult:
    start_date = start_date or date.today()
    baseline = load_baseline(reader, user_id, start_date)
    return run_simulation(
        baseline,
        scenario_type,
        parameters,
        start_date,
        settings.DEFAULT_DURATION_MONTHS if duration_months is None else duration_months,
    )


def save_user_scenario(
    reader: FinancialDataReader,
    repository: ResultRepository,
    user_id: str,
    name: str,
    description: str,
    scenario_type: str,
    parameters: dict[str, Any] | None,
    tags: list[str] | None = None,
    start_date: date | None = None,
    duration_months: int | None = None,
) -> SimulationResult:
    """Run a scenario and store it with its snapshots.

    Raises PersistenceError if the write is rolled back.
    """
    result = run_user_simulation(
        reader, user_id, scenario_type, parameters, start_date, duration_months,
    )
    scenario_id = repository.save_scenario(
        user_id,
        name,
        description,
        result.scenario_type,
        parameters or {},
        result,
        tags or [],
    )
    return result.model_copy(update={"scenario_id": scenario_id})


def compare_scenarios(
    baseline: FinancialState,
    scenario_types: list[str | ScenarioKind] | None,
    start_date: date,
    duration_months: int = 60,
    parameters: dict[str, dict[str, Any]] | None = None,
) -> dict[str, SimulationResult]:
    """Run several scenarios against one baseline, keyed by scenario type.

    Kinds without supplied parameters run with their defaults. Omitting
    `scenario_types` compares every known kind.
    """
    parameters = parameters or {}
    kinds = scenario_types or list_scenario_kinds()
    results: dict[str, SimulationResult] = {}
    for kind in kinds:
        key = kind.value if isinstance(kind, ScenarioKind) else str(kind).upper()
        results[key] = run_simulation(
            baseline, kind, parameters.get(key), start_date, duration_months,
        )
    logger.info("Compared %d scenarios over %d months", len(results), duration_months)
    return results


def list_templates(repository: ResultRepository) -> list[ScenarioTemplate]:
    """Stored templates, or the built-in set when none are stored."""
    templates = repository.list_scenario_templates()
    return templates or list(DEFAULT_TEMPLATES)
