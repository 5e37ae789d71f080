import logging
from datetime import date

import pytest

from lifesim.db.memory import InMemoryRepository
from lifesim.db.repository import PersistenceError
from lifesim.models.scenario import ScenarioTemplate
from lifesim.services import health_score_service
from lifesim.services.simulation_service import (
    compare_scenarios,
    list_templates,
    load_baseline,
    run_user_simulation,
    save_user_scenario,
)
from lifesim.simulation.state_builder import FinancialState

AS_OF = date(2024, 6, 30)


class _BrokenReader:
    def get_accounts(self, user_id):
        raise ConnectionError("database unavailable")


class _FailingRepository(InMemoryRepository):
    def save_scenario(self, *args, **kwargs):
        raise PersistenceError("disk full")


def test_load_baseline_uses_lookback_window(memory_repo):
    baseline = load_baseline(memory_repo, "u1", AS_OF)
    assert baseline.monthly_income == pytest.approx(6000)
    assert baseline.monthly_expenses == pytest.approx(5100)
    assert baseline.monthly_debt_payments == pytest.approx(500)
    assert baseline.emergency_fund == 20_000


def test_load_baseline_read_failure_is_empty(caplog):
    with caplog.at_level(logging.WARNING):
        baseline = load_baseline(_BrokenReader(), "u1", AS_OF)
    assert baseline == FinancialState()
    assert "database unavailable" in caplog.text


def test_unknown_user_simulates_zero_baseline(memory_repo):
    result = run_user_simulation(memory_repo, "ghost", "JOB_LOSS", {}, AS_OF, 3)
    assert len(result.snapshots) == 4
    assert all(s.net_worth == 0 for s in result.snapshots)


def test_save_user_scenario_assigns_id(memory_repo):
    result = save_user_scenario(
        memory_repo, memory_repo, "u1", "Layoff", "", "JOB_LOSS",
        {"income_reduction_pct": 100}, ["career"], AS_OF, 12,
    )
    assert result.scenario_id in memory_repo.scenarios
    assert len(memory_repo.snapshots[result.scenario_id]) == 13
    assert memory_repo.list_saved_scenarios("u1")[0].name == "Layoff"


def test_save_user_scenario_propagates_persistence_error(user_data):
    repo = _FailingRepository(users={"u1": user_data})
    with pytest.raises(PersistenceError, match="disk full"):
        save_user_scenario(repo, repo, "u1", "Layoff", "", "JOB_LOSS", {}, None, AS_OF, 12)


def test_compare_scenarios_runs_each_kind_independently():
    baseline = FinancialState(
        total_assets=100_000, liquid_assets=30_000, emergency_fund=20_000, investment_balance=40_000,
        monthly_income=7000, monthly_expenses=5000,
    )
    results = compare_scenarios(
        baseline, ["JOB_LOSS", "market_downturn"], AS_OF, 12,
        {"JOB_LOSS": {"income_reduction_pct": 100}},
    )
    assert list(results) == ["JOB_LOSS", "MARKET_DOWNTURN"]
    assert results["JOB_LOSS"].snapshots[0].monthly_income == 0
    assert results["MARKET_DOWNTURN"].snapshots[0].investment_balance == pytest.approx(30_000)


def test_compare_defaults_to_every_kind():
    results = compare_scenarios(FinancialState(), None, AS_OF, 1)
    assert len(results) == 8


def test_templates_fall_back_to_builtins():
    assert len(list_templates(InMemoryRepository())) == 7
    stored = ScenarioTemplate(
        template_id="t1", name="Sabbatical", description="", scenario_type="JOB_LOSS",
    )
    assert list_templates(InMemoryRepository(templates=[stored])) == [stored]


def test_health_score_calculate_and_store(memory_repo):
    score = health_score_service.calculate_and_store(memory_repo, memory_repo, "u1", None, AS_OF)
    assert score.score == 94

    health_score_service.calculate_and_store(memory_repo, memory_repo, "u1", None, AS_OF)
    history = health_score_service.get_score_history(memory_repo, "u1")
    assert len(history) == 2
    assert [r.is_current for r in history] == [True, False]
