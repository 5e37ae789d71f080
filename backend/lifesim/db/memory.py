"""Dict-backed repository for tests and local runs without a database."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from lifesim.models.account import (
    Account,
    Investment,
    Transaction,
    UserFinancialData,
    UserProfile,
)
from lifesim.models.health import Benchmark, FinancialHealthScore, HealthScoreRecord
from lifesim.models.scenario import SavedScenario, ScenarioTemplate
from lifesim.models.simulation import SimulationResult, SimulationSnapshot
from lifesim.simulation.engine import add_months


class InMemoryRepository:
    def __init__(
        self,
        users: dict[str, UserFinancialData] | None = None,
        templates: list[ScenarioTemplate] | None = None,
        benchmarks: list[Benchmark] | None = None,
    ):
        self.users: dict[str, UserFinancialData] = users or {}
        self.templates: list[ScenarioTemplate] = templates or []
        self.benchmarks = {(b.age_group, b.income_bracket): b for b in benchmarks or []}
        self.scenarios: dict[str, SavedScenario] = {}
        self.snapshots: dict[str, list[SimulationSnapshot]] = {}
        self.scores: list[HealthScoreRecord] = []

    def _user(self, user_id: str) -> UserFinancialData:
        return self.users.get(user_id) or UserFinancialData()

    def get_accounts(self, user_id: str) -> list[Account]:
        return list(self._user(user_id).accounts)

    def get_recent_transactions(self, user_id: str, months: int, as_of: date) -> list[Transaction]:
        start = add_months(as_of, -months)
        return [t for t in self._user(user_id).transactions if t.date >= start]

    def get_investments(self, user_id: str) -> list[Investment]:
        return list(self._user(user_id).investments)

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._user(user_id).profile

    def get_benchmark(self, age_group: str, income_bracket: str) -> Optional[Benchmark]:
        return self.benchmarks.get((age_group, income_bracket))

    def save_scenario(
        self,
        user_id: str,
        name: str,
        description: str,
        scenario_type: str,
        parameters: dict,
        result: SimulationResult,
        tags: list[str],
    ) -> str:
        scenario_id = str(uuid.uuid4())
        self.scenarios[scenario_id] = SavedScenario(
            scenario_id=scenario_id,
            user_id=user_id,
            name=name,
            description=description,
            scenario_type=scenario_type,
            parameters=parameters,
            tags=tags,
            impact_on_net_worth=result.impact_on_net_worth,
            impact_on_cash_flow=result.impact_on_cash_flow,
            new_health_score=result.new_health_score,
            risk_level=result.risk_level.value,
            created_at=datetime.now(),
        )
        self.snapshots[scenario_id] = list(result.snapshots)
        return scenario_id

    def save_snapshots(self, scenario_id: str, snapshots: list[SimulationSnapshot]) -> None:
        self.snapshots.setdefault(scenario_id, []).extend(snapshots)

    def save_health_score(self, user_id: str, score: FinancialHealthScore) -> None:
        for record in self.scores:
            if record.user_id == user_id:
                record.is_current = False
        self.scores.append(HealthScoreRecord(
            **score.model_dump(), user_id=user_id, calculated_at=datetime.now(), is_current=True,
        ))

    def list_saved_scenarios(self, user_id: str) -> list[SavedScenario]:
        saved = [s for s in self.scenarios.values() if s.user_id == user_id]
        return sorted(saved, key=lambda s: s.created_at, reverse=True)

    def list_scenario_templates(self) -> list[ScenarioTemplate]:
        return sorted(self.templates, key=lambda t: t.name)

    def get_score_history(self, user_id: str, limit: int = 12) -> list[HealthScoreRecord]:
        history = [r for r in self.scores if r.user_id == user_id]
        return list(reversed(history))[:limit]
