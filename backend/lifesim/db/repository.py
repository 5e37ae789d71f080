"""Repository protocols and the SQL Server implementation.

The simulation and scoring code depend only on the protocols; the API wires
in SqlRepository over a pooled connection, tests use InMemoryRepository.
"""
from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Optional, Protocol

from lifesim.db.connection import transaction
from lifesim.db.queries import financial_data, health_scores, scenarios
from lifesim.models.account import Account, Investment, Transaction, UserProfile
from lifesim.models.health import Benchmark, FinancialHealthScore, HealthScoreRecord
from lifesim.models.scenario import SavedScenario, ScenarioTemplate
from lifesim.models.simulation import SimulationResult, SimulationSnapshot

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """A write failed and its transaction was rolled back."""


class FinancialDataReader(Protocol):
    def get_accounts(self, user_id: str) -> list[Account]: ...

    def get_recent_transactions(
        self, user_id: str, months: int, as_of: date,
    ) -> list[Transaction]: ...

    def get_investments(self, user_id: str) -> list[Investment]: ...

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]: ...


class ResultRepository(Protocol):
    def save_scenario(
        self,
        user_id: str,
        name: str,
        description: str,
        scenario_type: str,
        parameters: dict,
        result: SimulationResult,
        tags: list[str],
    ) -> str: ...

    def save_snapshots(self, scenario_id: str, snapshots: list[SimulationSnapshot]) -> None: ...

    def save_health_score(self, user_id: str, score: FinancialHealthScore) -> None: ...

    def list_saved_scenarios(self, user_id: str) -> list[SavedScenario]: ...

    def list_scenario_templates(self) -> list[ScenarioTemplate]: ...

    def get_score_history(self, user_id: str, limit: int = 12) -> list[HealthScoreRecord]: ...


class SqlRepository:
    """Reader, result store and benchmark provider over one DB-API connection."""

    def __init__(self, conn):
        self.conn = conn

    # -- reads --

    def get_accounts(self, user_id: str) -> list[Account]:
        return financial_data.get_accounts(self.conn, user_id)

    def get_recent_transactions(self, user_id: str, months: int, as_of: date) -> list[Transaction]:
        return financial_data.get_recent_transactions(self.conn, user_id, months, as_of)

    def get_investments(self, user_id: str) -> list[Investment]:
        return financial_data.get_investments(self.conn, user_id)

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        return financial_data.get_user_profile(self.conn, user_id)

    def list_saved_scenarios(self, user_id: str) -> list[SavedScenario]:
        return scenarios.list_saved_scenarios(self.conn, user_id)

    def list_scenario_templates(self) -> list[ScenarioTemplate]:
        return scenarios.list_scenario_templates(self.conn)

    def get_score_history(self, user_id: str, limit: int = 12) -> list[HealthScoreRecord]:
        return health_scores.get_score_history(self.conn, user_id, limit)

    def get_benchmark(self, age_group: str, income_bracket: str) -> Optional[Benchmark]:
        return health_scores.get_benchmark(self.conn, age_group, income_bracket)

    # -- writes --

    def _write(self, write) -> None:
        try:
            with transaction(self.conn) as cursor:
                write(cursor)
        except Exception as e:
            logger.error("Write rolled back: %s", e)
            raise PersistenceError(str(e)) from e

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
        """Store the scenario row and its snapshot series atomically."""
        scenario_id = str(uuid.uuid4())

        def write(cursor):
            scenarios.insert_scenario(
                cursor, scenario_id, user_id, name, description, scenario_type,
                parameters, result, tags, datetime.now(),
            )
            scenarios.insert_snapshots(cursor, scenario_id, result.snapshots)

        self._write(write)
        logger.info("Saved scenario %s (%s) for user %s", scenario_id, scenario_type, user_id)
        return scenario_id

    def save_snapshots(self, scenario_id: str, snapshots: list[SimulationSnapshot]) -> None:
        self._write(
            lambda cursor: scenarios.insert_snapshots(cursor, scenario_id, snapshots)
        )

    def save_health_score(self, user_id: str, score: FinancialHealthScore) -> None:
        """Supersede the user's current score with this one."""

        def write(cursor):
            health_scores.mark_scores_not_current(cursor, user_id)
            health_scores.insert_health_score(
                cursor, str(uuid.uuid4()), user_id, score, datetime.now(),
            )

        self._write(write)
