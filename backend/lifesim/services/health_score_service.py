"""Health score orchestration: read a user's finances, score them, store the result."""
from __future__ import annotations

from datetime import date

from lifesim.config import settings
from lifesim.db.repository import FinancialDataReader, ResultRepository
from lifesim.models.account import UserFinancialData
from lifesim.models.health import FinancialHealthScore, HealthScoreRecord
from lifesim.scoring.benchmarks import BenchmarkProvider
from lifesim.scoring.calculator import calculate_health_score


def load_financial_data(reader: FinancialDataReader, user_id: str, as_of: date) -> UserFinancialData:
    return UserFinancialData(
        accounts=reader.get_accounts(user_id),
        transactions=reader.get_recent_transactions(
            user_id, settings.HEALTH_LOOKBACK_MONTHS, as_of,
        ),
        investments=reader.get_investments(user_id),
        profile=reader.get_user_profile(user_id),
    )


def calculate_and_store(
    reader: FinancialDataReader,
    repository: ResultRepository,
    user_id: str,
    benchmark_provider: BenchmarkProvider | None = None,
    as_of: date | None = None,
) -> FinancialHealthScore:
    """Score the user and make the result their current score."""
    as_of = as_of or date.today()
    data = load_financial_data(reader, user_id, as_of)
    score = calculate_health_score(data, benchmark_provider, as_of)
    repository.save_health_score(user_id, score)
    return score


def get_score_history(
    repository: ResultRepository, user_id: str, limit: int = 12,
) -> list[HealthScoreRecord]:
    return repository.get_score_history(user_id, limit)
