from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Grade(str, Enum):
    A = "A"  # 90+
    B = "B"  # 80-89
    C = "C"  # 70-79
    D = "D"  # 60-69
    F = "F"


class HealthScoreComponents(BaseModel):
    emergency_fund: float
    debt_to_income: float
    credit_utilization: float
    investment_ratio: float
    income_consistency: float
    retirement_contribution: float
    budget_compliance: float


class Benchmark(BaseModel):
    """Peer average for one age group and income bracket."""
    age_group: str
    income_bracket: str
    avg_health_score: float


class Benchmarks(BaseModel):
    national_average: float
    age_group_average: float
    peer_percentile: float


class FinancialHealthScore(BaseModel):
    score: int
    grade: Grade
    components: HealthScoreComponents
    recommendations: list[str] = []
    benchmarks: Benchmarks


class HealthScoreRecord(FinancialHealthScore):
    """A persisted score; only the latest per user is current."""
    user_id: str
    calculated_at: Optional[datetime] = None
    is_current: bool = True
