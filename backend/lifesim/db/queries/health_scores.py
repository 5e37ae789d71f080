import json
from datetime import datetime
from typing import Optional

from lifesim.db.connection import fetch_dicts
from lifesim.models.health import Benchmark, FinancialHealthScore, HealthScoreRecord

# Map component field names to SQL column names.
COMPONENT_COLUMNS = {
    "emergency_fund": "EmergencyFundScore",
    "debt_to_income": "DebtToIncomeScore",
    "credit_utilization": "CreditUtilizationScore",
    "investment_ratio": "InvestmentRatioScore",
    "income_consistency": "IncomeConsistencyScore",
    "retirement_contribution": "RetirementContributionScore",
    "budget_compliance": "BudgetComplianceScore",
}


def mark_scores_not_current(cursor, user_id: str) -> None:
    cursor.execute(
        "UPDATE FinancialHealthScores SET IsCurrent = 0 WHERE UserID = ? AND IsCurrent = 1",
        (user_id,),
    )


def insert_health_score(
    cursor,
    score_id: str,
    user_id: str,
    health: FinancialHealthScore,
    calculated_at: datetime,
) -> None:
    components = health.components.model_dump()
    columns = [
        "ScoreID", "UserID", "Score", "Grade", *COMPONENT_COLUMNS.values(),
        "Recommendations", "NationalAverageScore", "AgeGroupAverageScore",
        "PeerPercentile", "IsCurrent", "CalculatedAt",
    ]
    placeholders = ", ".join("?" for _ in columns)
    query = f"INSERT INTO FinancialHealthScores ({', '.join(columns)}) VALUES ({placeholders})"
    cursor.execute(query, (
        score_id,
        user_id,
        health.score,
        health.grade.value,
        *(components[field] for field in COMPONENT_COLUMNS),
        json.dumps(health.recommendations),
        health.benchmarks.national_average,
        health.benchmarks.age_group_average,
        health.benchmarks.peer_percentile,
        1,
        calculated_at.isoformat(),
    ))


def get_score_history(conn, user_id: str, limit: int = 12) -> list[HealthScoreRecord]:
    """Most recent scores first."""
    query = f"""
        SELECT UserID, Score, Grade, {', '.join(COMPONENT_COLUMNS.values())},
               Recommendations, NationalAverageScore, AgeGroupAverageScore,
               PeerPercentile, IsCurrent, CalculatedAt
        FROM FinancialHealthScores
        WHERE UserID = ?
        ORDER BY CalculatedAt DESC
    """
    cursor = conn.cursor()
    cursor.execute(query, (user_id,))
    rows = fetch_dicts(cursor, cursor.fetchmany(limit))
    return [
        HealthScoreRecord(
            user_id=row["UserID"],
            score=row["Score"],
            grade=row["Grade"],
            components={field: row[col] for field, col in COMPONENT_COLUMNS.items()},
            recommendations=json.loads(row["Recommendations"]) if row["Recommendations"] else [],
            benchmarks={
                "national_average": row["NationalAverageScore"],
                "age_group_average": row["AgeGroupAverageScore"],
                "peer_percentile": row["PeerPercentile"],
            },
            is_current=bool(row["IsCurrent"]),
            calculated_at=row["CalculatedAt"],
        )
        for row in rows
    ]


def get_benchmark(conn, age_group: str, income_bracket: str) -> Optional[Benchmark]:
    query = """
        SELECT AgeGroup, IncomeBracket, AvgHealthScore
        FROM FinancialBenchmarks
        WHERE AgeGroup = ? AND IncomeBracket = ?
    """
    cursor = conn.cursor()
    cursor.execute(query, (age_group, income_bracket))
    row = cursor.fetchone()
    if not row:
        return None
    return Benchmark(age_group=row[0], income_bracket=row[1], avg_health_score=row[2])
