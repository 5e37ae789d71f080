"""Financial health score: weighted composite of seven components.

Weights sum to 1.0. The overall score is rounded to an integer and graded
A-F at 90/80/70/60.
"""
from __future__ import annotations

from datetime import date

from lifesim.models.account import UserFinancialData
from lifesim.models.health import FinancialHealthScore, Grade, HealthScoreComponents
from lifesim.scoring import components as c
from lifesim.scoring.benchmarks import BenchmarkProvider, compare_to_benchmarks

WEIGHTS: dict[str, float] = {
    "emergency_fund": 0.20,
    "debt_to_income": 0.20,
    "credit_utilization": 0.15,
    "investment_ratio": 0.15,
    "income_consistency": 0.10,
    "retirement_contribution": 0.15,
    "budget_compliance": 0.05,
}

_GRADE_THRESHOLDS = [(90, Grade.A), (80, Grade.B), (70, Grade.C), (60, Grade.D)]

# (component, recommend below, advice)
_RECOMMENDATIONS: list[tuple[str, float, str]] = [
    ("emergency_fund", 70, "Build your emergency fund to cover 3-6 months of expenses"),
    ("debt_to_income", 70,
     "Focus on paying down high-interest debt to improve your debt-to-income ratio"),
    ("credit_utilization", 75, "Reduce credit card balances to below 30% of available credit"),
    ("investment_ratio", 60, "Increase investments to build long-term wealth"),
    ("retirement_contribution", 70, "Boost retirement contributions to at least 10% of income"),
    ("income_consistency", 80, "Consider diversifying income sources for greater stability"),
    ("budget_compliance", 70, "Review spending in categories that regularly exceed your budget"),
]


def calculate_components(data: UserFinancialData, as_of: date) -> HealthScoreComponents:
    df = c.transactions_frame(data.transactions)
    budgets = data.profile.monthly_budgets if data.profile else {}
    return HealthScoreComponents(
        emergency_fund=c.emergency_fund_score(data.accounts, df, as_of),
        debt_to_income=c.debt_to_income_score(data.accounts, df, as_of),
        credit_utilization=c.credit_utilization_score(data.accounts),
        investment_ratio=c.investment_ratio_score(data.accounts),
        income_consistency=c.income_consistency_score(df, as_of),
        retirement_contribution=c.retirement_contribution_score(df, as_of),
        budget_compliance=c.budget_compliance_score(df, budgets, as_of),
    )


def weighted_score(components: HealthScoreComponents) -> int:
    values = components.model_dump()
    total = sum(values[name] * weight for name, weight in WEIGHTS.items())
    return int(c.clamp_score(round(total)))


def get_grade(score: float) -> Grade:
    for threshold, grade in _GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.F


def generate_recommendations(components: HealthScoreComponents) -> list[str]:
    values = components.model_dump()
    return [advice for name, threshold, advice in _RECOMMENDATIONS if values[name] < threshold]


def calculate_health_score(
    data: UserFinancialData,
    benchmark_provider: BenchmarkProvider | None = None,
    as_of: date | None = None,
) -> FinancialHealthScore:
    """Score a user's current finances and place them against their peers."""
    as_of = as_of or date.today()
    components = calculate_components(data, as_of)
    score = weighted_score(components)
    return FinancialHealthScore(
        score=score,
        grade=get_grade(score),
        components=components,
        recommendations=generate_recommendations(components),
        benchmarks=compare_to_benchmarks(score, data.profile, benchmark_provider, as_of),
    )
