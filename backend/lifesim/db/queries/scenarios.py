import json
from datetime import datetime

from lifesim.db.connection import fetch_dicts
from lifesim.models.scenario import SavedScenario, ScenarioTemplate
from lifesim.models.simulation import SimulationResult, SimulationSnapshot

_SNAPSHOT_COLUMNS = [
    "ScenarioID", "MonthsFromStart", "SnapshotDate", "NetWorth", "TotalAssets",
    "TotalLiabilities", "MonthlyIncome", "MonthlyExpenses", "CashFlow",
    "EmergencyFundMonths", "DebtToIncomeRatio", "InvestmentBalance", "RetirementBalance",
]


def insert_scenario(
    cursor,
    scenario_id: str,
    user_id: str,
    name: str,
    description: str,
    scenario_type: str,
    parameters: dict,
    result: SimulationResult,
    tags: list[str],
    created_at: datetime,
) -> None:
    """Insert the scenario header row. Caller owns the transaction."""
    query = """
        INSERT INTO FinancialScenarios (
            ScenarioID, UserID, Name, Description, ScenarioType, Parameters,
            StartDate, EndDate, ImpactOnNetWorth, ImpactOnCashFlow, NewHealthScore,
            RiskLevel, Warnings, Opportunities, Tags, IsSaved, CreatedAt
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    """
    cursor.execute(query, (
        scenario_id,
        user_id,
        name,
        description,
        scenario_type,
        json.dumps(parameters),
        result.snapshots[0].date.isoformat(),
        result.snapshots[-1].date.isoformat(),
        result.impact_on_net_worth,
        result.impact_on_cash_flow,
        result.new_health_score,
        result.risk_level.value,
        json.dumps(result.warnings),
        json.dumps(result.opportunities),
        json.dumps(tags),
        1,
        created_at.isoformat(),
    ))


def insert_snapshots(cursor, scenario_id: str, snapshots: list[SimulationSnapshot]) -> None:
    """Batch-insert the monthly series. Caller owns the transaction."""
    placeholders = ", ".join("?" for _ in _SNAPSHOT_COLUMNS)
    query = f"INSERT INTO SimulationSnapshots ({', '.join(_SNAPSHOT_COLUMNS)}) VALUES ({placeholders})"
    cursor.executemany(query, [
        (
            scenario_id,
            s.months_from_start,
            s.date.isoformat(),
            s.net_worth,
            s.total_assets,
            s.total_liabilities,
            s.monthly_income,
            s.monthly_expenses,
            s.cash_flow,
            s.emergency_fund_months,
            s.debt_to_income_ratio,
            s.investment_balance,
            s.retirement_balance,
        )
        for s in snapshots
    ])


def list_saved_scenarios(conn, user_id: str) -> list[SavedScenario]:
    query = """
        SELECT ScenarioID, UserID, Name, Description, ScenarioType, Parameters, Tags,
               ImpactOnNetWorth, ImpactOnCashFlow, NewHealthScore, RiskLevel, CreatedAt
        FROM FinancialScenarios
        WHERE UserID = ? AND IsSaved = 1
        ORDER BY CreatedAt DESC
    """
    cursor = conn.cursor()
    cursor.execute(query, (user_id,))
    return [
        SavedScenario(
            scenario_id=row["ScenarioID"],
            user_id=row["UserID"],
            name=row["Name"],
            description=row["Description"] or "",
            scenario_type=row["ScenarioType"],
            parameters=json.loads(row["Parameters"]) if row["Parameters"] else {},
            tags=json.loads(row["Tags"]) if row["Tags"] else [],
            impact_on_net_worth=row["ImpactOnNetWorth"],
            impact_on_cash_flow=row["ImpactOnCashFlow"],
            new_health_score=row["NewHealthScore"],
            risk_level=row["RiskLevel"],
            created_at=row["CreatedAt"],
        )
        for row in fetch_dicts(cursor)
    ]


def list_scenario_templates(conn) -> list[ScenarioTemplate]:
    query = """
        SELECT TemplateID, Name, Description, ScenarioType, DefaultParameters
        FROM ScenarioTemplates
        WHERE IsActive = 1
        ORDER BY Name
    """
    cursor = conn.cursor()
    cursor.execute(query)
    return [
        ScenarioTemplate(
            template_id=row["TemplateID"],
            name=row["Name"],
            description=row["Description"] or "",
            scenario_type=row["ScenarioType"],
            default_parameters=json.loads(row["DefaultParameters"]) if row["DefaultParameters"] else {},
        )
        for row in fetch_dicts(cursor)
    ]
