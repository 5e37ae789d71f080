from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RiskLevel(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class SimulationSnapshot(BaseModel):
    """Projected financial position at the end of one simulated month."""
    model_config = {"frozen": True}

    date: date
    months_from_start: int
    net_worth: float
    total_assets: float
    total_liabilities: float
    liquid_assets: float
    emergency_fund: float
    monthly_income: float
    monthly_expenses: float
    monthly_debt_payments: float
    cash_flow: float
    emergency_fund_months: float
    debt_to_income_ratio: float
    investment_balance: float
    retirement_balance: float


class SimulationResult(BaseModel):
    scenario_id: Optional[str] = None
    scenario_type: str
    snapshots: list[SimulationSnapshot]
    impact_on_net_worth: float
    impact_on_cash_flow: float
    new_health_score: int
    risk_level: RiskLevel
    warnings: list[str] = []
    opportunities: list[str] = []


class SimulationRequest(BaseModel):
    """Run a scenario against a user's current finances."""
    user_id: str
    scenario_type: str
    parameters: dict = {}
    start_date: Optional[date] = None
    duration_months: int = Field(60, ge=0, le=360)


class CompareRequest(BaseModel):
    user_id: str
    scenario_types: Optional[list[str]] = None
    parameters: dict[str, dict] = {}
    start_date: Optional[date] = None
    duration_months: int = Field(60, ge=0, le=360)


class SaveScenarioRequest(SimulationRequest):
    name: str
    description: str = ""
    tags: list[str] = []


class SaveScenarioResponse(BaseModel):
    scenario_id: str
    result: SimulationResult
