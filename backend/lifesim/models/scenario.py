from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class ScenarioKind(str, Enum):
    """Life events the simulator knows how to project."""
    JOB_LOSS = "JOB_LOSS"
    MARKET_DOWNTURN = "MARKET_DOWNTURN"
    HOME_PURCHASE = "HOME_PURCHASE"
    VEHICLE_PURCHASE = "VEHICLE_PURCHASE"
    MARRIAGE = "MARRIAGE"
    NEW_BABY = "NEW_BABY"
    START_BUSINESS = "START_BUSINESS"
    CUSTOM = "CUSTOM"


class _Parameters(BaseModel):
    model_config = {"extra": "ignore", "frozen": True}


class JobLossParameters(_Parameters):
    income_reduction_pct: float = Field(0.0, ge=0, le=100)
    unemployment_benefits: bool = False
    severance_months: float = Field(0.0, ge=0)
    benefit_income_share: float = 0.40  # of pre-loss income
    benefit_months: int = 6


class MarketDownturnParameters(_Parameters):
    portfolio_drop_pct: float = Field(25.0, ge=0, le=100)
    recovery_months: int = Field(18, ge=1)


class HomePurchaseParameters(_Parameters):
    home_price: float = Field(0.0, ge=0)
    down_payment_pct: float = Field(20.0, ge=0, le=100)
    mortgage_rate_pct: float = Field(6.5, ge=0)
    mortgage_years: int = Field(30, ge=1)
    property_tax_annual: float = Field(0.0, ge=0)
    home_insurance_annual: float = Field(0.0, ge=0)
    hoa_monthly: float = Field(0.0, ge=0)
    principal_share_of_payment: float = 0.30


class VehiclePurchaseParameters(_Parameters):
    vehicle_price: float = Field(0.0, ge=0)
    down_payment: float = Field(0.0, ge=0)
    loan_rate_pct: float = Field(5.0, ge=0)
    loan_term_months: int = Field(60, ge=1)
    annual_depreciation_rate: float = 0.15


class MarriageParameters(_Parameters):
    spouse_income: float = Field(0.0, ge=0)
    spouse_expenses: float = Field(0.0, ge=0)
    wedding_cost: float = Field(0.0, ge=0)
    tax_benefit_expense_reduction_pct: float = 5.0


class NewBabyParameters(_Parameters):
    monthly_childcare: float = Field(0.0, ge=0)
    medical_costs: float = Field(0.0, ge=0)
    parental_leave_weeks: float = Field(12.0, ge=0)
    reduced_income_pct: float = Field(50.0, ge=0, le=100)
    baseline_monthly_expense: float = 500.0  # diapers, formula, etc.


class StartBusinessParameters(_Parameters):
    startup_costs: float = Field(0.0, ge=0)
    monthly_business_expenses: float = Field(0.0, ge=0)
    salary_reduction_pct: float = Field(0.0, ge=0, le=100)
    projected_revenue: list[Optional[float]] = []  # gaps count as no revenue


class CustomParameters(_Parameters):
    monthly_income_change: float = 0.0
    monthly_expense_change: float = 0.0
    one_time_cost: float = Field(0.0, ge=0)
    one_time_income: float = Field(0.0, ge=0)


ScenarioParameters = Union[
    JobLossParameters,
    MarketDownturnParameters,
    HomePurchaseParameters,
    VehiclePurchaseParameters,
    MarriageParameters,
    NewBabyParameters,
    StartBusinessParameters,
    CustomParameters,
]


class ScenarioTemplate(BaseModel):
    template_id: str
    name: str
    description: str
    scenario_type: ScenarioKind
    default_parameters: dict = {}


class SavedScenario(BaseModel):
    scenario_id: str
    user_id: str
    name: str
    description: str = ""
    scenario_type: str
    parameters: dict = {}
    tags: list[str] = []
    impact_on_net_worth: float
    impact_on_cash_flow: float
    new_health_score: int
    risk_level: str
    created_at: Optional[datetime] = None
