from datetime import date
from typing import Optional

from pydantic import BaseModel


class Account(BaseModel):
    account_id: Optional[str] = None
    account_type: str
    account_subtype: Optional[str] = None
    current_balance: Optional[float] = None
    credit_limit: Optional[float] = None


class Transaction(BaseModel):
    """Signed ledger entry: positive amounts are inflows."""
    amount: float
    category: Optional[str] = None
    date: date


class Investment(BaseModel):
    symbol: Optional[str] = None
    current_value: Optional[float] = None


class UserProfile(BaseModel):
    user_id: str
    date_of_birth: Optional[date] = None
    annual_income_range: Optional[str] = None
    monthly_budgets: dict[str, float] = {}


class UserFinancialData(BaseModel):
    """Everything the health score reads for one user."""
    accounts: list[Account] = []
    transactions: list[Transaction] = []
    investments: list[Investment] = []
    profile: Optional[UserProfile] = None
