"""Health score components: seven independent 0-100 sub-scores.

Each component reduces account balances and recent transaction history to a
single ratio, then maps the ratio through a piecewise-linear curve.
Transactions are handled as a pandas frame so the lookback windows and the
calendar-month grouping stay vectorised.
"""
from __future__ import annotations

from datetime import date

import numpy as np
import pandas as pd

from lifesim.models.account import Account, Transaction
from lifesim.simulation.engine import add_months

SHORT_WINDOW_MONTHS = 3
INCOME_HISTORY_MONTHS = 6

_EMERGENCY_FUND_TYPES = {"SAVINGS", "MONEY_MARKET"}
_DEBT_TYPES = {"CREDIT_CARD", "LOAN", "MORTGAGE", "LINE_OF_CREDIT"}
_LIABILITY_TYPES = {"CREDIT_CARD", "LOAN", "MORTGAGE"}
_INVESTMENT_TYPES = {"INVESTMENT", "RETIREMENT", "BROKERAGE"}
_NON_SPENDING_CATEGORIES = ["TRANSFER", "INVESTMENT"]
_DTI_INCOME_CATEGORIES = ["INCOME", "SALARY", "BONUS"]
_SALARY_CATEGORIES = ["INCOME", "SALARY"]

NO_CREDIT_CARDS_SCORE = 100.0
NO_CREDIT_LIMIT_SCORE = 50.0
INSUFFICIENT_INCOME_HISTORY_SCORE = 50.0
NO_INCOME_RETIREMENT_SCORE = 50.0
NO_BUDGET_SCORE = 75.0


def clamp_score(value: float) -> float:
    return min(max(float(value), 0.0), 100.0)


def transactions_frame(transactions: list[Transaction]) -> pd.DataFrame:
    """Tabulate transactions as amount / category / date columns."""
    df = pd.DataFrame(
        [t.model_dump() for t in transactions],
        columns=["amount", "category", "date"],
    )
    df["amount"] = df["amount"].astype(float)
    df["date"] = pd.to_datetime(df["date"])
    return df


def _since(df: pd.DataFrame, as_of: date, months: int) -> pd.DataFrame:
    start = pd.Timestamp(add_months(as_of, -months))
    return df[df["date"] >= start]


def _monthly_inflow(df: pd.DataFrame, as_of: date, categories: list[str]) -> float:
    recent = _since(df, as_of, SHORT_WINDOW_MONTHS)
    inflow = recent[(recent["amount"] > 0) & recent["category"].isin(categories)]
    return float(inflow["amount"].sum()) / SHORT_WINDOW_MONTHS


def _sum_balances(accounts: list[Account], types: set[str]) -> float:
    return sum(a.current_balance or 0.0 for a in accounts if a.account_type in types)


def emergency_fund_score(accounts: list[Account], df: pd.DataFrame, as_of: date) -> float:
    """Months of spending covered by savings: 6+ months scores 100."""
    fund = _sum_balances(accounts, _EMERGENCY_FUND_TYPES)

    recent = _since(df, as_of, SHORT_WINDOW_MONTHS)
    spending = recent[(recent["amount"] < 0) & ~recent["category"].isin(_NON_SPENDING_CATEGORIES)]
    monthly_expenses = float(spending["amount"].abs().sum()) / SHORT_WINDOW_MONTHS
    months = fund / monthly_expenses if monthly_expenses > 0 else 0.0

    if months >= 6:
        return 100.0
    if months >= 3:
        return clamp_score(70 + (months - 3) / 3 * 30)
    return clamp_score(round(months / 3 * 70))


def debt_to_income_score(accounts: list[Account], df: pd.DataFrame, as_of: date) -> float:
    """Debt balances spread over a year, relative to monthly income."""
    total_debt = _sum_balances(accounts, _DEBT_TYPES)
    monthly_income = _monthly_inflow(df, as_of, _DTI_INCOME_CATEGORIES)
    ratio = (total_debt / 12) / monthly_income if monthly_income > 0 else 0.0

    if ratio <= 0.20:
        return 100.0
    if ratio <= 0.36:
        return clamp_score(90 - (ratio - 0.20) / 0.16 * 20)
    if ratio <= 0.50:
        return clamp_score(70 - (ratio - 0.36) / 0.14 * 20)
    return clamp_score(50 - (ratio - 0.50) * 100)


def credit_utilization_score(accounts: list[Account]) -> float:
    cards = [a for a in accounts if a.account_type == "CREDIT_CARD"]
    if not cards:
        return NO_CREDIT_CARDS_SCORE

    total_balance = sum(c.current_balance or 0.0 for c in cards)
    total_limit = sum(c.credit_limit or 0.0 for c in cards)
    if total_limit == 0:
        return NO_CREDIT_LIMIT_SCORE

    utilization = total_balance / total_limit
    if utilization <= 0.10:
        return 100.0
    if utilization <= 0.30:
        return clamp_score(90 - (utilization - 0.10) / 0.20 * 15)
    if utilization <= 0.50:
        return clamp_score(75 - (utilization - 0.30) / 0.20 * 25)
    return clamp_score(50 - (utilization - 0.50) * 100)


def investment_ratio_score(accounts: list[Account]) -> float:
    total_assets = sum(
        a.current_balance or 0.0 for a in accounts if a.account_type not in _LIABILITY_TYPES
    )
    if total_assets == 0:
        return 0.0

    ratio = _sum_balances(accounts, _INVESTMENT_TYPES) / total_assets
    if ratio >= 0.50:
        return 100.0
    if ratio >= 0.30:
        return clamp_score(80 + (ratio - 0.30) / 0.20 * 20)
    if ratio >= 0.15:
        return clamp_score(60 + (ratio - 0.15) / 0.15 * 20)
    return clamp_score(round(ratio / 0.15 * 60))


def income_consistency_score(df: pd.DataFrame, as_of: date) -> float:
    """Coefficient of variation of monthly salary income over six months."""
    history = _since(df, as_of, INCOME_HISTORY_MONTHS)
    salary = history[(history["amount"] > 0) & history["category"].isin(_SALARY_CATEGORIES)]
    monthly = salary.groupby(salary["date"].dt.to_period("M"))["amount"].sum()
    if len(monthly) < 3:
        return INSUFFICIENT_INCOME_HISTORY_SCORE

    values = monthly.to_numpy(dtype=float)
    mean = float(np.mean(values))
    cv = float(np.std(values)) / mean if mean > 0 else 1.0

    if cv <= 0.10:
        return 100.0
    if cv <= 0.25:
        return clamp_score(90 - (cv - 0.10) / 0.15 * 20)
    if cv <= 0.50:
        return clamp_score(70 - (cv - 0.25) / 0.25 * 30)
    return clamp_score(40 - (cv - 0.50) * 40)


def retirement_contribution_score(df: pd.DataFrame, as_of: date) -> float:
    """Share of salary income moved into retirement savings."""
    recent = _since(df, as_of, SHORT_WINDOW_MONTHS)
    outflow = recent[(recent["category"] == "RETIREMENT") & (recent["amount"] < 0)]
    monthly_contribution = float(outflow["amount"].abs().sum()) / SHORT_WINDOW_MONTHS

    monthly_income = _monthly_inflow(df, as_of, _SALARY_CATEGORIES)
    if monthly_income == 0:
        return NO_INCOME_RETIREMENT_SCORE

    rate = monthly_contribution / monthly_income
    if rate >= 0.15:
        return 100.0
    if rate >= 0.10:
        return clamp_score(85 + (rate - 0.10) / 0.05 * 15)
    if rate >= 0.05:
        return clamp_score(70 + (rate - 0.05) / 0.05 * 15)
    return clamp_score(round(rate / 0.05 * 70))


def budget_compliance_score(
    df: pd.DataFrame, budgets: dict[str, float], as_of: date,
) -> float:
    """Percentage of budgeted categories kept within their monthly limit."""
    if not budgets:
        return NO_BUDGET_SCORE

    recent = _since(df, as_of, SHORT_WINDOW_MONTHS)
    spending = recent[recent["amount"] < 0]
    monthly_spend = spending.groupby("category")["amount"].sum().abs() / SHORT_WINDOW_MONTHS

    within = sum(
        1 for category, limit in budgets.items()
        if float(monthly_spend.get(category, 0.0)) <= limit
    )
    return clamp_score(within / len(budgets) * 100)
