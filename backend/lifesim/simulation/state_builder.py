"""Baseline financial state: derived once per run from account data.

Balances come straight from linked accounts and holdings; monthly flows are
averaged over the lookback window of recent transactions.
"""
from __future__ import annotations

from dataclasses import dataclass

from lifesim.models.account import Account, Investment, Transaction

LIABILITY_ACCOUNT_TYPES = frozenset({"CREDIT_CARD", "LOAN", "MORTGAGE"})
DEBT_PAYMENT_CATEGORIES = frozenset({"LOAN_PAYMENT", "MORTGAGE", "CREDIT_CARD_PAYMENT"})
_LIQUID_INVESTMENT_SHARE = 0.5


@dataclass(frozen=True)
class FinancialState:
    """Working financial position for one simulated month."""
    total_assets: float = 0.0
    total_liabilities: float = 0.0
    liquid_assets: float = 0.0
    emergency_fund: float = 0.0
    investment_balance: float = 0.0
    retirement_balance: float = 0.0
    monthly_income: float = 0.0
    monthly_expenses: float = 0.0
    monthly_debt_payments: float = 0.0

    @property
    def net_worth(self) -> float:
        return self.total_assets - self.total_liabilities

    @property
    def cash_flow(self) -> float:
        return self.monthly_income - self.monthly_expenses


def _balance(account: Account) -> float:
    return account.current_balance or 0.0


def build_financial_state(
    accounts: list[Account],
    transactions: list[Transaction],
    investments: list[Investment],
    lookback_months: int = 3,
) -> FinancialState:
    """Build the month-0 state from raw collaborator data.

    Missing data yields zeros. `transactions` should already be limited to
    the last `lookback_months` months.
    """
    total_assets = sum(
        _balance(a) for a in accounts if a.account_type not in LIABILITY_ACCOUNT_TYPES
    )
    total_liabilities = sum(
        abs(_balance(a)) for a in accounts if a.account_type in LIABILITY_ACCOUNT_TYPES
    )
    emergency_fund = sum(_balance(a) for a in accounts if a.account_type == "SAVINGS")
    retirement_balance = sum(_balance(a) for a in accounts if a.account_type == "RETIREMENT")
    investment_balance = sum(i.current_value or 0.0 for i in investments)

    months = max(lookback_months, 1)
    monthly_income = sum(t.amount for t in transactions if t.amount > 0) / months
    monthly_expenses = abs(sum(t.amount for t in transactions if t.amount < 0)) / months
    monthly_debt_payments = abs(sum(
        t.amount for t in transactions
        if t.amount < 0 and t.category in DEBT_PAYMENT_CATEGORIES
    )) / months

    return FinancialState(
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        liquid_assets=emergency_fund + investment_balance * _LIQUID_INVESTMENT_SHARE,
        emergency_fund=emergency_fund,
        investment_balance=investment_balance,
        retirement_balance=retirement_balance,
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        monthly_debt_payments=monthly_debt_payments,
    )
