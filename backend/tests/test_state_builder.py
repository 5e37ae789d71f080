from datetime import date

import pytest

from lifesim.models.account import Account, Investment, Transaction
from lifesim.simulation.state_builder import FinancialState, build_financial_state


def _make_transactions():
    txns = []
    for month in (4, 5, 6):
        txns.append(Transaction(amount=6000, category="SALARY", date=date(2024, month, 1)))
        txns.append(Transaction(amount=-3000, category="RENT", date=date(2024, month, 2)))
        txns.append(Transaction(amount=-900, category="MORTGAGE", date=date(2024, month, 3)))
    return txns


def test_balances_split_into_assets_and_liabilities():
    accounts = [
        Account(account_type="SAVINGS", current_balance=10_000),
        Account(account_type="RETIREMENT", current_balance=40_000),
        Account(account_type="CREDIT_CARD", current_balance=-2_000),
        Account(account_type="LOAN", current_balance=8_000),
    ]
    state = build_financial_state(accounts, [], [Investment(current_value=20_000)])

    assert state.total_assets == 50_000
    assert state.total_liabilities == 10_000
    assert state.emergency_fund == 10_000
    assert state.retirement_balance == 40_000
    assert state.investment_balance == 20_000
    assert state.liquid_assets == 20_000  # savings + half of investments
    assert state.net_worth == 40_000


def test_flows_are_monthly_averages():
    state = build_financial_state([], _make_transactions(), [], lookback_months=3)
    assert state.monthly_income == pytest.approx(6000)
    assert state.monthly_expenses == pytest.approx(3900)
    assert state.monthly_debt_payments == pytest.approx(900)
    assert state.cash_flow == pytest.approx(2100)


def test_missing_data_yields_zero_state():
    state = build_financial_state([], [], [])
    assert state == FinancialState()
    assert state.net_worth == 0.0


def test_null_balances_count_as_zero():
    state = build_financial_state([Account(account_type="SAVINGS")], [], [Investment()])
    assert state.emergency_fund == 0.0
    assert state.investment_balance == 0.0
