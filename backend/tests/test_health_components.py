from datetime import date

import pytest

from lifesim.models.account import Account, Transaction
from lifesim.scoring import components as c

AS_OF = date(2024, 6, 30)


def _frame(*rows):
    return c.transactions_frame([
        Transaction(amount=amount, category=category, date=when) for amount, category, when in rows
    ])


def _monthly(amount, category, months=(4, 5, 6)):
    return [(amount, category, date(2024, m, 10)) for m in months]


def test_six_months_of_expenses_scores_full_marks():
    accounts = [Account(account_type="SAVINGS", current_balance=30_000)]
    df = _frame(*_monthly(-5000, "GROCERIES"))
    assert c.emergency_fund_score(accounts, df, AS_OF) == 100.0


def test_emergency_fund_curve():
    df = _frame(*_monthly(-1000, "GROCERIES"))
    savings = lambda bal: [Account(account_type="SAVINGS", current_balance=bal)]
    assert c.emergency_fund_score(savings(3000), df, AS_OF) == 70.0
    assert c.emergency_fund_score(savings(4500), df, AS_OF) == 85.0
    assert c.emergency_fund_score(savings(1500), df, AS_OF) == 35.0


def test_emergency_fund_ignores_transfers_and_old_spending():
    rows = _monthly(-1000, "GROCERIES") + _monthly(-9000, "TRANSFER")
    rows.append((-50_000, "GROCERIES", date(2023, 1, 1)))
    accounts = [Account(account_type="MONEY_MARKET", current_balance=6000)]
    assert c.emergency_fund_score(accounts, _frame(*rows), AS_OF) == 100.0


def test_no_spending_scores_zero_months():
    accounts = [Account(account_type="SAVINGS", current_balance=10_000)]
    assert c.emergency_fund_score(accounts, _frame(), AS_OF) == 0.0


def test_debt_to_income_curve():
    df = _frame(*_monthly(5000, "SALARY"))
    debt = lambda bal: [Account(account_type="LOAN", current_balance=bal)]
    assert c.debt_to_income_score([], df, AS_OF) == 100.0
    assert c.debt_to_income_score(debt(12_000), df, AS_OF) == 100.0  # ratio 0.2
    assert c.debt_to_income_score(debt(24_000), df, AS_OF) == pytest.approx(64.286, abs=0.01)
    assert c.debt_to_income_score(debt(600_000), df, AS_OF) == 0.0


def test_debt_without_income_scores_full():
    accounts = [Account(account_type="MORTGAGE", current_balance=200_000)]
    assert c.debt_to_income_score(accounts, _frame(), AS_OF) == 100.0


def test_credit_utilization():
    card = lambda bal, limit: Account(account_type="CREDIT_CARD", current_balance=bal, credit_limit=limit)
    assert c.credit_utilization_score([]) == c.NO_CREDIT_CARDS_SCORE == 100.0
    assert c.credit_utilization_score([card(500, None)]) == 50.0
    assert c.credit_utilization_score([card(1000, 10_000)]) == 100.0
    assert c.credit_utilization_score([card(3000, 10_000)]) == pytest.approx(75.0)
    assert c.credit_utilization_score([card(4000, 10_000)]) == pytest.approx(62.5)
    assert c.credit_utilization_score([card(9000, 10_000)]) == pytest.approx(10.0)


def test_investment_ratio():
    accounts = [
        Account(account_type="CHECKING", current_balance=6000),
        Account(account_type="BROKERAGE", current_balance=4000),
        Account(account_type="LOAN", current_balance=50_000),
    ]
    assert c.investment_ratio_score(accounts) == pytest.approx(90.0)
    assert c.investment_ratio_score([]) == 0.0


def test_income_consistency_steady_and_volatile():
    steady = _frame(*_monthly(5000, "SALARY", months=range(1, 7)))
    assert c.income_consistency_score(steady, AS_OF) == 100.0

    volatile = _frame(
        (1000, "INCOME", date(2024, 4, 1)),
        (9000, "INCOME", date(2024, 5, 1)),
        (5000, "INCOME", date(2024, 6, 1)),
    )
    assert c.income_consistency_score(volatile, AS_OF) < 40


def test_income_consistency_needs_three_months():
    df = _frame(*_monthly(5000, "SALARY", months=(5, 6)))
    assert c.income_consistency_score(df, AS_OF) == 50.0


def test_retirement_contribution():
    income = _monthly(5000, "SALARY")
    assert c.retirement_contribution_score(_frame(*income), AS_OF) == 0.0
    assert c.retirement_contribution_score(
        _frame(*income, *_monthly(-500, "RETIREMENT")), AS_OF,
    ) == 85.0
    assert c.retirement_contribution_score(
        _frame(*income, *_monthly(-1000, "RETIREMENT")), AS_OF,
    ) == 100.0
    assert c.retirement_contribution_score(_frame(), AS_OF) == 50.0


def test_budget_compliance():
    df = _frame(*_monthly(-300, "DINING"), *_monthly(-900, "GROCERIES"))
    assert c.budget_compliance_score(df, {}, AS_OF) == 75.0
    assert c.budget_compliance_score(df, {"DINING": 400, "GROCERIES": 800}, AS_OF) == 50.0
    assert c.budget_compliance_score(df, {"DINING": 400, "TRAVEL": 100}, AS_OF) == 100.0
