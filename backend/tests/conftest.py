import sqlite3
import sys
from datetime import date
from unittest.mock import MagicMock

import pytest

# Mock pyodbc so tests can run without ODBC drivers installed
if "pyodbc" not in sys.modules:
    sys.modules["pyodbc"] = MagicMock()

from lifesim.db.memory import InMemoryRepository
from lifesim.db.schema import create_schema
from lifesim.models.account import (
    Account,
    Investment,
    Transaction,
    UserFinancialData,
    UserProfile,
)
from lifesim.scoring.benchmarks import BenchmarkRegistry



def _make_user_data() -> UserFinancialData:
    """A salaried user with savings, a brokerage account and one credit card."""
    transactions = []
    for month in range(1, 7):
        transactions.append(Transaction(amount=6000, category="SALARY", date=date(2024, month, 15)))
        transactions.append(Transaction(amount=-4000, category="RENT", date=date(2024, month, 16)))
        transactions.append(Transaction(amount=-500, category="LOAN_PAYMENT", date=date(2024, month, 17)))
        transactions.append(Transaction(amount=-600, category="RETIREMENT", date=date(2024, month, 18)))
    return UserFinancialData(
        accounts=[
            Account(account_id="A1", account_type="SAVINGS", current_balance=20_000),
            Account(account_id="A2", account_type="CHECKING", current_balance=5_000),
            Account(account_id="A3", account_type="INVESTMENT", current_balance=25_000),
            Account(account_id="A4", account_type="CREDIT_CARD", current_balance=1_000, credit_limit=10_000),
        ],
        transactions=transactions,
        investments=[Investment(symbol="VTI", current_value=25_000)],
        profile=UserProfile(
            user_id="u1",
            date_of_birth=date(1990, 3, 1),
            annual_income_range="50K_75K",
            monthly_budgets={"RENT": 4500},
        ),
    )


@pytest.fixture
def user_data():
    return _make_user_data()


@pytest.fixture
def memory_repo(user_data):
    return InMemoryRepository(users={"u1": user_data})


@pytest.fixture
def sqlite_conn():
    conn = sqlite3.connect(":memory:")
    create_schema(conn, dialect="sqlite")
    yield conn
    conn.close()


@pytest.fixture(autouse=True)
def _reset_benchmarks():
    BenchmarkRegistry.reset()
    yield
    BenchmarkRegistry.reset()
