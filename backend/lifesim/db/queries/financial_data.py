import json
from datetime import date
from typing import Optional

from lifesim.db.connection import fetch_dicts
from lifesim.models.account import Account, Investment, Transaction, UserProfile
from lifesim.simulation.engine import add_months

# Map Pydantic field names to SQL column names.
ACCOUNT_COLUMNS = {
    "account_id": "AccountID",
    "account_type": "AccountType",
    "account_subtype": "AccountSubtype",
    "current_balance": "CurrentBalance",
    "credit_limit": "CreditLimit",
}

TRANSACTION_COLUMNS = {
    "amount": "Amount",
    "category": "Category",
    "date": "TxnDate",
}

INVESTMENT_COLUMNS = {
    "symbol": "Symbol",
    "current_value": "CurrentValue",
}


def _select(columns: dict[str, str]) -> str:
    return ", ".join(f"{col} AS {field}" for field, col in columns.items())


def get_accounts(conn, user_id: str) -> list[Account]:
    query = f"SELECT {_select(ACCOUNT_COLUMNS)} FROM Accounts WHERE UserID = ?"
    cursor = conn.cursor()
    cursor.execute(query, (user_id,))
    return [Account(**row) for row in fetch_dicts(cursor)]


def get_recent_transactions(conn, user_id: str, months: int, as_of: date) -> list[Transaction]:
    """Transactions dated within `months` calendar months before `as_of`."""
    query = f"""
        SELECT {_select(TRANSACTION_COLUMNS)}
        FROM Transactions
        WHERE UserID = ? AND TxnDate >= ?
        ORDER BY TxnDate
    """
    start = add_months(as_of, -months)
    cursor = conn.cursor()
    cursor.execute(query, (user_id, start.isoformat()))
    return [Transaction(**row) for row in fetch_dicts(cursor)]


def get_investments(conn, user_id: str) -> list[Investment]:
    query = f"SELECT {_select(INVESTMENT_COLUMNS)} FROM Investments WHERE UserID = ?"
    cursor = conn.cursor()
    cursor.execute(query, (user_id,))
    return [Investment(**row) for row in fetch_dicts(cursor)]


def get_user_profile(conn, user_id: str) -> Optional[UserProfile]:
    query = """
        SELECT UserID, DateOfBirth, AnnualIncomeRange, MonthlyBudgets
        FROM UserProfiles
        WHERE UserID = ?
    """
    cursor = conn.cursor()
    cursor.execute(query, (user_id,))
    rows = fetch_dicts(cursor)
    if not rows:
        return None

    row = rows[0]
    return UserProfile(
        user_id=row["UserID"],
        date_of_birth=row["DateOfBirth"],
        annual_income_range=row["AnnualIncomeRange"],
        monthly_budgets=json.loads(row["MonthlyBudgets"]) if row["MonthlyBudgets"] else {},
    )
