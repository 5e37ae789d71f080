"""Table definitions for the scenario and health score store.

Written for SQL Server; `create_schema(conn, dialect="sqlite")` swaps the
few type names SQLite does not parse so the same tables back local runs.
"""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_TYPES = {
    "sqlserver": {"text": "NVARCHAR(MAX)", "timestamp": "DATETIME2"},
    "sqlite": {"text": "TEXT", "timestamp": "TEXT"},
}

_TABLES = [
    """CREATE TABLE Accounts (
        AccountID NVARCHAR(64) PRIMARY KEY,
        UserID NVARCHAR(64) NOT NULL,
        AccountType NVARCHAR(32) NOT NULL,
        AccountSubtype NVARCHAR(64) NULL,
        CurrentBalance FLOAT NULL,
        CreditLimit FLOAT NULL
    )""",
    """CREATE TABLE Transactions (
        TransactionID NVARCHAR(64) PRIMARY KEY,
        UserID NVARCHAR(64) NOT NULL,
        Amount FLOAT NOT NULL,
        Category NVARCHAR(64) NULL,
        TxnDate DATE NOT NULL
    )""",
    """CREATE TABLE Investments (
        InvestmentID NVARCHAR(64) PRIMARY KEY,
        UserID NVARCHAR(64) NOT NULL,
        Symbol NVARCHAR(32) NULL,
        CurrentValue FLOAT NULL
    )""",
    """CREATE TABLE UserProfiles (
        UserID NVARCHAR(64) PRIMARY KEY,
        DateOfBirth DATE NULL,
        AnnualIncomeRange NVARCHAR(32) NULL,
        MonthlyBudgets {text} NULL
    )""",
    """CREATE TABLE FinancialScenarios (
        ScenarioID NVARCHAR(64) PRIMARY KEY,
        UserID NVARCHAR(64) NOT NULL,
        Name NVARCHAR(200) NOT NULL,
        Description {text} NULL,
        ScenarioType NVARCHAR(32) NOT NULL,
        Parameters {text} NULL,
        StartDate DATE NOT NULL,
        EndDate DATE NOT NULL,
        ImpactOnNetWorth FLOAT NOT NULL,
        ImpactOnCashFlow FLOAT NOT NULL,
        NewHealthScore INT NOT NULL,
        RiskLevel NVARCHAR(16) NOT NULL,
        Warnings {text} NULL,
        Opportunities {text} NULL,
        Tags {text} NULL,
        IsSaved BIT NOT NULL,
        CreatedAt {timestamp} NOT NULL
    )""",
    """CREATE TABLE SimulationSnapshots (
        ScenarioID NVARCHAR(64) NOT NULL,
        MonthsFromStart INT NOT NULL,
        SnapshotDate DATE NOT NULL,
        NetWorth FLOAT NOT NULL,
        TotalAssets FLOAT NOT NULL,
        TotalLiabilities FLOAT NOT NULL,
        MonthlyIncome FLOAT NOT NULL,
        MonthlyExpenses FLOAT NOT NULL,
        CashFlow FLOAT NOT NULL,
        EmergencyFundMonths FLOAT NOT NULL,
        DebtToIncomeRatio FLOAT NOT NULL,
        InvestmentBalance FLOAT NOT NULL,
        RetirementBalance FLOAT NOT NULL,
        PRIMARY KEY (ScenarioID, MonthsFromStart)
    )""",
    """CREATE TABLE ScenarioTemplates (
        TemplateID NVARCHAR(64) PRIMARY KEY,
        Name NVARCHAR(200) NOT NULL,
        Description {text} NULL,
        ScenarioType NVARCHAR(32) NOT NULL,
        DefaultParameters {text} NULL,
        IsActive BIT NOT NULL
    )""",
    """CREATE TABLE FinancialHealthScores (
        ScoreID NVARCHAR(64) PRIMARY KEY,
        UserID NVARCHAR(64) NOT NULL,
        Score INT NOT NULL,
        Grade NVARCHAR(2) NOT NULL,
        EmergencyFundScore FLOAT NOT NULL,
        DebtToIncomeScore FLOAT NOT NULL,
        CreditUtilizationScore FLOAT NOT NULL,
        InvestmentRatioScore FLOAT NOT NULL,
        IncomeConsistencyScore FLOAT NOT NULL,
        RetirementContributionScore FLOAT NOT NULL,
        BudgetComplianceScore FLOAT NOT NULL,
        Recommendations {text} NULL,
        NationalAverageScore FLOAT NOT NULL,
        AgeGroupAverageScore FLOAT NOT NULL,
        PeerPercentile FLOAT NOT NULL,
        IsCurrent BIT NOT NULL,
        CalculatedAt {timestamp} NOT NULL
    )""",
    """CREATE TABLE FinancialBenchmarks (
        AgeGroup NVARCHAR(16) NOT NULL,
        IncomeBracket NVARCHAR(32) NOT NULL,
        AvgHealthScore FLOAT NOT NULL,
        PRIMARY KEY (AgeGroup, IncomeBracket)
    )""",
]


def schema_statements(dialect: str = "sqlserver") -> list[str]:
    types = _TYPES[dialect]
    return [ddl.format(**types) for ddl in _TABLES]


def create_schema(conn, dialect: str = "sqlserver") -> None:
    cursor = conn.cursor()
    for statement in schema_statements(dialect):
        cursor.execute(statement)
    conn.commit()
    logger.info("Created %d tables (%s)", len(_TABLES), dialect)
