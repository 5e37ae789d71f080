"""Fixed-payment annuity math for mortgages and installment loans.

PMT = P * r(1+r)^n / ((1+r)^n - 1), with r the monthly rate.
Rates are quoted as annual percentages (6.5 means 6.5%).
"""
from __future__ import annotations


def _annuity_payment(principal: float, monthly_rate: float, n_payments: int) -> float:
    if n_payments <= 0 or principal <= 0:
        return 0.0
    if monthly_rate == 0:
        return principal / n_payments
    growth = (1.0 + monthly_rate) ** n_payments
    return principal * monthly_rate * growth / (growth - 1.0)


def mortgage_payment(principal: float, annual_rate_pct: float, years: int) -> float:
    """Monthly payment on a fixed-rate mortgage amortized over `years`."""
    return _annuity_payment(principal, annual_rate_pct / 100.0 / 12.0, years * 12)


def loan_payment(principal: float, annual_rate_pct: float, term_months: int) -> float:
    """Monthly payment on a fixed-rate installment loan."""
    return _annuity_payment(principal, annual_rate_pct / 100.0 / 12.0, term_months)
