"""Scenario state transitions: one pure function per life event.

Every transition has the signature

    (state, baseline, params, month) -> new state

where `state` is the previous month's position and `baseline` the untouched
month-0 position. Monthly flows (income, expenses, debt payments) are rebuilt
from the baseline each month so adjustments never compound; balances carry
forward from `state`. One-time effects land at month 0.
"""
from __future__ import annotations

from dataclasses import replace

from lifesim.models.scenario import (
    CustomParameters,
    HomePurchaseParameters,
    JobLossParameters,
    MarketDownturnParameters,
    MarriageParameters,
    NewBabyParameters,
    StartBusinessParameters,
    VehiclePurchaseParameters,
)
from lifesim.simulation.amortization import loan_payment, mortgage_payment
from lifesim.simulation.state_builder import FinancialState


def _debit(state: FinancialState, amount: float) -> FinancialState:
    """Pay a one-time cost out of liquid assets."""
    if not amount:
        return state
    return replace(
        state,
        liquid_assets=state.liquid_assets - amount,
        total_assets=state.total_assets - amount,
    )


def _credit(state: FinancialState, amount: float) -> FinancialState:
    return _debit(state, -amount)


def job_loss(
    state: FinancialState, baseline: FinancialState, params: JobLossParameters, month: int,
) -> FinancialState:
    income = baseline.monthly_income * (1.0 - params.income_reduction_pct / 100.0)
    if params.unemployment_benefits and 1 <= month <= params.benefit_months:
        income += baseline.monthly_income * params.benefit_income_share

    new_state = replace(state, monthly_income=income)
    if month == 0 and params.severance_months:
        new_state = _credit(new_state, params.severance_months * baseline.monthly_income)

    # Shortfall is covered from the emergency fund until it runs dry
    cash_flow = new_state.cash_flow
    if cash_flow < 0 and new_state.emergency_fund > 0:
        depletion = min(-cash_flow, new_state.emergency_fund)
        new_state = replace(
            new_state,
            emergency_fund=new_state.emergency_fund - depletion,
            liquid_assets=new_state.liquid_assets - depletion,
            total_assets=new_state.total_assets - depletion,
        )
    return new_state


def market_downturn(
    state: FinancialState, baseline: FinancialState, params: MarketDownturnParameters, month: int,
) -> FinancialState:
    drop = params.portfolio_drop_pct / 100.0
    if month == 0:
        investment = baseline.investment_balance * (1.0 - drop)
        retirement = baseline.retirement_balance * (1.0 - drop)
    elif month <= params.recovery_months:
        investment = state.investment_balance + baseline.investment_balance * drop / params.recovery_months
        retirement = state.retirement_balance + baseline.retirement_balance * drop / params.recovery_months
    else:
        return state

    # Substitute the portfolio legs so other asset classes are untouched
    total_assets = (
        state.total_assets
        - state.investment_balance - state.retirement_balance
        + investment + retirement
    )
    return replace(
        state,
        investment_balance=investment,
        retirement_balance=retirement,
        total_assets=total_assets,
    )


def home_purchase(
    state: FinancialState, baseline: FinancialState, params: HomePurchaseParameters, month: int,
) -> FinancialState:
    down_payment = params.home_price * params.down_payment_pct / 100.0
    financed = params.home_price - down_payment
    payment = mortgage_payment(financed, params.mortgage_rate_pct, params.mortgage_years)
    housing_costs = (
        payment
        + params.property_tax_annual / 12.0
        + params.home_insurance_annual / 12.0
        + params.hoa_monthly
    )

    new_state = state
    if month == 0:
        new_state = _debit(new_state, down_payment)
        new_state = replace(
            new_state,
            total_assets=new_state.total_assets + params.home_price,
            total_liabilities=new_state.total_liabilities + financed,
        )
    else:
        # Approximation: a fixed share of each payment retires principal
        new_state = replace(
            new_state,
            total_liabilities=max(
                new_state.total_liabilities - payment * params.principal_share_of_payment, 0.0,
            ),
        )

    return replace(
        new_state,
        monthly_expenses=baseline.monthly_expenses + housing_costs,
        monthly_debt_payments=baseline.monthly_debt_payments + payment,
    )


def vehicle_purchase(
    state: FinancialState, baseline: FinancialState, params: VehiclePurchaseParameters, month: int,
) -> FinancialState:
    financed = params.vehicle_price - params.down_payment
    payment = loan_payment(financed, params.loan_rate_pct, params.loan_term_months)

    new_state = state
    if month == 0:
        new_state = _debit(new_state, params.down_payment)
        new_state = replace(
            new_state,
            total_assets=new_state.total_assets + params.vehicle_price,
            total_liabilities=new_state.total_liabilities + financed,
        )
    else:
        # Straight-line depreciation, stopping once the vehicle is written off
        monthly_depreciation = params.vehicle_price * params.annual_depreciation_rate / 12.0
        if month * monthly_depreciation <= params.vehicle_price:
            new_state = replace(new_state, total_assets=new_state.total_assets - monthly_depreciation)

    return replace(
        new_state,
        monthly_expenses=baseline.monthly_expenses + payment,
        monthly_debt_payments=baseline.monthly_debt_payments + payment,
    )


def marriage(
    state: FinancialState, baseline: FinancialState, params: MarriageParameters, month: int,
) -> FinancialState:
    new_state = _debit(state, params.wedding_cost) if month == 0 else state

    expenses = baseline.monthly_expenses + params.spouse_expenses
    if params.spouse_income:
        # Stand-in for joint filing benefits
        expenses *= 1.0 - params.tax_benefit_expense_reduction_pct / 100.0

    return replace(
        new_state,
        monthly_income=baseline.monthly_income + params.spouse_income,
        monthly_expenses=expenses,
    )


def new_baby(
    state: FinancialState, baseline: FinancialState, params: NewBabyParameters, month: int,
) -> FinancialState:
    new_state = _debit(state, params.medical_costs) if month == 0 else state

    leave_months = params.parental_leave_weeks / 4.0
    income = baseline.monthly_income
    expenses = baseline.monthly_expenses + params.baseline_monthly_expense
    if month < leave_months:
        income *= 1.0 - params.reduced_income_pct / 100.0
    else:
        expenses += params.monthly_childcare

    return replace(new_state, monthly_income=income, monthly_expenses=expenses)


def start_business(
    state: FinancialState, baseline: FinancialState, params: StartBusinessParameters, month: int,
) -> FinancialState:
    new_state = _debit(state, params.startup_costs) if month == 0 else state

    income = baseline.monthly_income * (1.0 - params.salary_reduction_pct / 100.0)
    if month < len(params.projected_revenue):
        income += params.projected_revenue[month] or 0.0

    return replace(
        new_state,
        monthly_income=income,
        monthly_expenses=baseline.monthly_expenses + params.monthly_business_expenses,
    )


def custom(
    state: FinancialState, baseline: FinancialState, params: CustomParameters, month: int,
) -> FinancialState:
    new_state = state
    if month == 0:
        new_state = _debit(new_state, params.one_time_cost)
        new_state = _credit(new_state, params.one_time_income)

    return replace(
        new_state,
        monthly_income=baseline.monthly_income + params.monthly_income_change,
        monthly_expenses=baseline.monthly_expenses + params.monthly_expense_change,
    )
