#!/usr/bin/env python3
"""Run one scenario from a JSON baseline and print the monthly projection.

The baseline file holds either FinancialState fields directly
({"total_assets": ..., "monthly_income": ...}) or raw account data
({"accounts": [...], "transactions": [...], "investments": [...]}).

Usage:
  cd backend
  python scripts/run_scenario.py baseline.json JOB_LOSS --params '{"income_reduction_pct": 100}'
  python scripts/run_scenario.py baseline.json HOME_PURCHASE --months 120 --every 12
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

import pandas as pd

# Add backend to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lifesim.models.account import Account, Investment, Transaction
from lifesim.simulation.engine import run_simulation
from lifesim.simulation.state_builder import FinancialState, build_financial_state

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s", datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)

_COLUMNS = [
    "months_from_start", "date", "net_worth", "liquid_assets", "emergency_fund",
    "cash_flow", "emergency_fund_months", "debt_to_income_ratio",
]


def load_baseline(path: Path, lookback_months: int) -> FinancialState:
    data = json.loads(path.read_text())
    if "accounts" in data or "transactions" in data:
        return build_financial_state(
            [Account(**a) for a in data.get("accounts", [])],
            [Transaction(**t) for t in data.get("transactions", [])],
            [Investment(**i) for i in data.get("investments", [])],
            lookback_months,
        )
    return FinancialState(**data)


def main():
    parser = argparse.ArgumentParser(description="Project a life scenario month by month")
    parser.add_argument("baseline", help="Path to baseline JSON")
    parser.add_argument("scenario_type", help="Scenario kind, e.g. JOB_LOSS")
    parser.add_argument("--params", default="{}", help="Scenario parameters as JSON")
    parser.add_argument("--months", type=int, default=60, help="Duration in months (default: 60)")
    parser.add_argument("--start", help="Start date YYYY-MM-DD (default: today)")
    parser.add_argument("--lookback", type=int, default=3, help="Months of transactions in the file")
    parser.add_argument("--every", type=int, default=1, help="Print every Nth month (default: 1)")
    args = parser.parse_args()

    baseline_path = Path(args.baseline)
    if not baseline_path.exists():
        logger.error("Baseline not found: %s", baseline_path)
        sys.exit(1)

    baseline = load_baseline(baseline_path, args.lookback)
    start = date.fromisoformat(args.start) if args.start else date.today()
    result = run_simulation(baseline, args.scenario_type, json.loads(args.params), start, args.months)

    df = pd.DataFrame([s.model_dump() for s in result.snapshots])[_COLUMNS]
    step = max(args.every, 1)
    shown = df[(df["months_from_start"] % step == 0) | (df.index == len(df) - 1)]
    print(shown.to_string(index=False, float_format=lambda v: f"{v:,.2f}"))

    print()
    print(f"Scenario:           {result.scenario_type}")
    print(f"Net worth impact:   {result.impact_on_net_worth:,.2f}")
    print(f"Cash flow impact:   {result.impact_on_cash_flow:,.2f}")
    print(f"Health score:       {result.new_health_score}")
    print(f"Risk level:         {result.risk_level.value}")
    for warning in result.warnings:
        print(f"  ! {warning}")
    for opportunity in result.opportunities:
        print(f"  + {opportunity}")


if __name__ == "__main__":
    main()
