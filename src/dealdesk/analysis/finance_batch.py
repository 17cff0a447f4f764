# src/dealdesk/analysis/finance_batch.py

from __future__ import annotations

from dataclasses import asdict
from typing import Iterable

import numpy as np
import pandas as pd

from dealdesk.domain.assumptions import GlobalAssumptions
from dealdesk.domain.metrics import compute_cap_rate, compute_cash_on_cash, compute_dscr
from dealdesk.domain.underwriting import StrategyResults

REQUIRED_SCREEN_COLUMNS = ("purchase_price", "monthly_rent", "taxes_annual", "insurance_annual")


def screen_deals_df(
    df: pd.DataFrame,
    assumptions: GlobalAssumptions,
    *,
    down_payment_pct: float,
    interest_rate_pct: float,
    loan_term_years: int,
    acquisition_costs_pct: float = 5.0,
) -> pd.DataFrame:
    """
    Vectorized year-1 long-term-rental metrics over a table of candidates.

    Expected columns on df:
      - purchase_price
      - monthly_rent (gross, all units)
      - taxes_annual
      - insurance_annual
    Optional:
      - acquisition_costs (dollars; defaults to acquisition_costs_pct of price)

    Returns a copy of df with the metric columns appended. cap_rate and
    cash_on_cash are fractions (NaN when undefined); dscr is +inf without debt.
    """
    missing = [c for c in REQUIRED_SCREEN_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"missing columns: {', '.join(missing)}")

    purchase_price = df["purchase_price"].to_numpy(dtype=float)
    gross_rent_monthly = df["monthly_rent"].to_numpy(dtype=float)
    taxes_annual = df["taxes_annual"].to_numpy(dtype=float)
    insurance_annual = df["insurance_annual"].to_numpy(dtype=float)

    if "acquisition_costs" in df.columns:
        acquisition_costs = df["acquisition_costs"].fillna(0.0).to_numpy(dtype=float)
    else:
        acquisition_costs = purchase_price * acquisition_costs_pct / 100.0

    # --- Financing ---
    down_payment = purchase_price * down_payment_pct / 100.0
    loan_amount = purchase_price - down_payment

    r_monthly = interest_rate_pct / 100.0 / 12.0
    n_months = loan_term_years * 12

    mortgage_monthly = np.zeros_like(purchase_price, dtype=float)
    has_loan = loan_amount > 0
    if has_loan.any():
        la = loan_amount[has_loan]
        if r_monthly > 0:
            mortgage_monthly[has_loan] = la * r_monthly / (1.0 - (1.0 + r_monthly) ** (-n_months))
        else:
            mortgage_monthly[has_loan] = la / n_months

    # --- Income / vacancy ---
    gross_income = gross_rent_monthly * 12.0
    vacancy = gross_income * assumptions.ltr_vacancy_months / 12.0
    effective_income = gross_income - vacancy

    # --- Operating expenses ---
    maintenance = effective_income * assumptions.maintenance_percent / 100.0
    expenses = taxes_annual + insurance_annual + maintenance

    noi = effective_income - expenses
    annual_debt_service = mortgage_monthly * 12.0
    cash_flow = noi - annual_debt_service
    cash_invested = down_payment + acquisition_costs

    out = df.copy()
    out["gross_income"] = gross_income
    out["vacancy"] = vacancy
    out["expenses"] = expenses
    out["noi"] = noi
    out["debt_service"] = annual_debt_service
    out["cash_flow"] = cash_flow
    out["cash_invested"] = cash_invested
    out["cap_rate"] = compute_cap_rate(noi, purchase_price)
    out["dscr"] = compute_dscr(noi, annual_debt_service)
    out["cash_on_cash"] = compute_cash_on_cash(cash_flow, cash_invested)
    return out


def projection_frame(results: StrategyResults | Iterable[StrategyResults]) -> pd.DataFrame:
    """Long-format projection table, one row per (strategy, year)."""
    if isinstance(results, StrategyResults):
        results = [results]

    rows = []
    for res in results:
        for p in res.projections:
            row = {"strategy": res.strategy}
            row.update(asdict(p))
            rows.append(row)

    columns = ["strategy"] + [
        "year", "gross_income", "noi", "debt_service", "cash_flow", "appreciation",
        "property_value", "equity", "annual_return", "cumulative_cash_flow",
        "cumulative_return", "loan_balance",
    ]
    return pd.DataFrame(rows, columns=columns)
