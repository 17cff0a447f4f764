# src/dealdesk/analysis/finance.py
"""
Multi-year strategy projector.

One engine, four income models:
  - ltr        long-term lease at market rent
  - voucher    subsidized lease at the voucher payment standard
  - short_term net short-term revenue from a market-data provider
  - brrrr      post-rehab market rent on the cash-out refinance loan

Inputs are expected to be validated up front (services.validation);
blank dollar fields fall back to the documented defaults.
"""
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from dealdesk.adapters.config import config
from dealdesk.adapters.rehab_estimator import capital_needed
from dealdesk.analysis import deal_defaults
from dealdesk.analysis.rehab_exit import bridge_financing
from dealdesk.analysis.voucher import lookup_voucher_rent, resolve_zipcode
from dealdesk.domain.assumptions import GlobalAssumptions
from dealdesk.domain.finance import compute_payment, payments_in_year, remaining_balance
from dealdesk.domain.property import AcquisitionInputs, UnitDetail
from dealdesk.domain.underwriting import Strategy, StrategyResults, Year1Summary, YearProjection

STRATEGIES: Tuple[Strategy, ...] = ("ltr", "voucher", "short_term", "brrrr")


@dataclass(frozen=True)
class _Financing:
    loan_amount: float
    annual_rate_pct: float
    term_years: int
    monthly_payment: float


@dataclass(frozen=True)
class _Plan:
    """Everything that differs between strategies, resolved once up front."""
    unit_income_monthly: List[float]   # per unit, year 1
    vacancy_months: float
    value_basis: float
    taxes: float
    insurance: float
    financing: _Financing
    cash_invested: float


# ---------------------------------------------------------------------
# Rent resolution
# ---------------------------------------------------------------------

def _ltr_rent(unit: UnitDetail, assumptions: GlobalAssumptions) -> float:
    if unit.market_rent is not None:
        return unit.market_rent
    if unit.voucher_rent is not None:
        return unit.voucher_rent / assumptions.voucher_market_multiplier
    return 0.0


def _voucher_rent(
    unit: UnitDetail,
    zipcode: Optional[str],
    assumptions: GlobalAssumptions,
) -> float:
    if unit.voucher_rent is not None:
        return unit.voucher_rent
    table_rent = lookup_voucher_rent(unit.beds, zipcode, assumptions)
    if table_rent is not None:
        return table_rent
    # ZIP/bedroom not in the table: voucher standards run above market.
    if unit.market_rent is not None:
        return unit.market_rent * assumptions.voucher_market_multiplier
    return 0.0


def _short_term_net_monthly(unit: UnitDetail) -> float:
    revenue = unit.str_annual_revenue or 0.0
    expenses = unit.str_annual_expenses or 0.0
    return (revenue - expenses) / 12.0


def _brrrr_rent(unit: UnitDetail, assumptions: GlobalAssumptions) -> float:
    if unit.after_rehab_market_rent is not None:
        return unit.after_rehab_market_rent
    return _ltr_rent(unit, assumptions)


def unit_rents(
    strategy: Strategy,
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
) -> List[float]:
    """Year-1 monthly income per unit under `strategy`."""
    if strategy == "ltr":
        return [_ltr_rent(u, assumptions) for u in inputs.unit_details]
    if strategy == "voucher":
        zipcode = resolve_zipcode(inputs)
        return [_voucher_rent(u, zipcode, assumptions) for u in inputs.unit_details]
    if strategy == "short_term":
        return [_short_term_net_monthly(u) for u in inputs.unit_details]
    if strategy == "brrrr":
        return [_brrrr_rent(u, assumptions) for u in inputs.unit_details]
    raise ValueError(f"unknown strategy: {strategy!r}")


# ---------------------------------------------------------------------
# Strategy plans
# ---------------------------------------------------------------------

def _purchase_financing(inputs: AcquisitionInputs) -> _Financing:
    loan = inputs.loan_amount
    payment = compute_payment(loan, inputs.loan_interest_rate, inputs.loan_term_years) if loan > 0 else 0.0
    return _Financing(loan, inputs.loan_interest_rate, inputs.loan_term_years, payment)


def _hold_cash_invested(inputs: AcquisitionInputs) -> float:
    cash = inputs.down_payment_amount + deal_defaults.acquisition_costs(inputs) + inputs.setup_furnish_cost
    if inputs.is_rehab and inputs.rehab_cost > 0:
        cash += capital_needed(
            inputs.rehab_cost,
            inputs.rehab_entry_points,
            inputs.rehab_financing_rate,
            inputs.rehab_months,
            inputs.rehab_exit_points,
        ).total
    return cash


def _plan(
    strategy: Strategy,
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    current_year: Optional[int],
) -> _Plan:
    rents = unit_rents(strategy, inputs, assumptions)

    if strategy == "brrrr":
        # Held on the refinance loan, valued and taxed at ARV.
        arv = deal_defaults.after_repair_value(inputs)
        loan = arv * inputs.exit_refi_ltv / 100.0
        payment = compute_payment(loan, inputs.exit_refi_rate, inputs.loan_term_years) if loan > 0 else 0.0
        return _Plan(
            unit_income_monthly=rents,
            vacancy_months=assumptions.ltr_vacancy_months,
            value_basis=arv,
            taxes=deal_defaults.rehab_property_taxes(inputs),
            insurance=deal_defaults.rehab_property_insurance(inputs),
            financing=_Financing(loan, inputs.exit_refi_rate, inputs.loan_term_years, payment),
            cash_invested=bridge_financing(inputs, current_year).total_cash_invested,
        )

    vacancy = {
        "ltr": assumptions.ltr_vacancy_months,
        "voucher": assumptions.voucher_vacancy_months,
        # market-data revenue already nets out vacancy
        "short_term": 0.0,
    }[strategy]
    return _Plan(
        unit_income_monthly=rents,
        vacancy_months=vacancy,
        value_basis=inputs.purchase_price,
        taxes=deal_defaults.property_taxes(inputs),
        insurance=deal_defaults.property_insurance(inputs, current_year),
        financing=_purchase_financing(inputs),
        cash_invested=_hold_cash_invested(inputs),
    )


# ---------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------

def _growth(pct: float, year: int) -> float:
    return (1 + pct / 100.0) ** (year - 1)


def project_strategy(
    strategy: Strategy,
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    years: Optional[int] = None,
    current_year: Optional[int] = None,
) -> StrategyResults:
    """
    Year-1 summary plus a `years`-long projection (default 30).

    Year y:
      gross     = 12 x sum(unit income) x (1 + rent growth)^(y-1)
      vacancy   = gross x vacancy_months / 12
      expenses  = taxes_y + insurance_y + maintenance% x (gross - vacancy)
      noi       = gross - vacancy - expenses
      debt      = monthly payment x payments falling in year y
      value     = basis x (1 + appreciation)^y
    """
    years = years or config.PROJECTION_YEARS
    plan = _plan(strategy, inputs, assumptions, current_year)
    fin = plan.financing

    base_gross = 12.0 * sum(plan.unit_income_monthly)
    projections: List[YearProjection] = []
    year1: Dict[str, float] = {}

    prior_value = plan.value_basis
    cumulative_cf = 0.0
    cumulative_return = 0.0

    for y in range(1, years + 1):
        gross = base_gross * _growth(assumptions.rent_growth_percent, y)
        vacancy = gross * plan.vacancy_months / 12.0
        effective = gross - vacancy

        taxes = plan.taxes * _growth(assumptions.property_tax_increase_percent, y)
        insurance = plan.insurance * _growth(assumptions.insurance_increase_percent, y)
        maintenance = effective * assumptions.maintenance_percent / 100.0
        expenses = taxes + insurance + maintenance

        noi = effective - expenses
        debt_service = fin.monthly_payment * payments_in_year(fin.term_years, y)
        cash_flow = noi - debt_service

        value = plan.value_basis * (1 + assumptions.appreciation_percent / 100.0) ** y
        appreciation = value - prior_value
        prior_value = value

        balance = remaining_balance(fin.loan_amount, fin.annual_rate_pct, fin.term_years, 12 * y)
        annual_return = cash_flow + appreciation
        cumulative_cf += cash_flow
        cumulative_return += annual_return

        if y == 1:
            year1 = {"vacancy": vacancy, "expenses": expenses}

        projections.append(
            YearProjection(
                year=y,
                gross_income=gross,
                noi=noi,
                debt_service=debt_service,
                cash_flow=cash_flow,
                appreciation=appreciation,
                property_value=value,
                equity=value - balance,
                annual_return=annual_return,
                cumulative_cash_flow=cumulative_cf,
                cumulative_return=cumulative_return,
                loan_balance=balance,
            )
        )

    first = projections[0]
    summary = Year1Summary(
        gross_income=first.gross_income,
        vacancy=year1["vacancy"],
        expenses=year1["expenses"],
        noi=first.noi,
        debt_service=first.debt_service,
        cash_flow=first.cash_flow,
        cap_rate=(first.noi / plan.value_basis) if plan.value_basis > 0 else None,
        dscr=(first.noi / first.debt_service) if first.debt_service > 0 else math.inf,
        cash_on_cash=(first.cash_flow / plan.cash_invested) if plan.cash_invested > 0 else None,
    )

    return StrategyResults(
        strategy=strategy,
        year1_summary=summary,
        cash_invested=plan.cash_invested,
        projections=tuple(projections),
        monthly_payment=fin.monthly_payment,
        loan_amount=fin.loan_amount,
    )


def applicable_strategies(inputs: AcquisitionInputs) -> Tuple[Strategy, ...]:
    if inputs.is_rehab:
        return STRATEGIES
    return tuple(s for s in STRATEGIES if s != "brrrr")


def project_all(
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    years: Optional[int] = None,
    current_year: Optional[int] = None,
) -> Dict[Strategy, StrategyResults]:
    return {
        s: project_strategy(s, inputs, assumptions, years=years, current_year=current_year)
        for s in applicable_strategies(inputs)
    }
