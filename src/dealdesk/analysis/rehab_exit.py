# src/dealdesk/analysis/rehab_exit.py
"""
Bridge-loan rehab economics and the two exits (sell, refinance-and-hold).

The bridge lender funds `bridge_ltc`% of the price plus
`bridge_rehab_budget_pct`% of the rehab budget. Settlement charges come out
of the loan proceeds, so they show up in the cash brought to closing rather
than as a separate line.
"""
from __future__ import annotations

from dataclasses import dataclass

from dealdesk.analysis import deal_defaults
from dealdesk.domain.finance import compute_payment
from dealdesk.domain.property import AcquisitionInputs
from dealdesk.domain.underwriting import RehabExitScenario


@dataclass(frozen=True)
class BridgeFinancing:
    loan_amount: float
    settlement_charges: float
    cash_at_closing: float     # price + rehab - net loan proceeds
    carrying_costs: float      # interest + as-is taxes/insurance while the rehab runs

    @property
    def total_cash_invested(self) -> float:
        return self.cash_at_closing + self.carrying_costs


def bridge_financing(inputs: AcquisitionInputs, current_year: int | None = None) -> BridgeFinancing:
    price = inputs.purchase_price
    loan = price * inputs.bridge_ltc / 100.0 + inputs.rehab_cost * inputs.bridge_rehab_budget_pct / 100.0
    settlement = deal_defaults.bridge_settlement_charges(inputs)
    cash_at_closing = (price + inputs.rehab_cost) - (loan - settlement)

    # During the rehab the property is carried at its as-is value.
    monthly_interest = loan * inputs.rehab_financing_rate / 100.0 / 12.0
    monthly_taxes_insurance = (
        deal_defaults.property_taxes(inputs) + deal_defaults.property_insurance(inputs, current_year)
    ) / 12.0
    carrying = (monthly_interest + monthly_taxes_insurance) * inputs.rehab_months

    return BridgeFinancing(
        loan_amount=loan,
        settlement_charges=settlement,
        cash_at_closing=cash_at_closing,
        carrying_costs=carrying,
    )


def rehab_exit_scenarios(
    inputs: AcquisitionInputs,
    current_year: int | None = None,
) -> tuple[RehabExitScenario, RehabExitScenario]:
    """(sell, refi) outcomes for a bridge-financed rehab."""
    bridge = bridge_financing(inputs, current_year)
    arv = deal_defaults.after_repair_value(inputs)
    invested = bridge.total_cash_invested

    # Sell: the full bridge loan is paid off from the sale; no exit points.
    selling_costs = arv * inputs.sell_closing_costs_pct / 100.0
    proceeds = arv - selling_costs - bridge.loan_amount
    sell = RehabExitScenario(
        exit_type="sell",
        total_cash_invested=invested,
        rehab_carrying_costs=bridge.carrying_costs,
        entry_points_cost=bridge.settlement_charges,
        exit_points_cost=0.0,
        sale_proceeds=proceeds,
        selling_costs=selling_costs,
        net_profit=proceeds - invested,
        funds_gap=0.0,
    )

    # Refi: a long-term loan at the refi LTV pays off the bridge loan.
    new_loan = arv * inputs.exit_refi_ltv / 100.0
    refi_costs = deal_defaults.dscr_acquisition_costs(inputs)
    cash_out = new_loan - bridge.loan_amount - refi_costs
    capital_left = invested - cash_out
    payment = compute_payment(new_loan, inputs.exit_refi_rate, inputs.loan_term_years)
    refi = RehabExitScenario(
        exit_type="refi",
        total_cash_invested=invested,
        rehab_carrying_costs=bridge.carrying_costs,
        entry_points_cost=bridge.settlement_charges,
        exit_points_cost=refi_costs,
        new_loan_amount=new_loan,
        cash_out_amount=cash_out,
        capital_left_in_deal=capital_left,
        equity_retained=arv - new_loan,
        new_monthly_payment=payment,
        new_annual_debt_service=payment * 12.0,
        funds_gap=capital_left,
    )
    return sell, refi
