# src/dealdesk/analysis/valuation.py
from __future__ import annotations

import math

from dealdesk.adapters.config import config
from dealdesk.analysis import deal_defaults
from dealdesk.analysis.finance import project_strategy
from dealdesk.domain.assumptions import GlobalAssumptions
from dealdesk.domain.finance import compute_payment
from dealdesk.domain.property import AcquisitionInputs
from dealdesk.domain.underwriting import OfferResult, Strategy

# Strategies whose debt is sized off the purchase price.
PRICE_FINANCED_STRATEGIES = ("ltr", "voucher", "short_term")


def _pin_operating_costs(inputs: AcquisitionInputs, current_year: int | None) -> AcquisitionInputs:
    """
    Freeze taxes and insurance at their current-price values so NOI does not
    move with the offer price.
    """
    return inputs.model_copy(
        update={
            "property_taxes": deal_defaults.property_taxes(inputs),
            "property_insurance": deal_defaults.property_insurance(inputs, current_year),
        }
    )


def max_offer_for_dscr(
    strategy: Strategy,
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    target_dscr: float | None = None,
    current_year: int | None = None,
) -> OfferResult:
    """
    Highest purchase price whose year-1 DSCR still meets `target_dscr`.

    NOI does not depend on price and annual debt service is linear in it:

        debt(price) = 12 x payment_per_dollar x (1 - down%) x price

    so the answer is closed form:

        price = noi / (target x 12 x payment_per_dollar x (1 - down%))

    floored to whole dollars. A non-positive NOI supports no debt at all
    (price 0). An all-cash purchase has no coverage constraint
    (max_price None).
    """
    if strategy not in PRICE_FINANCED_STRATEGIES:
        raise ValueError(f"offer solver needs a price-financed strategy, got {strategy!r}")

    target = config.DEFAULT_TARGET_DSCR if target_dscr is None else target_dscr
    if target <= 0:
        raise ValueError("target_dscr must be > 0")

    pinned = _pin_operating_costs(inputs, current_year)
    results = project_strategy(strategy, pinned, assumptions, years=1, current_year=current_year)
    noi = results.year1_summary.noi

    financed_share = 1.0 - inputs.down_payment_pct / 100.0
    per_dollar = compute_payment(1.0, inputs.loan_interest_rate, inputs.loan_term_years)
    debt_per_price_dollar = 12.0 * per_dollar * financed_share

    if debt_per_price_dollar <= 0:
        return OfferResult(
            strategy=strategy,
            target_dscr=target,
            max_price=None,
            noi=noi,
            annual_debt_service=0.0,
            dscr=math.inf,
        )

    if noi <= 0:
        return OfferResult(
            strategy=strategy,
            target_dscr=target,
            max_price=0.0,
            noi=noi,
            annual_debt_service=0.0,
            dscr=math.inf,
        )

    max_price = float(math.floor(noi / (target * debt_per_price_dollar)))
    debt = debt_per_price_dollar * max_price
    return OfferResult(
        strategy=strategy,
        target_dscr=target,
        max_price=max_price,
        noi=noi,
        annual_debt_service=debt,
        dscr=(noi / debt) if debt > 0 else math.inf,
    )
