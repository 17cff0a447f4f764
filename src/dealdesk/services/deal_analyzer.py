from __future__ import annotations

from typing import Any

from dealdesk.adapters.logging_utils import get_logger
from dealdesk.adapters.rehab_estimator import RehabEstimator, RehabTier, estimate_cost_range
from dealdesk.adapters.rehab_estimator import capital_needed as _capital_needed
from dealdesk.analysis.finance import STRATEGIES, applicable_strategies
from dealdesk.analysis.finance import project_strategy as _project_strategy
from dealdesk.analysis.rehab_exit import rehab_exit_scenarios
from dealdesk.analysis.scoring import score_condition as _score_condition
from dealdesk.analysis.valuation import max_offer_for_dscr
from dealdesk.domain.assumptions import GlobalAssumptions
from dealdesk.domain.condition import PropertyConditionAssessment
from dealdesk.domain.errors import DealValidationError
from dealdesk.domain.property import AcquisitionInputs
from dealdesk.domain.underwriting import (
    CapitalBreakdown,
    CostRange,
    OfferResult,
    RehabEstimateResult,
    RehabExitScenario,
    Strategy,
    StrategyResults,
)
from dealdesk.services.validation import prepare_inputs, validate_inputs

logger = get_logger(__name__)

_default_estimator = RehabEstimator()


def _prepared(
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    current_year: int | None,
) -> AcquisitionInputs:
    try:
        validate_inputs(inputs)
    except DealValidationError as err:
        logger.warning(
            "deal inputs rejected",
            extra={"context": {"address": inputs.address, "reasons": err.reasons}},
        )
        raise
    return prepare_inputs(inputs, assumptions, current_year=current_year)


def project_strategy(
    strategy: Strategy,
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    years: int | None = None,
    current_year: int | None = None,
) -> StrategyResults:
    """
    Validate, fill defaults, and project one strategy.

    Raises DealValidationError for malformed inputs before any math runs.
    """
    prepared = _prepared(inputs, assumptions, current_year)
    if strategy in STRATEGIES and strategy not in applicable_strategies(prepared):
        raise DealValidationError(f"strategy {strategy!r} applies to rehab deals only")
    results = _project_strategy(strategy, prepared, assumptions, years=years, current_year=current_year)
    s = results.year1_summary
    logger.info(
        "strategy projected",
        extra={
            "context": {
                "address": inputs.address,
                "strategy": strategy,
                "noi": round(s.noi, 2),
                "cash_flow": round(s.cash_flow, 2),
                "dscr": s.dscr,
            }
        },
    )
    return results


def project_all(
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    years: int | None = None,
    current_year: int | None = None,
) -> dict[Strategy, StrategyResults]:
    prepared = _prepared(inputs, assumptions, current_year)
    return {
        s: _project_strategy(s, prepared, assumptions, years=years, current_year=current_year)
        for s in applicable_strategies(prepared)
    }


def score_condition(
    assessment: PropertyConditionAssessment,
    sqft: float,
    unit_count: int,
) -> RehabEstimateResult:
    result = _score_condition(assessment, sqft, unit_count, estimator=_default_estimator)
    logger.info(
        "condition scored",
        extra={
            "context": {
                "score": result.condition_score,
                "tier": result.suggested_condition,
                "estimated_cost": result.estimated_cost,
                "major_issues": len(result.major_issues),
            }
        },
    )
    return result


def estimate_rehab_cost(sqft: float, unit_count: int, tier: RehabTier | str) -> int:
    return _default_estimator.estimate(sqft, unit_count, tier)


def capital_needed(
    hard_cost: float,
    entry_points_pct: float,
    annual_rate_pct: float,
    months: float,
    exit_points_pct: float,
) -> CapitalBreakdown:
    return _capital_needed(hard_cost, entry_points_pct, annual_rate_pct, months, exit_points_pct)


def rehab_cost_range(
    assessment: PropertyConditionAssessment,
    sqft: float,
    unit_count: int,
) -> CostRange:
    result = _score_condition(assessment, sqft, unit_count, estimator=_default_estimator)
    return estimate_cost_range(result.estimated_cost, assessment)


def exit_scenarios(
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    current_year: int | None = None,
) -> tuple[RehabExitScenario, RehabExitScenario]:
    prepared = _prepared(inputs, assumptions, current_year)
    if not prepared.is_rehab:
        raise DealValidationError("exit scenarios apply to rehab deals only")
    return rehab_exit_scenarios(prepared, current_year=current_year)


def max_offer(
    strategy: Strategy,
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    target_dscr: float | None = None,
    current_year: int | None = None,
) -> OfferResult:
    prepared = _prepared(inputs, assumptions, current_year)
    offer = max_offer_for_dscr(strategy, prepared, assumptions, target_dscr, current_year=current_year)
    logger.info(
        "max offer solved",
        extra={
            "context": {
                "address": inputs.address,
                "strategy": strategy,
                "target_dscr": offer.target_dscr,
                "max_price": offer.max_price,
            }
        },
    )
    return offer


def summarize(results: dict[Strategy, StrategyResults]) -> dict[str, Any]:
    """Flat year-1 view per strategy, for JSON output."""
    return {
        strategy: {
            "cash_invested": res.cash_invested,
            "monthly_payment": res.monthly_payment,
            "loan_amount": res.loan_amount,
            **vars(res.year1_summary),
        }
        for strategy, res in results.items()
    }
