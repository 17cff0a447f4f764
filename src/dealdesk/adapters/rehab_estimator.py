# src/dealdesk/adapters/rehab_estimator.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from dealdesk.adapters.config import config
from dealdesk.domain.condition import (
    FoundationCondition,
    PipeMaterial,
    PropertyConditionAssessment,
    WiringType,
)
from dealdesk.domain.underwriting import CapitalBreakdown, CostRange


class RehabTier(str, Enum):
    LIGHT = "light"        # paint, flooring, minor cosmetic
    LITE_PLUS = "lite+"    # light + appliances, fixtures, doors
    MEDIUM = "medium"      # kitchen/bath remodels, roof/HVAC
    HEAVY = "heavy"        # major systems, windows, some layout
    FULLGUT = "fullgut"    # down to studs, all new


class UnitType(str, Enum):
    SINGLE = "single"
    DUPLEX = "duplex"
    TRIPLEX = "triplex"
    QUAD = "quad"


_TIER_LABELS = {
    RehabTier.LIGHT: "Light",
    RehabTier.LITE_PLUS: "Lite+",
    RehabTier.MEDIUM: "Medium",
    RehabTier.HEAVY: "Heavy",
    RehabTier.FULLGUT: "Full Gut",
}

_UNIT_TYPE_LABELS = {
    UnitType.SINGLE: "Single",
    UnitType.DUPLEX: "Duplex",
    UnitType.TRIPLEX: "Triplex",
    UnitType.QUAD: "Quad",
}


def round_half_up(value: float, step: float = 1.0) -> float:
    """Round to the nearest `step`, halves away from zero (not banker's rounding)."""
    q = abs(value) / step
    return math.copysign(math.floor(q + 0.5) * step, value)


def unit_type_from_count(units: int) -> UnitType:
    if units <= 1:
        return UnitType.SINGLE
    if units == 2:
        return UnitType.DUPLEX
    if units == 3:
        return UnitType.TRIPLEX
    return UnitType.QUAD


def tier_label(tier: RehabTier | str) -> str:
    return _TIER_LABELS.get(RehabTier(tier), str(tier))


def unit_type_label(unit_type: UnitType | str) -> str:
    return _UNIT_TYPE_LABELS.get(UnitType(unit_type), str(unit_type))


def _default_condition_factors() -> dict[RehabTier, float]:
    return {
        RehabTier.LIGHT: 0.50,
        RehabTier.LITE_PLUS: 0.70,
        RehabTier.MEDIUM: 1.00,
        RehabTier.HEAVY: 1.40,
        RehabTier.FULLGUT: 1.80,
    }


def _default_unit_multipliers() -> dict[UnitType, float]:
    # shared walls, but duplicated kitchens / baths / systems
    return {
        UnitType.SINGLE: 1.00,
        UnitType.DUPLEX: 1.05,
        UnitType.TRIPLEX: 1.10,
        UnitType.QUAD: 1.15,
    }


@dataclass
class RehabEstimatorConfig:
    """
    Square-footage rehab model:

        sqft x base_rate x condition_factor[tier] x unit_multiplier[unit type]

    rounded to the nearest `round_to` dollars.
    """
    base_cost_per_sqft: float = field(default_factory=lambda: config.REHAB_BASE_RATE_PER_SQFT)
    condition_factors: dict[RehabTier, float] = field(default_factory=_default_condition_factors)
    unit_multipliers: dict[UnitType, float] = field(default_factory=_default_unit_multipliers)
    round_to: float = 500.0


class RehabEstimator:
    """
    Estimate a rehab budget from size, unit count, and rehab tier.

    Inputs:
      - sqft (total building square footage)
      - unit_count (1..4+, bucketed into single/duplex/triplex/quad)
      - tier (light .. fullgut, chosen directly or from the condition scorer)

    Output:
      - rehab budget in whole dollars.
    """

    def __init__(self, cfg: RehabEstimatorConfig | None = None) -> None:
        self.cfg = cfg or RehabEstimatorConfig()

    def estimate(self, sqft: float | None, unit_count: int, tier: RehabTier | str) -> int:
        # Nothing to price without a usable size
        if not sqft or sqft <= 0:
            return 0

        factor = self.cfg.condition_factors[RehabTier(tier)]
        multiplier = self.cfg.unit_multipliers[unit_type_from_count(unit_count)]

        raw = sqft * self.cfg.base_cost_per_sqft * factor * multiplier
        return int(round_half_up(raw, self.cfg.round_to))

    def capital_needed(
        self,
        hard_cost: float,
        entry_points_pct: float,
        annual_rate_pct: float,
        months: float,
        exit_points_pct: float,
    ) -> CapitalBreakdown:
        return capital_needed(hard_cost, entry_points_pct, annual_rate_pct, months, exit_points_pct)


def capital_needed(
    hard_cost: float,
    entry_points_pct: float,
    annual_rate_pct: float,
    months: float,
    exit_points_pct: float,
) -> CapitalBreakdown:
    """
    Cash required to carry a rehab financed 100% by a bridge lender.

    Points are simple percents of the loan (== hard cost); interest is simple,
    non-compounding interest over the rehab duration.
    """
    if hard_cost < 0 or months < 0:
        raise ValueError("hard_cost and months must be non-negative")

    loan_amount = hard_cost
    entry_points = loan_amount * (entry_points_pct / 100.0)
    interest = loan_amount * (annual_rate_pct / 100.0 / 12.0) * months
    exit_points = loan_amount * (exit_points_pct / 100.0)

    parts = [int(round_half_up(x)) for x in (hard_cost, entry_points, interest, exit_points)]
    return CapitalBreakdown(
        hard_costs=parts[0],
        entry_points=parts[1],
        interest=parts[2],
        exit_points=parts[3],
        total=sum(parts),
    )


def estimate_cost_range(
    estimated_cost: float,
    assessment: PropertyConditionAssessment | None = None,
) -> CostRange:
    """
    Low / mid / high band around a point estimate.

    The high side widens with how much of the house is unknown or likely to
    hide damage (structural, mold, termites, unassessed systems).
    """
    factors: list[str] = []
    contingency_low = 0.10
    contingency_high = 0.20

    if assessment is not None:
        issues = assessment.additional_issues
        has_structural = issues.structural_issues or assessment.foundation.condition in (
            FoundationCondition.MAJOR_ISSUES,
            FoundationCondition.NEEDS_REPAIR,
        )
        hidden_damage = issues.mold or issues.termites or issues.water_damage or issues.fire_damage

        if has_structural:
            contingency_high = 0.30
            factors.append("Structural issues may reveal hidden damage")
        if hidden_damage:
            contingency_high = 0.35
            factors.append("Major issues (mold/termites/water/fire) often have hidden extent")
        if assessment.overall_condition is None:
            factors.append("Overall condition not assessed")
            contingency_high += 0.05
        if assessment.roof.condition is None:
            factors.append("Roof condition unknown")
            contingency_high += 0.05
        if assessment.hvac.condition is None:
            factors.append("HVAC condition not verified")
            contingency_high += 0.05
        if assessment.flood_zone:
            factors.append("Flood zone property - potential moisture issues")
            contingency_high += 0.05
        if assessment.plumbing.pipe_material in (None, PipeMaterial.UNKNOWN):
            factors.append("Plumbing material unknown - may need replacement")
            contingency_high += 0.03
        if assessment.electrical.wiring_type in (WiringType.KNOB_AND_TUBE, WiringType.ALUMINUM):
            factors.append("Outdated wiring type - full rewire likely needed")

    contingency_low = min(0.15, contingency_low)
    contingency_high = min(0.45, contingency_high)

    low = int(round_half_up(estimated_cost * 0.85 * (1 + contingency_low)))
    high = int(round_half_up(estimated_cost * 1.25 * (1 + contingency_high)))
    mid = int(round_half_up((low + high) / 2))

    return CostRange(
        low_estimate=low,
        mid_estimate=mid,
        high_estimate=high,
        contingency_low=contingency_low,
        contingency_high=contingency_high,
        uncertainty_factors=factors[:5],
    )
