# src/dealdesk/analysis/scoring.py
"""
Condition-to-cost scoring.

Turns a structured property-condition assessment into a 0-100 severity
score, a list of flagged major issues, and relative dollar weights per
bucket (structural / systems / interior / exterior).

Rule of thumb baked into every table: conditions that are already
acceptable ("Good", "Excellent", "New", "Updated", ...) score 0.
"""
from __future__ import annotations

from typing import Dict, Mapping, Optional

from dealdesk.adapters.rehab_estimator import RehabEstimator, RehabTier
from dealdesk.domain.condition import (
    AppliancesCondition,
    BathroomCondition,
    BathroomRecord,
    BedroomCondition,
    BedroomFlooring,
    BedroomRecord,
    CabinetsCondition,
    CeilingsCondition,
    ClosetsCondition,
    CountertopsCondition,
    DoorsCondition,
    DrivewayCondition,
    ElectricalCondition,
    FencingCondition,
    FoundationCondition,
    GuttersCondition,
    HvacCondition,
    InteriorFlooring,
    KitchenCondition,
    KitchenFlooring,
    LandscapingCondition,
    LightingCondition,
    OverallCondition,
    PipeMaterial,
    PlumbingCondition,
    PoolCondition,
    PoolEquipment,
    PropertyConditionAssessment,
    RoofCondition,
    SidingCondition,
    TileCondition,
    ToiletCondition,
    TubShowerCondition,
    VanityCondition,
    WallsCondition,
    WaterHeaterCondition,
    WindowsCondition,
    WiringType,
)
from dealdesk.domain.underwriting import ConditionBreakdown, ConditionScore, RehabEstimateResult

MAX_SCORE = 100.0
BEDROOM_CONTRIBUTION_CAP = 3.0

# =====================================================================
# Points tables
# =====================================================================

# 1. Overall condition (25 pts)
OVERALL_POINTS: Dict[OverallCondition, float] = {
    OverallCondition.EXCELLENT: 0,
    OverallCondition.GOOD: 0,
    OverallCondition.FAIR: 12,
    OverallCondition.POOR: 20,
    OverallCondition.UNINHABITABLE: 25,
}

# 2. Structural & major systems (35 pts)
ROOF_POINTS: Dict[RoofCondition, float] = {
    RoofCondition.NEW: 0,
    RoofCondition.GOOD: 0,
    RoofCondition.FAIR: 5,
    RoofCondition.POOR: 8,
    RoofCondition.NEEDS_REPLACEMENT: 10,
}

FOUNDATION_POINTS: Dict[FoundationCondition, float] = {
    FoundationCondition.EXCELLENT: 0,
    FoundationCondition.GOOD: 0,
    FoundationCondition.MINOR_CRACKS: 3,
    FoundationCondition.MAJOR_ISSUES: 8,
    FoundationCondition.NEEDS_REPAIR: 8,
}

HVAC_POINTS: Dict[HvacCondition, float] = {
    HvacCondition.NEW: 0,
    HvacCondition.GOOD: 0,
    HvacCondition.FAIR: 3,
    HvacCondition.OLD: 5,
    HvacCondition.NOT_WORKING: 7,
}

PLUMBING_POINTS: Dict[PlumbingCondition, float] = {
    PlumbingCondition.EXCELLENT: 0,
    PlumbingCondition.GOOD: 0,
    PlumbingCondition.HAS_ISSUES: 3,
    PlumbingCondition.NEEDS_REPLACEMENT: 5,
}

# Missing/unknown pipe material is assumed fine until someone looks.
PIPE_MATERIAL_POINTS: Dict[PipeMaterial, float] = {
    PipeMaterial.COPPER: 0,
    PipeMaterial.PEX: 0,
    PipeMaterial.PVC: 0,
    PipeMaterial.MIXED: 0,
    PipeMaterial.UNKNOWN: 0,
    PipeMaterial.GALVANIZED: 3,
}

WATER_HEATER_POINTS: Dict[WaterHeaterCondition, float] = {
    WaterHeaterCondition.NEW: 0,
    WaterHeaterCondition.GOOD: 0,
    WaterHeaterCondition.OLD: 1,
    WaterHeaterCondition.NEEDS_REPLACEMENT: 2,
}

ELECTRICAL_POINTS: Dict[ElectricalCondition, float] = {
    ElectricalCondition.UPDATED: 0,
    ElectricalCondition.ADEQUATE: 0,
    ElectricalCondition.NEEDS_WORK: 3,
    ElectricalCondition.UNSAFE: 5,
}

WIRING_POINTS: Dict[WiringType, float] = {
    WiringType.MODERN: 0,
    WiringType.MIXED: 0,
    WiringType.ALUMINUM: 3,
    WiringType.KNOB_AND_TUBE: 3,
}

# 3. Exterior (15 pts)
SIDING_POINTS: Dict[SidingCondition, float] = {
    SidingCondition.EXCELLENT: 0,
    SidingCondition.GOOD: 0,
    SidingCondition.NEEDS_PAINT: 2,
    SidingCondition.NEEDS_REPAIR: 3,
    SidingCondition.NEEDS_REPLACEMENT: 3,
}

WINDOWS_POINTS: Dict[WindowsCondition, float] = {
    WindowsCondition.NEW: 0,
    WindowsCondition.GOOD: 0,
    WindowsCondition.OLD_SINGLE_PANE: 4,
    WindowsCondition.BROKEN_MISSING: 5,
}

DOORS_POINTS: Dict[DoorsCondition, float] = {
    DoorsCondition.EXCELLENT: 0,
    DoorsCondition.GOOD: 0,
    DoorsCondition.WORN: 1,
    DoorsCondition.NEEDS_REPLACEMENT: 3,
}

GUTTERS_POINTS: Dict[GuttersCondition, float] = {
    GuttersCondition.GOOD: 0,
    GuttersCondition.NEEDS_REPAIR: 1,
    GuttersCondition.MISSING: 2,
}

# Minimal yard is fine for a rental.
LANDSCAPING_POINTS: Dict[LandscapingCondition, float] = {
    LandscapingCondition.WELL_MAINTAINED: 0,
    LandscapingCondition.MINIMAL: 0,
    LandscapingCondition.OVERGROWN: 1,
}

DRIVEWAY_POINTS: Dict[DrivewayCondition, float] = {
    DrivewayCondition.EXCELLENT: 0,
    DrivewayCondition.GOOD: 0,
    DrivewayCondition.CRACKED: 1,
    DrivewayCondition.NEEDS_REPLACEMENT: 2,
}

FENCING_POINTS: Dict[FencingCondition, float] = {
    FencingCondition.GOOD: 0,
    FencingCondition.NO_FENCE: 0,
    FencingCondition.NEEDS_REPAIR: 1,
}

# 4. Interior - kitchen & bathrooms (15 pts)
KITCHEN_POINTS: Dict[KitchenCondition, float] = {
    KitchenCondition.MODERN: 0,
    KitchenCondition.UPDATED: 0,
    KitchenCondition.GOOD: 0,
    KitchenCondition.DATED: 4,
    KitchenCondition.NEEDS_FULL_REHAB: 8,
}
KITCHEN_NEEDS_WORK = frozenset({KitchenCondition.DATED, KitchenCondition.NEEDS_FULL_REHAB})

CABINETS_POINTS: Dict[CabinetsCondition, float] = {
    CabinetsCondition.EXCELLENT: 0,
    CabinetsCondition.GOOD: 0,
    CabinetsCondition.WORN: 1,
    CabinetsCondition.NEEDS_REPLACEMENT: 2,
}

COUNTERTOPS_POINTS: Dict[CountertopsCondition, float] = {
    CountertopsCondition.GRANITE_QUARTZ: 0,
    CountertopsCondition.LAMINATE_GOOD: 0,
    CountertopsCondition.LAMINATE_WORN: 1,
    CountertopsCondition.NEEDS_REPLACEMENT: 2,
}

APPLIANCES_POINTS: Dict[AppliancesCondition, float] = {
    AppliancesCondition.ALL_NEW: 0,
    AppliancesCondition.ALL_GOOD: 0,
    AppliancesCondition.MOST_GOOD: 0,
    AppliancesCondition.OLD: 1,
    AppliancesCondition.MISSING_BROKEN: 2,
}

KITCHEN_FLOORING_POINTS: Dict[KitchenFlooring, float] = {
    KitchenFlooring.TILE: 0,
    KitchenFlooring.WOOD: 0,
    KitchenFlooring.VINYL: 1,
    KitchenFlooring.NEEDS_REPLACEMENT: 2,
}

BATHROOM_POINTS: Dict[BathroomCondition, float] = {
    BathroomCondition.EXCELLENT: 0,
    BathroomCondition.GOOD: 0,
    BathroomCondition.DATED: 3,
    BathroomCondition.POOR: 5,
}
BATHROOM_NEEDS_WORK = frozenset({BathroomCondition.DATED, BathroomCondition.POOR})

VANITY_POINTS: Dict[VanityCondition, float] = {
    VanityCondition.MODERN: 0,
    VanityCondition.GOOD: 0,
    VanityCondition.WORN: 0,
    VanityCondition.NEEDS_REPLACEMENT: 0.5,
}

TOILET_POINTS: Dict[ToiletCondition, float] = {
    ToiletCondition.GOOD: 0,
    ToiletCondition.NEEDS_REPLACEMENT: 0.3,
}

TUB_SHOWER_POINTS: Dict[TubShowerCondition, float] = {
    TubShowerCondition.EXCELLENT: 0,
    TubShowerCondition.GOOD: 0,
    TubShowerCondition.WORN_STAINED: 0,
    TubShowerCondition.CRACKED_DAMAGED: 0.7,
}

TILE_POINTS: Dict[TileCondition, float] = {
    TileCondition.MODERN: 0,
    TileCondition.GOOD: 0,
    TileCondition.DATED: 0,
    TileCondition.CRACKED_MISSING: 0.5,
}

# 5. Interior - general
INTERIOR_FLOORING_POINTS: Dict[InteriorFlooring, float] = {
    InteriorFlooring.EXCELLENT: 0,
    InteriorFlooring.GOOD: 0,
    InteriorFlooring.MIXED: 2,
    InteriorFlooring.NEEDS_REPLACEMENT: 4,
}

WALLS_POINTS: Dict[WallsCondition, float] = {
    WallsCondition.EXCELLENT: 0,
    WallsCondition.GOOD: 0,
    WallsCondition.NEEDS_PAINT: 1,
    WallsCondition.NEEDS_REPAIR: 2,
}

CEILINGS_POINTS: Dict[CeilingsCondition, float] = {
    CeilingsCondition.EXCELLENT: 0,
    CeilingsCondition.GOOD: 0,
    CeilingsCondition.STAINS_CRACKS: 1,
    CeilingsCondition.NEEDS_REPAIR: 2,
}

LIGHTING_POINTS: Dict[LightingCondition, float] = {
    LightingCondition.MODERN: 0,
    LightingCondition.UPDATED: 0,
    LightingCondition.ADEQUATE: 0,
    LightingCondition.OUTDATED: 1,
    LightingCondition.NEEDS_REPLACEMENT: 1,
}

BEDROOM_FLOORING_POINTS: Dict[BedroomFlooring, float] = {
    BedroomFlooring.TILE: 0,
    BedroomFlooring.WOOD: 0,
    BedroomFlooring.CARPET_GOOD: 0,
    BedroomFlooring.CARPET_WORN: 1,
    BedroomFlooring.NEEDS_REPLACEMENT: 2,
}

BEDROOM_CONDITION_POINTS: Dict[BedroomCondition, float] = {
    BedroomCondition.EXCELLENT: 0,
    BedroomCondition.GOOD: 0,
    BedroomCondition.NEEDS_PAINT: 1,
    BedroomCondition.NEEDS_WORK: 2,
}

CLOSETS_POINTS: Dict[ClosetsCondition, float] = {
    ClosetsCondition.EXCELLENT: 0,
    ClosetsCondition.ADEQUATE: 0,
    ClosetsCondition.SMALL: 0,
    ClosetsCondition.NO_CLOSET: 0.5,
}

# 7. Pool (2-5 pts when present)
POOL_POINTS: Dict[PoolCondition, float] = {
    PoolCondition.EXCELLENT: 0,
    PoolCondition.GOOD: 0,
    PoolCondition.NEEDS_REPAIR: 3,
    PoolCondition.NOT_WORKING: 5,
}

POOL_EQUIPMENT_POINTS: Dict[PoolEquipment, float] = {
    PoolEquipment.NEW: 0,
    PoolEquipment.GOOD: 0,
    PoolEquipment.OLD: 1,
    PoolEquipment.NEEDS_REPLACEMENT: 2,
}

# 6. Boolean defects: (points, structural/systems bucket, weight, issue label).
# Each flag stacks; only the total is capped.
DEFECT_PENALTIES = (
    ("mold", 5, "structural", 15, "Mold/mildew present"),
    ("termites", 6, "structural", 18, "Termite/pest damage"),
    ("water_damage", 5, "structural", 15, "Water damage"),
    ("fire_damage", 10, "structural", 30, "Fire damage"),
    ("structural_issues", 8, "structural", 24, "Structural issues"),
    ("code_violations", 4, "systems", 12, "Code violations"),
)

# Tier upper bounds (inclusive); anything above the last bound is a full gut.
TIER_THRESHOLDS = (
    (15.0, RehabTier.LIGHT),
    (30.0, RehabTier.LITE_PLUS),
    (50.0, RehabTier.MEDIUM),
    (70.0, RehabTier.HEAVY),
)


def _points(table: Mapping, value) -> float:
    if value is None:
        return 0.0
    return float(table[value])


class _Tally:
    def __init__(self) -> None:
        self.score = 0.0
        self.issues: list[str] = []
        self.buckets = {"structural": 0.0, "systems": 0.0, "interior": 0.0, "exterior": 0.0}

    def add(self, points: float, bucket: Optional[str] = None, weight: float = 0.0) -> None:
        self.score += points
        if bucket is not None:
            self.buckets[bucket] += points * weight

    def flag(self, issue: str) -> None:
        self.issues.append(issue)


def _score_structure_and_systems(a: PropertyConditionAssessment, t: _Tally) -> None:
    roof = _points(ROOF_POINTS, a.roof.condition)
    t.add(roof, "structural", 3)
    if roof >= 8:
        t.flag("Roof: " + a.roof.condition.value)
    if a.roof.leaks:
        t.add(3)
        t.buckets["structural"] += 9
        t.flag("Roof leaks present")

    foundation = _points(FOUNDATION_POINTS, a.foundation.condition)
    t.add(foundation, "structural", 4)
    if foundation >= 6:
        t.flag("Foundation: " + a.foundation.condition.value)

    # Each HVAC system on the property is its own replacement.
    hvac = _points(HVAC_POINTS, a.hvac.condition)
    t.score += hvac * a.hvac.number_of_units
    t.buckets["systems"] += hvac * 5
    if hvac >= 5:
        t.flag("HVAC: " + a.hvac.condition.value)

    plumbing = _points(PLUMBING_POINTS, a.plumbing.condition)
    t.add(plumbing, "systems", 3)
    if plumbing >= 3:
        t.flag("Plumbing: " + a.plumbing.condition.value)
    if a.plumbing.leaks:
        t.add(2)
        t.buckets["systems"] += 6
        t.flag("Plumbing leaks present")
    pipes = _points(PIPE_MATERIAL_POINTS, a.plumbing.pipe_material)
    t.add(pipes, "systems", 3)
    if pipes > 0:
        t.flag("Galvanized pipes (needs replacement)")

    heater = _points(WATER_HEATER_POINTS, a.plumbing.water_heater)
    t.add(heater, "systems", 1)
    if heater >= 2:
        t.flag("Water heater needs replacement")

    electrical = _points(ELECTRICAL_POINTS, a.electrical.condition)
    t.add(electrical, "systems", 3)
    if electrical >= 3:
        t.flag("Electrical: " + a.electrical.condition.value)
    wiring = _points(WIRING_POINTS, a.electrical.wiring_type)
    t.add(wiring, "systems", 3)
    if wiring > 0:
        t.flag(f"Outdated wiring ({a.electrical.wiring_type.value})")


def _score_exterior(a: PropertyConditionAssessment, t: _Tally) -> None:
    ext = a.exterior
    t.add(_points(SIDING_POINTS, ext.siding), "exterior", 2)

    windows = _points(WINDOWS_POINTS, ext.windows)
    t.add(windows, "exterior", 2)
    if windows >= 4:
        t.flag("Windows: " + ext.windows.value)

    t.add(_points(DOORS_POINTS, ext.doors), "exterior", 1)
    t.add(_points(GUTTERS_POINTS, ext.gutters))
    t.add(_points(LANDSCAPING_POINTS, ext.landscaping), "exterior", 0.5)
    t.add(_points(DRIVEWAY_POINTS, ext.driveway), "exterior", 1)
    t.add(_points(FENCING_POINTS, ext.fencing), "exterior", 0.5)


def _score_kitchen(a: PropertyConditionAssessment, t: _Tally) -> None:
    k = a.kitchen
    kitchen = _points(KITCHEN_POINTS, k.condition)
    t.add(kitchen, "interior", 2)
    if kitchen >= 4:
        t.flag("Kitchen: " + k.condition.value)

    # A kitchen that is not getting work has no cabinet/counter budget.
    if k.condition not in KITCHEN_NEEDS_WORK:
        return
    t.add(_points(CABINETS_POINTS, k.cabinets), "interior", 1)
    t.add(_points(COUNTERTOPS_POINTS, k.countertops), "interior", 1)
    t.add(_points(APPLIANCES_POINTS, k.appliances), "interior", 1)
    t.add(_points(KITCHEN_FLOORING_POINTS, k.flooring), "interior", 0.5)


def _bathroom_points(bath: BathroomRecord) -> float:
    points = _points(BATHROOM_POINTS, bath.condition)
    # Fixtures only matter in a bathroom that is being redone.
    if bath.condition not in BATHROOM_NEEDS_WORK:
        return points
    points += _points(VANITY_POINTS, bath.vanity)
    points += _points(TOILET_POINTS, bath.toilet)
    points += _points(TUB_SHOWER_POINTS, bath.tub_shower)
    points += _points(TILE_POINTS, bath.tile)
    return points


def _bedroom_points(bedroom: BedroomRecord) -> float:
    return (
        _points(BEDROOM_FLOORING_POINTS, bedroom.flooring)
        + _points(BEDROOM_CONDITION_POINTS, bedroom.condition)
        + _points(CLOSETS_POINTS, bedroom.closets)
    )


def _score_interior(a: PropertyConditionAssessment, t: _Tally) -> None:
    if a.bathrooms:
        avg_bath = sum(_bathroom_points(b) for b in a.bathrooms) / len(a.bathrooms)
        t.add(avg_bath, "interior", 2)
        poor = sum(1 for b in a.bathrooms if b.condition == BathroomCondition.POOR)
        if poor >= 2:
            t.flag(f"{poor} bathrooms need full remodel")

    t.add(_points(INTERIOR_FLOORING_POINTS, a.interior.flooring), "interior", 1)
    t.add(_points(WALLS_POINTS, a.interior.walls))

    if a.bedrooms:
        avg_bed = sum(_bedroom_points(b) for b in a.bedrooms) / len(a.bedrooms)
        avg_bed = min(avg_bed, BEDROOM_CONTRIBUTION_CAP)
        t.add(avg_bed, "interior", 1)

    t.add(_points(CEILINGS_POINTS, a.interior.ceilings), "interior", 1)
    t.add(_points(LIGHTING_POINTS, a.interior.lighting))


def _score_defects(a: PropertyConditionAssessment, t: _Tally) -> None:
    issues = a.additional_issues
    for attr, points, bucket, weight, label in DEFECT_PENALTIES:
        if getattr(issues, attr):
            t.score += points
            t.buckets[bucket] += weight
            t.flag(label)
    # Free-text "other" usually means something the form had no box for.
    if issues.other and issues.other.strip():
        t.score += 2
        t.buckets["structural"] += 6
        t.flag("Additional issues noted (see details)")


def _score_pool(a: PropertyConditionAssessment, t: _Tally) -> None:
    if not a.pool.has_pool:
        return
    pool = _points(POOL_POINTS, a.pool.condition)
    t.add(pool, "exterior", 2)
    if pool >= 3:
        t.flag("Pool: " + a.pool.condition.value)
    equipment = _points(POOL_EQUIPMENT_POINTS, a.pool.equipment)
    t.add(equipment, "exterior", 1)
    if equipment >= 2:
        t.flag("Pool equipment needs replacement")


def score_assessment(assessment: PropertyConditionAssessment) -> ConditionScore:
    """
    Additive point system over weighted categories, clamped to [0, 100].

    Issues are collected in category order: overall, roof, foundation,
    HVAC, plumbing, electrical, exterior, kitchen, bathrooms, defects, pool.
    """
    t = _Tally()

    overall = _points(OVERALL_POINTS, assessment.overall_condition)
    t.add(overall)
    if overall >= 20:
        t.flag("Overall condition: " + assessment.overall_condition.value)

    _score_structure_and_systems(assessment, t)
    _score_exterior(assessment, t)
    _score_kitchen(assessment, t)
    _score_interior(assessment, t)
    _score_defects(assessment, t)
    _score_pool(assessment, t)

    score = min(max(t.score, 0.0), MAX_SCORE)
    return ConditionScore(
        condition_score=score,
        major_issues=t.issues,
        breakdown=ConditionBreakdown(**t.buckets),
    )


def tier_for_score(score: float) -> RehabTier:
    for upper, tier in TIER_THRESHOLDS:
        if score <= upper:
            return tier
    return RehabTier.FULLGUT


def score_condition(
    assessment: PropertyConditionAssessment,
    sqft: float,
    unit_count: int,
    estimator: RehabEstimator | None = None,
) -> RehabEstimateResult:
    """Score the assessment, pick a rehab tier, and price it."""
    estimator = estimator or RehabEstimator()
    scored = score_assessment(assessment)
    tier = tier_for_score(scored.condition_score)
    return RehabEstimateResult(
        estimated_cost=estimator.estimate(sqft, unit_count, tier),
        suggested_condition=tier.value,
        condition_score=scored.condition_score,
        major_issues=scored.major_issues,
        breakdown=scored.breakdown,
    )


def describe_condition_score(score: float) -> str:
    tier = tier_for_score(score)
    return {
        RehabTier.LIGHT: "Property is in good condition - only cosmetic updates needed (paint, flooring, fixtures)",
        RehabTier.LITE_PLUS: "Property needs light-moderate work - cosmetic updates plus some appliances, fixtures, or minor repairs",
        RehabTier.MEDIUM: "Property needs moderate rehab - expect kitchen/bath remodels, possibly roof or HVAC replacement",
        RehabTier.HEAVY: "Property needs major rehab - multiple major systems, significant repairs, possibly structural work",
        RehabTier.FULLGUT: "Property needs full gut renovation - down to studs, all new systems, major permits required",
    }[tier]


def format_breakdown(breakdown: ConditionBreakdown) -> str:
    """Bucket weights as rounded percents of their total, for display."""
    total = breakdown.total
    if total == 0:
        return "No condition data available"

    labels = (
        ("Structural/Foundation", breakdown.structural),
        ("Major Systems", breakdown.systems),
        ("Interior Finishes", breakdown.interior),
        ("Exterior", breakdown.exterior),
    )
    return ", ".join(
        f"{label}: {round(value / total * 100)}%" for label, value in labels if value > 0
    )
