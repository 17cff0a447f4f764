# src/dealdesk/domain/condition.py
"""
Structured property-condition assessment.

Every condition field is a closed vocabulary. `None` (or an empty string
from a form) means "not assessed" and never adds rehab points.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class OverallCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    UNINHABITABLE = "Uninhabitable"


class RoofCondition(str, Enum):
    NEW = "New (0-5 yrs)"
    GOOD = "Good (6-15 yrs)"
    FAIR = "Fair (16-20 yrs)"
    POOR = "Poor (20+ yrs)"
    NEEDS_REPLACEMENT = "Needs Replacement"


class FoundationCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    MINOR_CRACKS = "Minor Cracks"
    MAJOR_ISSUES = "Major Issues"
    NEEDS_REPAIR = "Needs Repair"


class HvacCondition(str, Enum):
    NEW = "New (0-5 yrs)"
    GOOD = "Good (6-10 yrs)"
    FAIR = "Fair (11-15 yrs)"
    OLD = "Old (15+ yrs)"
    NOT_WORKING = "Not Working"


class PlumbingCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    HAS_ISSUES = "Has Issues"
    NEEDS_REPLACEMENT = "Needs Replacement"


class PipeMaterial(str, Enum):
    COPPER = "Copper"
    PEX = "PEX"
    PVC = "PVC"
    MIXED = "Mixed"
    UNKNOWN = "Unknown"
    GALVANIZED = "Galvanized"


class WaterHeaterCondition(str, Enum):
    NEW = "New"
    GOOD = "Good"
    OLD = "Old"
    NEEDS_REPLACEMENT = "Needs Replacement"


class ElectricalCondition(str, Enum):
    UPDATED = "Updated"
    ADEQUATE = "Adequate"
    NEEDS_WORK = "Needs Work"
    UNSAFE = "Unsafe"


class WiringType(str, Enum):
    MODERN = "Modern"
    MIXED = "Mixed"
    ALUMINUM = "Aluminum"
    KNOB_AND_TUBE = "Knob & Tube"


class SidingCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_PAINT = "Needs Paint"
    NEEDS_REPAIR = "Needs Repair"
    NEEDS_REPLACEMENT = "Needs Replacement"


class WindowsCondition(str, Enum):
    NEW = "New"
    GOOD = "Good"
    OLD_SINGLE_PANE = "Old Single Pane"
    BROKEN_MISSING = "Broken/Missing"


class WindowsType(str, Enum):
    IMPACT_RATED = "Impact-Rated"
    HURRICANE = "Hurricane"
    DOUBLE_PANE = "Double Pane"
    SINGLE_PANE = "Single Pane"
    MIXED = "Mixed"
    UNKNOWN = "Unknown"


class DoorsCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    WORN = "Worn"
    NEEDS_REPLACEMENT = "Needs Replacement"


class GuttersCondition(str, Enum):
    GOOD = "Good"
    NEEDS_REPAIR = "Needs Repair"
    MISSING = "Missing"


class LandscapingCondition(str, Enum):
    WELL_MAINTAINED = "Well Maintained"
    MINIMAL = "Minimal"
    OVERGROWN = "Overgrown"


class FencingCondition(str, Enum):
    GOOD = "Good"
    NO_FENCE = "None"
    NEEDS_REPAIR = "Needs Repair"


class DrivewayCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    CRACKED = "Cracked"
    NEEDS_REPLACEMENT = "Needs Replacement"


class KitchenCondition(str, Enum):
    MODERN = "Modern"
    UPDATED = "Updated"
    GOOD = "Good"
    DATED = "Dated"
    NEEDS_FULL_REHAB = "Needs Full Rehab"


class CabinetsCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    WORN = "Worn"
    NEEDS_REPLACEMENT = "Needs Replacement"


class CountertopsCondition(str, Enum):
    GRANITE_QUARTZ = "Granite/Quartz"
    LAMINATE_GOOD = "Laminate Good"
    LAMINATE_WORN = "Laminate Worn"
    NEEDS_REPLACEMENT = "Needs Replacement"


class AppliancesCondition(str, Enum):
    ALL_NEW = "All New"
    ALL_GOOD = "All Good"
    MOST_GOOD = "Most Good"
    OLD = "Old"
    MISSING_BROKEN = "Missing/Broken"


class KitchenFlooring(str, Enum):
    TILE = "Tile"
    WOOD = "Wood"
    VINYL = "Vinyl"
    NEEDS_REPLACEMENT = "Needs Replacement"


class BathroomCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    DATED = "Dated"
    POOR = "Poor"


class VanityCondition(str, Enum):
    MODERN = "Modern"
    GOOD = "Good"
    WORN = "Worn"
    NEEDS_REPLACEMENT = "Needs Replacement"


class ToiletCondition(str, Enum):
    GOOD = "Good"
    NEEDS_REPLACEMENT = "Needs Replacement"


class TubShowerCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    WORN_STAINED = "Worn/Stained"
    CRACKED_DAMAGED = "Cracked/Damaged"


class TileCondition(str, Enum):
    MODERN = "Modern"
    GOOD = "Good"
    DATED = "Dated"
    CRACKED_MISSING = "Cracked/Missing"


class BedroomFlooring(str, Enum):
    TILE = "Tile"
    WOOD = "Wood"
    CARPET_GOOD = "Carpet Good"
    CARPET_WORN = "Carpet Worn"
    NEEDS_REPLACEMENT = "Needs Replacement"


class ClosetsCondition(str, Enum):
    EXCELLENT = "Excellent"
    ADEQUATE = "Adequate"
    SMALL = "Small"
    NO_CLOSET = "None"


class BedroomCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_PAINT = "Needs Paint"
    NEEDS_WORK = "Needs Work"


class InteriorFlooring(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    MIXED = "Mixed"
    NEEDS_REPLACEMENT = "Needs Replacement"


class WallsCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_PAINT = "Needs Paint"
    NEEDS_REPAIR = "Needs Repair"


class CeilingsCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    STAINS_CRACKS = "Stains/Cracks"
    NEEDS_REPAIR = "Needs Repair"


class LightingCondition(str, Enum):
    MODERN = "Modern"
    UPDATED = "Updated"
    ADEQUATE = "Adequate"
    OUTDATED = "Outdated"
    NEEDS_REPLACEMENT = "Needs Replacement"


class PoolCondition(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_REPAIR = "Needs Repair"
    NOT_WORKING = "Not Working"


class PoolEquipment(str, Enum):
    NEW = "New"
    GOOD = "Good"
    OLD = "Old"
    NEEDS_REPLACEMENT = "Needs Replacement"


class _Record(BaseModel):
    """Form records send "" for unanswered selects; treat that as not assessed."""

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RoofRecord(_Record):
    condition: RoofCondition | None = None
    leaks: bool = False


class FoundationRecord(_Record):
    condition: FoundationCondition | None = None


class HvacRecord(_Record):
    condition: HvacCondition | None = None
    number_of_units: int = Field(default=1, ge=1)


class PlumbingRecord(_Record):
    condition: PlumbingCondition | None = None
    pipe_material: PipeMaterial | None = None
    water_heater: WaterHeaterCondition | None = None
    leaks: bool = False


class ElectricalRecord(_Record):
    condition: ElectricalCondition | None = None
    wiring_type: WiringType | None = None


class ExteriorRecord(_Record):
    siding: SidingCondition | None = None
    windows: WindowsCondition | None = None
    windows_type: WindowsType | None = None
    doors: DoorsCondition | None = None
    gutters: GuttersCondition | None = None
    landscaping: LandscapingCondition | None = None
    fencing: FencingCondition | None = None
    driveway: DrivewayCondition | None = None


class KitchenRecord(_Record):
    condition: KitchenCondition | None = None
    cabinets: CabinetsCondition | None = None
    countertops: CountertopsCondition | None = None
    appliances: AppliancesCondition | None = None
    flooring: KitchenFlooring | None = None


class BathroomRecord(_Record):
    location: str | None = None
    condition: BathroomCondition | None = None
    vanity: VanityCondition | None = None
    toilet: ToiletCondition | None = None
    tub_shower: TubShowerCondition | None = None
    tile: TileCondition | None = None


class BedroomRecord(_Record):
    location: str | None = None
    flooring: BedroomFlooring | None = None
    closets: ClosetsCondition | None = None
    condition: BedroomCondition | None = None


class InteriorRecord(_Record):
    flooring: InteriorFlooring | None = None
    walls: WallsCondition | None = None
    ceilings: CeilingsCondition | None = None
    lighting: LightingCondition | None = None


class PoolRecord(_Record):
    has_pool: bool = False
    condition: PoolCondition | None = None
    equipment: PoolEquipment | None = None


class AdditionalIssues(_Record):
    mold: bool = False
    termites: bool = False
    water_damage: bool = False
    fire_damage: bool = False
    structural_issues: bool = False
    code_violations: bool = False
    other: str | None = None


class PropertyConditionAssessment(_Record):
    overall_condition: OverallCondition | None = None
    roof: RoofRecord = Field(default_factory=RoofRecord)
    foundation: FoundationRecord = Field(default_factory=FoundationRecord)
    hvac: HvacRecord = Field(default_factory=HvacRecord)
    plumbing: PlumbingRecord = Field(default_factory=PlumbingRecord)
    electrical: ElectricalRecord = Field(default_factory=ElectricalRecord)
    exterior: ExteriorRecord = Field(default_factory=ExteriorRecord)
    kitchen: KitchenRecord = Field(default_factory=KitchenRecord)
    bathrooms: list[BathroomRecord] = Field(default_factory=list)
    bedrooms: list[BedroomRecord] = Field(default_factory=list)
    interior: InteriorRecord = Field(default_factory=InteriorRecord)
    pool: PoolRecord = Field(default_factory=PoolRecord)
    additional_issues: AdditionalIssues = Field(default_factory=AdditionalIssues)
    flood_zone: bool = False
