import copy

import pytest
from hypothesis import given, settings, strategies as st

from dealdesk.adapters.rehab_estimator import RehabTier
from dealdesk.analysis import scoring
from dealdesk.analysis.scoring import (
    describe_condition_score,
    format_breakdown,
    score_assessment,
    score_condition,
    tier_for_score,
)
from dealdesk.domain import condition as c
from dealdesk.domain.condition import PropertyConditionAssessment
from dealdesk.domain.underwriting import ConditionBreakdown

from deal_builders import good_assessment

TABLES = [
    (c.OverallCondition, scoring.OVERALL_POINTS),
    (c.RoofCondition, scoring.ROOF_POINTS),
    (c.FoundationCondition, scoring.FOUNDATION_POINTS),
    (c.HvacCondition, scoring.HVAC_POINTS),
    (c.PlumbingCondition, scoring.PLUMBING_POINTS),
    (c.PipeMaterial, scoring.PIPE_MATERIAL_POINTS),
    (c.WaterHeaterCondition, scoring.WATER_HEATER_POINTS),
    (c.ElectricalCondition, scoring.ELECTRICAL_POINTS),
    (c.WiringType, scoring.WIRING_POINTS),
    (c.SidingCondition, scoring.SIDING_POINTS),
    (c.WindowsCondition, scoring.WINDOWS_POINTS),
    (c.DoorsCondition, scoring.DOORS_POINTS),
    (c.GuttersCondition, scoring.GUTTERS_POINTS),
    (c.LandscapingCondition, scoring.LANDSCAPING_POINTS),
    (c.DrivewayCondition, scoring.DRIVEWAY_POINTS),
    (c.FencingCondition, scoring.FENCING_POINTS),
    (c.KitchenCondition, scoring.KITCHEN_POINTS),
    (c.CabinetsCondition, scoring.CABINETS_POINTS),
    (c.CountertopsCondition, scoring.COUNTERTOPS_POINTS),
    (c.AppliancesCondition, scoring.APPLIANCES_POINTS),
    (c.KitchenFlooring, scoring.KITCHEN_FLOORING_POINTS),
    (c.BathroomCondition, scoring.BATHROOM_POINTS),
    (c.VanityCondition, scoring.VANITY_POINTS),
    (c.ToiletCondition, scoring.TOILET_POINTS),
    (c.TubShowerCondition, scoring.TUB_SHOWER_POINTS),
    (c.TileCondition, scoring.TILE_POINTS),
    (c.InteriorFlooring, scoring.INTERIOR_FLOORING_POINTS),
    (c.WallsCondition, scoring.WALLS_POINTS),
    (c.CeilingsCondition, scoring.CEILINGS_POINTS),
    (c.LightingCondition, scoring.LIGHTING_POINTS),
    (c.BedroomFlooring, scoring.BEDROOM_FLOORING_POINTS),
    (c.BedroomCondition, scoring.BEDROOM_CONDITION_POINTS),
    (c.ClosetsCondition, scoring.CLOSETS_POINTS),
    (c.PoolCondition, scoring.POOL_POINTS),
    (c.PoolEquipment, scoring.POOL_EQUIPMENT_POINTS),
]


@pytest.mark.parametrize("enum_cls,table", TABLES, ids=[e.__name__ for e, _ in TABLES])
def test_every_condition_value_is_scored(enum_cls, table):
    assert set(table) == set(enum_cls)


@pytest.mark.parametrize("enum_cls,table", TABLES, ids=[e.__name__ for e, _ in TABLES])
def test_tables_get_worse_in_declaration_order(enum_cls, table):
    points = [table[m] for m in enum_cls]
    assert points == sorted(points)
    # the best value never costs anything
    assert points[0] == 0


def test_acceptable_property_scores_zero(assessment):
    result = score_condition(assessment, sqft=1680, unit_count=2)

    assert result.condition_score == 0
    assert result.suggested_condition == "light"
    assert result.major_issues == []
    assert result.breakdown.total == 0
    # 1680 x 35 x 0.50 x 1.05 = 30,870 -> 31,000
    assert result.estimated_cost == 31_000


def test_empty_assessment_is_not_assessed():
    result = score_assessment(PropertyConditionAssessment())
    assert result.condition_score == 0
    assert result.major_issues == []


def test_blank_form_values_mean_not_assessed():
    a = PropertyConditionAssessment.model_validate({"overall_condition": "", "roof": {"condition": " "}})
    assert a.overall_condition is None
    assert a.roof.condition is None


def test_roof_replacement_with_leaks():
    a = PropertyConditionAssessment.model_validate(
        {"roof": {"condition": "Needs Replacement", "leaks": True}}
    )
    result = score_assessment(a)

    assert result.condition_score == 13
    assert result.major_issues == ["Roof: Needs Replacement", "Roof leaks present"]
    assert result.breakdown.structural == 39


def test_hvac_points_scale_with_system_count():
    one = score_assessment(PropertyConditionAssessment.model_validate({"hvac": {"condition": "Old (15+ yrs)"}}))
    three = score_assessment(
        PropertyConditionAssessment.model_validate({"hvac": {"condition": "Old (15+ yrs)", "number_of_units": 3}})
    )
    assert one.condition_score == 5
    assert three.condition_score == 15
    # weights stay per-system
    assert three.breakdown.systems == one.breakdown.systems == 25
    assert three.major_issues == ["HVAC: Old (15+ yrs)"]


def test_plumbing_penalties_stack():
    a = PropertyConditionAssessment.model_validate(
        {"plumbing": {"condition": "Has Issues", "pipe_material": "Galvanized", "water_heater": "Needs Replacement",
                      "leaks": True}}
    )
    result = score_assessment(a)
    assert result.condition_score == 3 + 2 + 3 + 2
    assert result.major_issues == [
        "Plumbing: Has Issues",
        "Plumbing leaks present",
        "Galvanized pipes (needs replacement)",
        "Water heater needs replacement",
    ]


def test_outdated_wiring_is_flagged():
    a = PropertyConditionAssessment.model_validate({"electrical": {"condition": "Adequate", "wiring_type": "Knob & Tube"}})
    result = score_assessment(a)
    assert result.condition_score == 3
    assert result.major_issues == ["Outdated wiring (Knob & Tube)"]


def test_kitchen_details_ignored_when_kitchen_is_acceptable():
    kitchen = {
        "condition": "Good",
        "cabinets": "Needs Replacement",
        "countertops": "Needs Replacement",
        "appliances": "Missing/Broken",
        "flooring": "Needs Replacement",
    }
    a = PropertyConditionAssessment.model_validate({"kitchen": kitchen})
    assert score_assessment(a).condition_score == 0


def test_kitchen_details_count_when_kitchen_needs_work():
    kitchen = {
        "condition": "Dated",
        "cabinets": "Needs Replacement",
        "countertops": "Laminate Worn",
        "appliances": "Old",
        "flooring": "Needs Replacement",
    }
    result = score_assessment(PropertyConditionAssessment.model_validate({"kitchen": kitchen}))
    assert result.condition_score == 4 + 2 + 1 + 1 + 2
    assert result.major_issues == ["Kitchen: Dated"]
    assert result.breakdown.interior == pytest.approx(8 + 2 + 1 + 1 + 1)


def test_bathrooms_are_averaged_and_gated():
    bathrooms = [
        {"condition": "Poor", "vanity": "Needs Replacement", "toilet": "Needs Replacement"},
        {"condition": "Good", "vanity": "Needs Replacement", "tub_shower": "Cracked/Damaged"},
    ]
    result = score_assessment(PropertyConditionAssessment.model_validate({"bathrooms": bathrooms}))
    # (5 + 0.5 + 0.3 + 0) / 2; the Good bath's fixtures are not charged
    assert result.condition_score == pytest.approx(2.9)
    assert result.major_issues == []


def test_two_poor_bathrooms_are_flagged():
    bathrooms = [{"condition": "Poor"}, {"condition": "Poor"}, {"condition": "Dated"}]
    result = score_assessment(PropertyConditionAssessment.model_validate({"bathrooms": bathrooms}))
    assert "2 bathrooms need full remodel" in result.major_issues


def test_bedroom_contribution_is_capped():
    bedrooms = [{"flooring": "Needs Replacement", "condition": "Needs Work", "closets": "None"}] * 3
    result = score_assessment(PropertyConditionAssessment.model_validate({"bedrooms": bedrooms}))
    assert result.condition_score == 3


def test_defect_flags_stack_in_order():
    issues = {"mold": True, "fire_damage": True, "code_violations": True, "other": "Unpermitted addition"}
    result = score_assessment(PropertyConditionAssessment.model_validate({"additional_issues": issues}))

    assert result.condition_score == 5 + 10 + 4 + 2
    assert result.major_issues == [
        "Mold/mildew present",
        "Fire damage",
        "Code violations",
        "Additional issues noted (see details)",
    ]
    assert result.breakdown.structural == 15 + 30 + 6
    assert result.breakdown.systems == 12


def test_pool_ignored_without_pool():
    pool = {"has_pool": False, "condition": "Not Working", "equipment": "Needs Replacement"}
    assert score_assessment(PropertyConditionAssessment.model_validate({"pool": pool})).condition_score == 0


def test_pool_scored_when_present():
    pool = {"has_pool": True, "condition": "Not Working", "equipment": "Needs Replacement"}
    result = score_assessment(PropertyConditionAssessment.model_validate({"pool": pool}))
    assert result.condition_score == 7
    assert result.major_issues == ["Pool: Not Working", "Pool equipment needs replacement"]


def _worst_assessment() -> PropertyConditionAssessment:
    return PropertyConditionAssessment.model_validate(
        {
            "overall_condition": "Uninhabitable",
            "roof": {"condition": "Needs Replacement", "leaks": True},
            "foundation": {"condition": "Major Issues"},
            "hvac": {"condition": "Not Working", "number_of_units": 4},
            "plumbing": {"condition": "Needs Replacement", "pipe_material": "Galvanized",
                         "water_heater": "Needs Replacement", "leaks": True},
            "electrical": {"condition": "Unsafe", "wiring_type": "Aluminum"},
            "additional_issues": {"mold": True, "termites": True, "water_damage": True, "fire_damage": True,
                                  "structural_issues": True, "code_violations": True},
        }
    )


def test_score_is_capped_at_100():
    result = score_condition(_worst_assessment(), sqft=1000, unit_count=1)
    assert result.condition_score == 100
    assert result.suggested_condition == "fullgut"
    # 1000 x 35 x 1.80
    assert result.estimated_cost == 63_000


@pytest.mark.parametrize(
    "score,tier",
    [
        (0, RehabTier.LIGHT),
        (15, RehabTier.LIGHT),
        (16, RehabTier.LITE_PLUS),
        (30, RehabTier.LITE_PLUS),
        (30.5, RehabTier.MEDIUM),
        (50, RehabTier.MEDIUM),
        (51, RehabTier.HEAVY),
        (70, RehabTier.HEAVY),
        (71, RehabTier.FULLGUT),
        (100, RehabTier.FULLGUT),
    ],
)
def test_tier_thresholds(score, tier):
    assert tier_for_score(score) == tier


def test_description_follows_tier():
    assert describe_condition_score(10).startswith("Property is in good condition")
    assert describe_condition_score(85).startswith("Property needs full gut renovation")


def test_breakdown_display():
    assert format_breakdown(ConditionBreakdown()) == "No condition data available"
    text = format_breakdown(ConditionBreakdown(structural=30.0, systems=10.0))
    assert text == "Structural/Foundation: 75%, Major Systems: 25%"


# ---------------------------------------------------------------------
# Property: worsening one category never lowers the score
# ---------------------------------------------------------------------

FIELDS = [
    (("overall_condition",), c.OverallCondition),
    (("roof", "condition"), c.RoofCondition),
    (("foundation", "condition"), c.FoundationCondition),
    (("hvac", "condition"), c.HvacCondition),
    (("plumbing", "condition"), c.PlumbingCondition),
    (("plumbing", "pipe_material"), c.PipeMaterial),
    (("electrical", "wiring_type"), c.WiringType),
    (("exterior", "siding"), c.SidingCondition),
    (("exterior", "windows"), c.WindowsCondition),
    (("exterior", "fencing"), c.FencingCondition),
    (("kitchen", "condition"), c.KitchenCondition),
    (("kitchen", "cabinets"), c.CabinetsCondition),
    (("kitchen", "appliances"), c.AppliancesCondition),
    (("interior", "flooring"), c.InteriorFlooring),
    (("interior", "lighting"), c.LightingCondition),
    (("pool", "condition"), c.PoolCondition),
]


def _set(raw: dict, path: tuple, value) -> dict:
    if len(path) == 1:
        raw[path[0]] = value
    else:
        raw.setdefault(path[0], {})[path[1]] = value
    return raw


@st.composite
def raw_assessments(draw):
    raw: dict = {"pool": {"has_pool": draw(st.booleans())}}
    for path, enum_cls in FIELDS:
        value = draw(st.one_of(st.none(), st.sampled_from([m.value for m in enum_cls])))
        _set(raw, path, value)
    raw["bathrooms"] = [
        {"condition": draw(st.sampled_from([m.value for m in c.BathroomCondition])), "vanity": "Needs Replacement"}
        for _ in range(draw(st.integers(min_value=0, max_value=3)))
    ]
    return raw


@settings(max_examples=200, deadline=None)
@given(raw=raw_assessments(), field_idx=st.integers(min_value=0, max_value=len(FIELDS) - 1), data=st.data())
def test_worse_condition_never_lowers_score(raw, field_idx, data):
    path, enum_cls = FIELDS[field_idx]
    members = list(enum_cls)
    better = data.draw(st.integers(min_value=0, max_value=len(members) - 1))
    worse = data.draw(st.integers(min_value=better, max_value=len(members) - 1))

    before = score_assessment(
        PropertyConditionAssessment.model_validate(_set(copy.deepcopy(raw), path, members[better].value))
    )
    raw_after = _set(copy.deepcopy(raw), path, members[worse].value)
    after = score_assessment(PropertyConditionAssessment.model_validate(raw_after))

    assert 0 <= before.condition_score <= 100
    assert after.condition_score >= before.condition_score


def test_good_assessment_builder_covers_every_section():
    a = good_assessment()
    assert a.kitchen.condition == c.KitchenCondition.GOOD
    assert len(a.bathrooms) == 2 and len(a.bedrooms) == 2
