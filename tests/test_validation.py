import pytest

from dealdesk.domain.errors import DealValidationError
from dealdesk.domain.property import UnitDetail
from dealdesk.services.validation import parse_assessment, parse_inputs, prepare_inputs, validate_inputs

from deal_builders import duplex_inputs, flat_assumptions, good_assessment, hollywood_zip_entry


def _raw(**overrides):
    raw = {
        "address": "123 Main St, Hollywood, FL 33024",
        "units": 1,
        "unit_details": [{"beds": 3, "baths": 2, "market_rent": 2400}],
        "total_sqft": 1400,
        "year_built": 1985,
        "purchase_price": 350000,
        "loan_interest_rate": 7.0,
        "loan_term_years": 30,
        "down_payment_pct": 20,
    }
    raw.update(overrides)
    return raw


def test_parse_accepts_a_clean_payload():
    inputs = parse_inputs(_raw())
    assert inputs.loan_amount == pytest.approx(280_000.0)


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"purchase_price": -1}, "purchase_price"),
        ({"loan_term_years": 0}, "loan_term_years"),
        ({"down_payment_pct": 120}, "down_payment_pct"),
        ({"units": 2}, "unit_details"),
    ],
)
def test_parse_rejects_malformed_inputs(overrides, field):
    with pytest.raises(DealValidationError) as exc:
        parse_inputs(_raw(**overrides))
    assert any(field in reason for reason in exc.value.reasons)


def test_every_failing_field_is_reported():
    with pytest.raises(DealValidationError) as exc:
        parse_inputs(_raw(purchase_price=-5, loan_term_years=-1, down_payment_pct=-3))
    assert len(exc.value.reasons) == 3
    assert "purchase_price" in str(exc.value)


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        validate_inputs(duplex_inputs(units=3))


def test_unit_mismatch_message_names_both_counts():
    with pytest.raises(DealValidationError) as exc:
        validate_inputs(duplex_inputs(units=1))
    assert exc.value.reasons == ["units (1) does not match unit_details entries (2)"]


def test_rehab_deal_needs_a_positive_arv():
    with pytest.raises(DealValidationError):
        validate_inputs(duplex_inputs(is_rehab=True, after_repair_value=0.0))


def test_prepare_fills_documented_defaults():
    inputs = duplex_inputs(property_taxes=None, property_insurance=None, acquisition_costs_pct=4.0)
    prepared = prepare_inputs(inputs, flat_assumptions(), current_year=2025)

    assert prepared.property_taxes == pytest.approx(6_000.0)
    # 1680 sqft, 40 years old -> 4.25/sqft = 7,140 -> 7,150
    assert prepared.property_insurance == 7_150
    assert prepared.acquisition_costs_amount == pytest.approx(12_000.0)
    assert prepared.bridge_settlement_charges == pytest.approx(18_000.0)
    # rehab-only defaults stay blank on a plain purchase
    assert prepared.after_repair_value is None

    # the argument is not modified
    assert inputs.property_taxes is None
    assert inputs.acquisition_costs_amount is None


def test_prepare_keeps_entered_values():
    prepared = prepare_inputs(duplex_inputs(), flat_assumptions(), current_year=2025)
    assert prepared.property_taxes == 6_000.0
    assert prepared.property_insurance == 3_000.0


def test_prepare_picks_up_wind_mitigation_from_condition():
    inputs = duplex_inputs(
        property_insurance=None,
        condition={"exterior": {"windows_type": "Impact-Rated"}},
    )
    prepared = prepare_inputs(inputs, flat_assumptions(), current_year=2025)
    # 7,140 x 0.88 = 6,283 -> 6,300
    assert prepared.property_insurance == 6_300


def test_prepare_rehab_defaults():
    inputs = duplex_inputs(is_rehab=True, rehab_cost=40_000.0)
    prepared = prepare_inputs(inputs, flat_assumptions())

    assert prepared.after_repair_value == pytest.approx(390_000.0)
    assert prepared.rehab_property_taxes == pytest.approx(5_070.0)
    assert prepared.rehab_property_insurance == pytest.approx(4_290.0)
    assert prepared.dscr_acquisition_costs == pytest.approx(19_500.0)


def test_prepare_fills_voucher_rents_from_table():
    assumptions = flat_assumptions(voucher_zip_data=[hollywood_zip_entry()])
    units = [UnitDetail(beds=3, market_rent=2000.0), UnitDetail(beds=0, market_rent=1100.0)]
    prepared = prepare_inputs(duplex_inputs(unit_details=units), assumptions)
    assert [u.voucher_rent for u in prepared.unit_details] == [2600.0, 1500.0]


def test_parse_assessment_reports_bad_vocabulary():
    raw = good_assessment().model_dump(mode="json")
    raw["hvac"]["condition"] = "Brand new-ish"
    with pytest.raises(DealValidationError) as exc:
        parse_assessment(raw)
    assert any(r.startswith("hvac.condition") for r in exc.value.reasons)
