import pytest

from dealdesk.analysis.finance import project_strategy
from dealdesk.analysis.voucher import bedroom_key, extract_zipcode, lookup_voucher_rent, populate_voucher_rents
from dealdesk.domain.assumptions import VoucherZipEntry
from dealdesk.domain.property import UnitDetail

from deal_builders import duplex_inputs, flat_assumptions, hollywood_zip_entry


@pytest.mark.parametrize(
    "address,expected",
    [
        ("123 Main St, Hollywood, FL 33024", "33024"),
        ("123 Main St, Hollywood, FL 33024-1234", "33024"),
        ("12345 Ocean Dr, Miami Beach, FL 33139", "33139"),
        ("123 Main St", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_zipcode(address, expected):
    assert extract_zipcode(address) == expected


@pytest.mark.parametrize("beds,key", [(0, "studio"), (1, "1bed"), (3, "3bed"), (7, "7bed"), (9, "7bed")])
def test_bedroom_key(beds, key):
    assert bedroom_key(beds) == key


def test_lookup_hits_and_misses():
    assumptions = flat_assumptions(voucher_zip_data=[hollywood_zip_entry()])
    assert lookup_voucher_rent(2, "33024", assumptions) == 2000.0
    assert lookup_voucher_rent(5, "33024", assumptions) is None
    assert lookup_voucher_rent(2, "90210", assumptions) is None
    assert lookup_voucher_rent(2, None, assumptions) is None


def test_blank_table_rent_is_a_miss(inputs):
    entry = hollywood_zip_entry().model_copy(update={"rents": {"2bed": 0.0, "3bed": 2600.0}})
    assumptions = flat_assumptions(voucher_zip_data=[entry])
    assert lookup_voucher_rent(2, "33024", assumptions) is None
    assert lookup_voucher_rent(3, "33024", assumptions) == 2600.0

    # falls back to market rent x multiplier
    res = project_strategy("voucher", inputs, assumptions, years=1)
    assert res.year1_summary.gross_income == pytest.approx(12 * 2 * 1500.0 * 1.1)


def test_populate_fills_only_missing_rents():
    assumptions = flat_assumptions(voucher_zip_data=[hollywood_zip_entry()])
    units = [UnitDetail(beds=2, market_rent=1500.0, voucher_rent=2100.0), UnitDetail(beds=1, market_rent=1200.0)]
    original = duplex_inputs(unit_details=units)

    filled = populate_voucher_rents(original, assumptions)

    assert [u.voucher_rent for u in filled.unit_details] == [2100.0, 1700.0]
    # the argument is untouched
    assert original.unit_details[1].voucher_rent is None


def test_populate_uses_explicit_zip_over_address():
    assumptions = flat_assumptions(voucher_zip_data=[hollywood_zip_entry()])
    inputs = duplex_inputs(address="1 Elm St, Springfield", zipcode="33024")
    filled = populate_voucher_rents(inputs, assumptions)
    assert all(u.voucher_rent == 2000.0 for u in filled.unit_details)


def test_populate_leaves_unknown_zip_alone():
    filled = populate_voucher_rents(duplex_inputs(), flat_assumptions())
    assert all(u.voucher_rent is None for u in filled.unit_details)


@pytest.mark.parametrize(
    "payload",
    [
        {"zipcode": "3302", "zone": 1},
        {"zipcode": "33024", "zone": 0},
        {"zipcode": "33024", "zone": 20},
        {"zipcode": "33024", "zone": 3, "rents": {"9bed": 1000.0}},
        {"zipcode": "33024", "zone": 3, "rents": {"2bed": -5.0}},
    ],
)
def test_zip_entry_validation(payload):
    with pytest.raises(ValueError):
        VoucherZipEntry.model_validate(payload)
