import pytest

from dealdesk.adapters.insurance_estimator import (
    estimate_insurance,
    insurance_from_sqft,
    rate_per_sqft,
)


@pytest.mark.parametrize(
    "year_built,rate",
    [(2022, 2.50), (2020, 2.50), (2012, 3.00), (1995, 3.50), (1980, 4.25), (1950, 5.00)],
)
def test_age_bands(year_built, rate):
    assert rate_per_sqft(year_built, current_year=2025) == rate


def test_sqft_premium_rounds_to_fifty():
    # 1500 sqft, 25 years old -> 3.50/sqft
    assert insurance_from_sqft(1500, 2000, current_year=2025) == 5_250


def test_wind_mitigation_discounts_compound():
    assert insurance_from_sqft(1500, 2000, hurricane_windows=True, current_year=2025) == 4_600
    assert insurance_from_sqft(1500, 2000, hurricane_windows=True, new_roof=True, current_year=2025) == 3_850


def test_value_table_when_sqft_unknown():
    assert estimate_insurance(300_000, 2000, sqft=None, current_year=2025) == 4_500
    assert estimate_insurance(300_000, 2000, sqft=0, hurricane_windows=True, current_year=2025) == 3_960
    assert estimate_insurance(
        300_000, 2000, sqft=0, hurricane_windows=True, new_roof=True, current_year=2025
    ) == 3_287


def test_sqft_model_preferred_when_available():
    assert estimate_insurance(300_000, 2000, sqft=1500, current_year=2025) == 5_250


def test_unknown_year_priced_as_aging_building():
    assert rate_per_sqft(None) == 4.25
