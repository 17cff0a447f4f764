# src/dealdesk/adapters/insurance_estimator.py
"""
Annual landlord-policy insurance estimate.

Primary model is $/sqft/yr by building age (full wind coverage, replacement
cost). Without a usable square footage we fall back to the older
percent-of-value table. Wind-mitigation discounts compound:

    impact / hurricane windows  -> x 0.88
    roof 0-5 years old          -> x 0.83
"""
from __future__ import annotations

from datetime import date

from dealdesk.adapters.rehab_estimator import round_half_up

HURRICANE_WINDOWS_FACTOR = 0.88
NEW_ROOF_FACTOR = 0.83

# (max age in years, $/sqft/yr)
SQFT_RATE_BANDS = (
    (5, 2.50),
    (15, 3.00),
    (30, 3.50),
    (50, 4.25),
)
SQFT_RATE_OLDEST = 5.00

# (max age in years, fraction of value per year)
VALUE_RATE_BANDS = (
    (5, 0.005),
    (10, 0.008),
    (20, 0.012),
    (35, 0.015),
    (50, 0.020),
    (70, 0.028),
)
VALUE_RATE_OLDEST = 0.040

# Unknown construction year is priced like an aging (31-50 yr) building.
UNKNOWN_AGE = 50


def _age(year_built: int | None, current_year: int | None) -> int:
    if year_built is None:
        return UNKNOWN_AGE
    current_year = current_year or date.today().year
    return max(0, current_year - year_built)


def _band(age: int, bands, oldest: float) -> float:
    for max_age, rate in bands:
        if age <= max_age:
            return rate
    return oldest


def rate_per_sqft(year_built: int | None, current_year: int | None = None) -> float:
    return _band(_age(year_built, current_year), SQFT_RATE_BANDS, SQFT_RATE_OLDEST)


def rate_of_value(year_built: int | None, current_year: int | None = None) -> float:
    return _band(_age(year_built, current_year), VALUE_RATE_BANDS, VALUE_RATE_OLDEST)


def insurance_from_sqft(
    sqft: float,
    year_built: int | None,
    hurricane_windows: bool = False,
    new_roof: bool = False,
    current_year: int | None = None,
) -> int:
    """Sqft model; quotes come back rounded to the nearest $50."""
    premium = sqft * rate_per_sqft(year_built, current_year)
    if hurricane_windows:
        premium *= HURRICANE_WINDOWS_FACTOR
    if new_roof:
        premium *= NEW_ROOF_FACTOR
    return int(round_half_up(premium, 50))


def estimate_insurance(
    value: float,
    year_built: int | None,
    sqft: float | None = None,
    hurricane_windows: bool = False,
    new_roof: bool = False,
    current_year: int | None = None,
) -> int:
    """
    Annual premium for a property worth `value` (purchase price as-is, or ARV
    after rehab). Uses the sqft model whenever sqft > 0.
    """
    if sqft and sqft > 0:
        return insurance_from_sqft(sqft, year_built, hurricane_windows, new_roof, current_year)

    premium = int(round_half_up(value * rate_of_value(year_built, current_year)))
    if hurricane_windows:
        premium = int(round_half_up(premium * HURRICANE_WINDOWS_FACTOR))
    if new_roof:
        premium = int(round_half_up(premium * NEW_ROOF_FACTOR))
    return premium
