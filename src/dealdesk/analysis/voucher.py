# src/dealdesk/analysis/voucher.py
"""
ZIP -> voucher payment-standard lookups.

A missing ZIP or bedroom bucket is a normal business case, not an error:
callers fall back to a multiple of market rent.
"""
from __future__ import annotations

import re

from dealdesk.domain.assumptions import GlobalAssumptions
from dealdesk.domain.property import AcquisitionInputs

_ZIP_IN_ADDRESS = re.compile(r"\b(\d{5})(?:-\d{4})?\b")
MAX_BEDROOM_BUCKET = 7


def extract_zipcode(address: str | None) -> str | None:
    """Last 5-digit group in a free-form address ("... FL 33024-1234" -> "33024")."""
    if not address:
        return None
    matches = _ZIP_IN_ADDRESS.findall(address)
    return matches[-1] if matches else None


def bedroom_key(beds: int) -> str:
    beds = max(0, int(beds))
    if beds == 0:
        return "studio"
    return f"{min(beds, MAX_BEDROOM_BUCKET)}bed"


def lookup_voucher_rent(
    beds: int,
    zipcode: str | None,
    assumptions: GlobalAssumptions,
) -> float | None:
    entry = assumptions.zip_entry(zipcode)
    if entry is None:
        return None
    rent = entry.rents.get(bedroom_key(beds))
    # a blank (0) table cell is a miss, not a $0 payment standard
    if rent is None or rent <= 0:
        return None
    return rent


def resolve_zipcode(inputs: AcquisitionInputs) -> str | None:
    return inputs.zipcode or extract_zipcode(inputs.address)


def populate_voucher_rents(
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
) -> AcquisitionInputs:
    """
    Copy of `inputs` with every unit's missing voucher_rent filled from the
    ZIP table. Units that already carry a voucher rent are left as entered.
    """
    zipcode = resolve_zipcode(inputs)
    if assumptions.zip_entry(zipcode) is None:
        return inputs.model_copy(deep=True)

    units = []
    for unit in inputs.unit_details:
        if unit.voucher_rent is None:
            rent = lookup_voucher_rent(unit.beds, zipcode, assumptions)
            unit = unit.model_copy(update={"voucher_rent": rent})
        else:
            unit = unit.model_copy()
        units.append(unit)
    return inputs.model_copy(update={"unit_details": units}, deep=True)
