# src/dealdesk/services/validation.py

from typing import Any

from pydantic import ValidationError

from dealdesk.analysis import deal_defaults
from dealdesk.analysis.voucher import populate_voucher_rents
from dealdesk.domain.assumptions import GlobalAssumptions
from dealdesk.domain.condition import PropertyConditionAssessment
from dealdesk.domain.errors import DealValidationError
from dealdesk.domain.property import AcquisitionInputs


def _pydantic_reasons(err: ValidationError) -> list[str]:
    reasons = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "inputs"
        reasons.append(f"{loc}: {e.get('msg', 'invalid value')}")
    return reasons


def parse_inputs(raw: dict[str, Any]) -> AcquisitionInputs:
    """
    Build AcquisitionInputs from a loosely-typed payload (JSON file, form).

    Field-level problems are reported together as one DealValidationError.
    """
    try:
        inputs = AcquisitionInputs.model_validate(raw)
    except ValidationError as err:
        raise DealValidationError(_pydantic_reasons(err)) from err
    validate_inputs(inputs)
    return inputs


def parse_assessment(raw: dict[str, Any]) -> PropertyConditionAssessment:
    """Condition assessment from a JSON payload; unknown vocabulary is a DealValidationError."""
    try:
        return PropertyConditionAssessment.model_validate(raw)
    except ValidationError as err:
        raise DealValidationError(_pydantic_reasons(err)) from err


def validate_inputs(inputs: AcquisitionInputs) -> None:
    """
    Cross-field checks that must hold before any projection runs.

    Raises DealValidationError listing every failed check.
    """
    reasons: list[str] = []

    if inputs.purchase_price < 0:
        reasons.append("purchase_price must be non-negative")
    if inputs.loan_term_years <= 0:
        reasons.append("loan_term_years must be > 0")
    if not (0.0 <= inputs.down_payment_pct <= 100.0):
        reasons.append("down_payment_pct must be between 0 and 100")
    if inputs.loan_interest_rate < 0:
        reasons.append("loan_interest_rate must be non-negative")

    if inputs.units < 0:
        reasons.append("units must be non-negative")
    elif inputs.units != len(inputs.unit_details):
        reasons.append(
            f"units ({inputs.units}) does not match unit_details entries ({len(inputs.unit_details)})"
        )

    if inputs.is_rehab:
        if inputs.rehab_cost < 0:
            reasons.append("rehab_cost must be non-negative")
        if inputs.rehab_months < 0:
            reasons.append("rehab_months must be non-negative")
        if inputs.after_repair_value is not None and inputs.after_repair_value <= 0:
            reasons.append("after_repair_value must be > 0 for a rehab deal")

    if reasons:
        raise DealValidationError(reasons)


def prepare_inputs(
    inputs: AcquisitionInputs,
    assumptions: GlobalAssumptions,
    current_year: int | None = None,
) -> AcquisitionInputs:
    """
    Copy of `inputs` with every blank defaultable field filled in.

    Defaults:
      - property_taxes            2% of price
      - property_insurance        sqft/age model (windows / roof discounts
                                  picked up from the condition assessment)
      - acquisition_costs_amount  acquisition_costs_pct of price
      - bridge_settlement_charges 6% of price
      - voucher_rent per unit     ZIP payment-standard table
    and for rehab deals:
      - after_repair_value        price x 1.30
      - rehab taxes / insurance   1.3% / 1.1% of ARV
      - dscr_acquisition_costs    5% of ARV
    """
    prepared = populate_voucher_rents(inputs, assumptions)

    update: dict[str, Any] = {
        "property_taxes": deal_defaults.property_taxes(prepared),
        "property_insurance": deal_defaults.property_insurance(prepared, current_year),
        "acquisition_costs_amount": deal_defaults.acquisition_costs(prepared),
        "bridge_settlement_charges": deal_defaults.bridge_settlement_charges(prepared),
    }
    if prepared.is_rehab:
        update.update(
            {
                "after_repair_value": deal_defaults.after_repair_value(prepared),
                "rehab_property_taxes": deal_defaults.rehab_property_taxes(prepared),
                "rehab_property_insurance": deal_defaults.rehab_property_insurance(prepared),
                "dscr_acquisition_costs": deal_defaults.dscr_acquisition_costs(prepared),
            }
        )
    return prepared.model_copy(update=update)
