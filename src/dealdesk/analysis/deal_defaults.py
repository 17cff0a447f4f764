# src/dealdesk/analysis/deal_defaults.py
"""
Documented defaults for deal fields the user may leave blank.

Each helper returns the entered value when present, otherwise the default.
They never mutate the inputs.
"""
from __future__ import annotations

from dealdesk.adapters.config import AppConfig, config as default_config
from dealdesk.adapters.insurance_estimator import estimate_insurance
from dealdesk.domain.condition import RoofCondition, WindowsType
from dealdesk.domain.property import AcquisitionInputs


def _cfg(cfg: AppConfig | None) -> AppConfig:
    return cfg or default_config


def has_hurricane_windows(inputs: AcquisitionInputs) -> bool:
    if inputs.has_hurricane_windows:
        return True
    if inputs.condition is None:
        return False
    return inputs.condition.exterior.windows_type in (WindowsType.IMPACT_RATED, WindowsType.HURRICANE)


def has_new_roof(inputs: AcquisitionInputs) -> bool:
    if inputs.has_new_roof:
        return True
    if inputs.condition is None:
        return False
    return inputs.condition.roof.condition == RoofCondition.NEW


def acquisition_costs(inputs: AcquisitionInputs) -> float:
    if inputs.acquisition_costs_amount is not None:
        return inputs.acquisition_costs_amount
    return inputs.purchase_price * inputs.acquisition_costs_pct / 100.0


def property_taxes(inputs: AcquisitionInputs, cfg: AppConfig | None = None) -> float:
    if inputs.property_taxes is not None:
        return inputs.property_taxes
    return inputs.purchase_price * _cfg(cfg).DEFAULT_PROPERTY_TAX_PERCENT / 100.0


def property_insurance(inputs: AcquisitionInputs, current_year: int | None = None) -> float:
    if inputs.property_insurance is not None:
        return inputs.property_insurance
    return float(
        estimate_insurance(
            inputs.purchase_price,
            inputs.year_built,
            sqft=inputs.total_sqft,
            hurricane_windows=has_hurricane_windows(inputs),
            new_roof=has_new_roof(inputs),
            current_year=current_year,
        )
    )


def after_repair_value(inputs: AcquisitionInputs, cfg: AppConfig | None = None) -> float:
    if inputs.after_repair_value is not None:
        return inputs.after_repair_value
    return inputs.purchase_price * (1 + _cfg(cfg).DEFAULT_ARV_UPLIFT_PERCENT / 100.0)


def rehab_property_taxes(inputs: AcquisitionInputs, cfg: AppConfig | None = None) -> float:
    if inputs.rehab_property_taxes is not None:
        return inputs.rehab_property_taxes
    return after_repair_value(inputs, cfg) * _cfg(cfg).REHAB_TAX_PERCENT_OF_ARV / 100.0


def rehab_property_insurance(inputs: AcquisitionInputs, cfg: AppConfig | None = None) -> float:
    if inputs.rehab_property_insurance is not None:
        return inputs.rehab_property_insurance
    return after_repair_value(inputs, cfg) * _cfg(cfg).REHAB_INSURANCE_PERCENT_OF_ARV / 100.0


def bridge_settlement_charges(inputs: AcquisitionInputs, cfg: AppConfig | None = None) -> float:
    if inputs.bridge_settlement_charges is not None:
        return inputs.bridge_settlement_charges
    return inputs.purchase_price * _cfg(cfg).DEFAULT_BRIDGE_SETTLEMENT_PERCENT / 100.0


def dscr_acquisition_costs(inputs: AcquisitionInputs, cfg: AppConfig | None = None) -> float:
    if inputs.dscr_acquisition_costs is not None:
        return inputs.dscr_acquisition_costs
    return after_repair_value(inputs, cfg) * _cfg(cfg).DEFAULT_DSCR_ACQUISITION_PERCENT / 100.0
