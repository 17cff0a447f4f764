# src/dealdesk/domain/assumptions.py
from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from dealdesk.adapters.config import AppConfig, config as default_config

BedroomKey = str  # "studio", "1bed" ... "7bed"

_BEDROOM_KEYS = ("studio", "1bed", "2bed", "3bed", "4bed", "5bed", "6bed", "7bed")
_ZIP_RE = re.compile(r"^\d{5}$")


class VoucherZipEntry(BaseModel):
    """One row of the voucher payment-standard table."""

    zipcode: str
    zone: int = Field(..., ge=1, le=19)
    rents: dict[BedroomKey, float] = Field(default_factory=dict)

    @field_validator("zipcode")
    @classmethod
    def _five_digits(cls, v: str) -> str:
        v = str(v).strip()
        if not _ZIP_RE.match(v):
            raise ValueError("zipcode must be 5 digits")
        return v

    @field_validator("rents")
    @classmethod
    def _known_keys(cls, v: dict[str, float]) -> dict[str, float]:
        for key, rent in v.items():
            if key not in _BEDROOM_KEYS:
                raise ValueError(f"unknown bedroom key: {key}")
            if rent < 0:
                raise ValueError(f"rent for {key} must be non-negative")
        return v


class GlobalAssumptions(BaseModel):
    """
    Market-wide growth and operating assumptions, passed explicitly to every
    projection call. Rates are percents (3.0 == 3%).
    """

    ltr_vacancy_months: float = Field(..., ge=0, le=12)
    voucher_vacancy_months: float = Field(..., ge=0, le=12)
    maintenance_percent: float = Field(..., ge=0, le=100)
    rent_growth_percent: float
    appreciation_percent: float
    property_tax_increase_percent: float
    insurance_increase_percent: float
    voucher_market_multiplier: float = Field(default=1.1, gt=0)
    voucher_zip_data: list[VoucherZipEntry] = Field(default_factory=list)
    updated_at: datetime | None = None

    def zip_entry(self, zipcode: str | None) -> VoucherZipEntry | None:
        if not zipcode:
            return None
        for entry in self.voucher_zip_data:
            if entry.zipcode == zipcode:
                return entry
        return None


def default_assumptions(cfg: AppConfig | None = None) -> GlobalAssumptions:
    cfg = cfg or default_config
    return GlobalAssumptions(
        ltr_vacancy_months=cfg.LTR_VACANCY_MONTHS,
        voucher_vacancy_months=cfg.VOUCHER_VACANCY_MONTHS,
        maintenance_percent=cfg.MAINTENANCE_PERCENT,
        rent_growth_percent=cfg.RENT_GROWTH_PERCENT,
        appreciation_percent=cfg.APPRECIATION_PERCENT,
        property_tax_increase_percent=cfg.PROPERTY_TAX_INCREASE_PERCENT,
        insurance_increase_percent=cfg.INSURANCE_INCREASE_PERCENT,
        voucher_market_multiplier=cfg.VOUCHER_MARKET_MULTIPLIER,
    )
