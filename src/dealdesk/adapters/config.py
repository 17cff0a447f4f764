# src/dealdesk/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # Global assumption defaults (percent units, e.g. 3 == 3%)
    # -----------------------------
    LTR_VACANCY_MONTHS: float = Field(default=1.0)
    VOUCHER_VACANCY_MONTHS: float = Field(default=0.5)
    MAINTENANCE_PERCENT: float = Field(default=5.0)
    RENT_GROWTH_PERCENT: float = Field(default=3.0)
    APPRECIATION_PERCENT: float = Field(default=3.0)
    PROPERTY_TAX_INCREASE_PERCENT: float = Field(default=3.0)
    INSURANCE_INCREASE_PERCENT: float = Field(default=5.0)

    # Voucher ceiling = market rent x multiplier when the ZIP table has no entry
    VOUCHER_MARKET_MULTIPLIER: float = Field(default=1.1)

    # -----------------------------
    # Deal-level defaults
    # -----------------------------
    DEFAULT_ACQUISITION_COSTS_PERCENT: float = Field(default=5.0)
    DEFAULT_BRIDGE_SETTLEMENT_PERCENT: float = Field(default=6.0)
    DEFAULT_DSCR_ACQUISITION_PERCENT: float = Field(default=5.0)
    DEFAULT_PROPERTY_TAX_PERCENT: float = Field(default=2.0)
    REHAB_TAX_PERCENT_OF_ARV: float = Field(default=1.3)
    REHAB_INSURANCE_PERCENT_OF_ARV: float = Field(default=1.1)
    DEFAULT_ARV_UPLIFT_PERCENT: float = Field(default=30.0)

    PROJECTION_YEARS: int = Field(default=30)

    # Rehab model calibration ($/sqft for a "medium" single-family rehab)
    REHAB_BASE_RATE_PER_SQFT: float = Field(default=35.0)

    DEFAULT_TARGET_DSCR: float = Field(default=1.25)

    model_config = SettingsConfigDict(
        env_prefix="DEALDESK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "LTR_VACANCY_MONTHS",
        "VOUCHER_VACANCY_MONTHS",
        "MAINTENANCE_PERCENT",
        "RENT_GROWTH_PERCENT",
        "APPRECIATION_PERCENT",
        "PROPERTY_TAX_INCREASE_PERCENT",
        "INSURANCE_INCREASE_PERCENT",
        "DEFAULT_ACQUISITION_COSTS_PERCENT",
        "DEFAULT_BRIDGE_SETTLEMENT_PERCENT",
        "DEFAULT_DSCR_ACQUISITION_PERCENT",
        "DEFAULT_PROPERTY_TAX_PERCENT",
        "REHAB_TAX_PERCENT_OF_ARV",
        "REHAB_INSURANCE_PERCENT_OF_ARV",
        "DEFAULT_ARV_UPLIFT_PERCENT",
        mode="before",
    )
    @classmethod
    def _to_non_negative_percent(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("value must be numeric or percent-like") from err
        if f < 0:
            raise ValueError("value must be non-negative")
        return f

    @field_validator("VOUCHER_MARKET_MULTIPLIER", "REHAB_BASE_RATE_PER_SQFT", "DEFAULT_TARGET_DSCR", mode="before")
    @classmethod
    def _positive(cls, v: Any) -> Any:
        f = float(v)
        if f <= 0:
            raise ValueError("value must be > 0")
        return f

    @field_validator("PROJECTION_YEARS", mode="before")
    @classmethod
    def _years_positive(cls, v: Any) -> Any:
        n = int(v)
        if n <= 0:
            raise ValueError("PROJECTION_YEARS must be > 0")
        return n


config = AppConfig()
