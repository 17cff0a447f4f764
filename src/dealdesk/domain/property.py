from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from dealdesk.domain.condition import PropertyConditionAssessment

ExitStrategy = Literal["sell", "refi"]


class UnitDetail(BaseModel):
    beds: int = Field(default=0, ge=0)
    baths: float = Field(default=0.0, ge=0)
    sqft: float | None = Field(default=None, ge=0)

    market_rent: float | None = Field(default=None, ge=0)  # monthly, long-term lease
    voucher_rent: float | None = Field(default=None, ge=0)  # monthly, voucher payment standard
    after_rehab_market_rent: float | None = Field(default=None, ge=0)

    # Short-term rental figures come from a market-data provider and are
    # already net of expected vacancy.
    str_annual_revenue: float | None = Field(default=None, ge=0)
    str_annual_expenses: float | None = Field(default=None, ge=0)


class AcquisitionInputs(BaseModel):
    """
    Everything needed to underwrite one acquisition.

    Percent fields are percents (20 == 20%). Dollar fields left as None are
    filled by `services.validation.prepare_inputs`.
    """

    address: str
    zipcode: str | None = None
    units: int = Field(..., ge=0)
    unit_details: list[UnitDetail] = Field(default_factory=list)
    total_sqft: float = Field(default=0.0, ge=0)
    year_built: int | None = None

    purchase_price: float = Field(..., ge=0, description="Offer / contract price")
    acquisition_costs_pct: float = Field(default=5.0, ge=0, le=100)
    acquisition_costs_amount: float | None = Field(default=None, ge=0)
    setup_furnish_cost: float = Field(default=0.0, ge=0)

    property_taxes: float | None = Field(default=None, ge=0, description="Annual, as-is")
    property_insurance: float | None = Field(default=None, ge=0, description="Annual, as-is")
    has_hurricane_windows: bool = False
    has_new_roof: bool = False

    loan_interest_rate: float = Field(..., ge=0, description="Annual percent, e.g. 7.0")
    loan_term_years: int = Field(..., description="Amortization period in years")
    down_payment_pct: float = Field(..., description="20 means 20% down")

    # Rehab / BRRRR
    is_rehab: bool = False
    rehab_cost: float = Field(default=0.0, ge=0)
    rehab_months: float = Field(default=0.0, ge=0)
    rehab_financing_rate: float = Field(default=0.0, ge=0)
    rehab_entry_points: float = Field(default=0.0, ge=0)
    rehab_exit_points: float = Field(default=0.0, ge=0)

    bridge_ltc: float = Field(default=90.0, ge=0, le=100)
    bridge_rehab_budget_pct: float = Field(default=100.0, ge=0, le=100)
    bridge_settlement_charges: float | None = Field(default=None, ge=0)

    after_repair_value: float | None = Field(default=None, ge=0)
    rehab_property_taxes: float | None = Field(default=None, ge=0)
    rehab_property_insurance: float | None = Field(default=None, ge=0)

    exit_strategy: ExitStrategy = "refi"
    exit_refi_ltv: float = Field(default=75.0, ge=0, le=100)
    exit_refi_rate: float = Field(default=7.0, ge=0)
    sell_closing_costs_pct: float = Field(default=8.0, ge=0, le=100)
    dscr_acquisition_costs: float | None = Field(default=None, ge=0)

    condition: PropertyConditionAssessment | None = None

    @field_validator("down_payment_pct")
    @classmethod
    def _pct_range(cls, v: float) -> float:
        if not (0.0 <= v <= 100.0):
            raise ValueError("down_payment_pct must be between 0 and 100")
        return v

    @field_validator("loan_term_years")
    @classmethod
    def _term_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("loan_term_years must be > 0")
        return v

    @property
    def down_payment_amount(self) -> float:
        return self.purchase_price * self.down_payment_pct / 100.0

    @property
    def loan_amount(self) -> float:
        return self.purchase_price - self.down_payment_amount
