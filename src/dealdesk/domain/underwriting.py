from dataclasses import dataclass, field
from typing import Literal, List, Optional, Tuple

Strategy = Literal["ltr", "voucher", "short_term", "brrrr"]
RehabTierName = Literal["light", "lite+", "medium", "heavy", "fullgut"]

@dataclass(frozen=True)
class YearProjection:
    year: int
    gross_income: float        # scheduled rent for the year, before vacancy
    noi: float                 # net operating income (excludes debt)
    debt_service: float        # principal + interest paid this year
    cash_flow: float           # noi - debt_service
    appreciation: float        # property_value - prior year's property_value
    property_value: float
    equity: float              # property_value - loan_balance
    annual_return: float       # cash_flow + appreciation
    cumulative_cash_flow: float
    cumulative_return: float
    loan_balance: float        # balance after the year's last payment

@dataclass(frozen=True)
class Year1Summary:
    gross_income: float
    vacancy: float
    expenses: float            # taxes + insurance + maintenance (vacancy excluded)
    noi: float
    debt_service: float
    cash_flow: float
    cap_rate: Optional[float]      # fraction; None when the value basis is 0
    dscr: float                    # math.inf when there is no debt service
    cash_on_cash: Optional[float]  # fraction; None when no cash is invested

@dataclass(frozen=True)
class StrategyResults:
    strategy: Strategy
    year1_summary: Year1Summary
    cash_invested: float
    projections: Tuple[YearProjection, ...]
    monthly_payment: float = 0.0
    loan_amount: float = 0.0

@dataclass(frozen=True)
class CapitalBreakdown:
    hard_costs: int
    entry_points: int
    interest: int
    exit_points: int
    total: int

@dataclass(frozen=True)
class ConditionBreakdown:
    """Relative dollar weights per bucket; a display aid, not a cost estimate."""
    structural: float = 0.0
    systems: float = 0.0
    interior: float = 0.0
    exterior: float = 0.0

    @property
    def total(self) -> float:
        return self.structural + self.systems + self.interior + self.exterior

@dataclass(frozen=True)
class ConditionScore:
    condition_score: float
    major_issues: List[str]
    breakdown: ConditionBreakdown

@dataclass(frozen=True)
class RehabEstimateResult:
    estimated_cost: int
    suggested_condition: RehabTierName
    condition_score: float
    major_issues: List[str]
    breakdown: ConditionBreakdown

@dataclass(frozen=True)
class CostRange:
    low_estimate: int
    mid_estimate: int
    high_estimate: int
    contingency_low: float
    contingency_high: float
    uncertainty_factors: List[str] = field(default_factory=list)

@dataclass(frozen=True)
class RehabExitScenario:
    exit_type: Literal["sell", "refi"]
    total_cash_invested: float
    rehab_carrying_costs: float
    entry_points_cost: float
    exit_points_cost: float

    # sell
    sale_proceeds: Optional[float] = None
    selling_costs: Optional[float] = None
    net_profit: Optional[float] = None

    # refi (BRRRR)
    new_loan_amount: Optional[float] = None
    cash_out_amount: Optional[float] = None
    capital_left_in_deal: Optional[float] = None
    equity_retained: Optional[float] = None
    new_monthly_payment: Optional[float] = None
    new_annual_debt_service: Optional[float] = None
    funds_gap: Optional[float] = None  # positive = shortfall, negative = surplus

@dataclass(frozen=True)
class OfferResult:
    strategy: Strategy
    target_dscr: float
    max_price: Optional[float]   # None = any price works (no debt to cover)
    noi: float
    annual_debt_service: float
    dscr: float
