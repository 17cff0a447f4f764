# src/dealdesk/domain/finance.py
"""
Fixed-rate, fixed-term amortization.

All rates are annual percents (7.0 == 7%). Everything here is a pure
function of its arguments.
"""
from __future__ import annotations


def _monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100.0 / 12.0


def _is_flat(r: float, n_months: int) -> bool:
    # rates too small to move (1+r)^n in floating point behave like 0%
    return r == 0 or (1 + r) ** n_months == 1.0


def annuity_payment(rate_monthly: float, n_months: int, principal: float) -> float:
    r = rate_monthly
    if n_months <= 0:
        raise ValueError("n_months must be > 0")
    if _is_flat(r, n_months):
        return principal / n_months
    return principal * (r * (1 + r) ** n_months) / ((1 + r) ** n_months - 1)


def compute_payment(principal: float, annual_rate_pct: float, term_years: float) -> float:
    """
    Standard fixed-rate amortization formula:
    M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
    P = loan principal
    r = monthly interest rate
    n = number of payments (months)

    A 0% loan degrades to straight-line principal / n.
    """
    n_months = int(round(term_years * 12))
    return annuity_payment(_monthly_rate(annual_rate_pct), n_months, principal)


def remaining_balance(
    principal: float,
    annual_rate_pct: float,
    term_years: float,
    months_elapsed: int,
) -> float:
    """
    Principal still owed after `months_elapsed` scheduled payments.

    B_k = P(1+r)^k - M((1+r)^k - 1)/r    (or P - M*k when r == 0)

    Clamped to [0, principal]; exactly 0 once the loan has matured.
    """
    if principal <= 0:
        return 0.0
    n_months = int(round(term_years * 12))
    k = max(0, int(months_elapsed))
    if k >= n_months:
        return 0.0

    r = _monthly_rate(annual_rate_pct)
    payment = annuity_payment(r, n_months, principal)
    if _is_flat(r, n_months):
        balance = principal - payment * k
    else:
        growth = (1 + r) ** k
        balance = principal * growth - payment * (growth - 1) / r
    return min(principal, max(0.0, balance))


def payments_in_year(term_years: float, year: int) -> int:
    """Number of scheduled monthly payments that fall inside projection year `year` (1-based)."""
    n_months = int(round(term_years * 12))
    return max(0, min(12, n_months - 12 * (year - 1)))
