from __future__ import annotations

import numpy as np


def compute_dscr(noi: np.ndarray, annual_debt_service: np.ndarray) -> np.ndarray:
    """
    DSCR = NOI / Annual Debt Service.

    No debt (all-cash, or the loan has matured) has no coverage constraint,
    so DSCR is +inf there.
    """
    noi = np.asarray(noi, dtype=float)
    debt = np.asarray(annual_debt_service, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        dscr = np.where(debt == 0.0, np.inf, noi / np.where(debt == 0.0, 1.0, debt))
    return dscr


def compute_cash_on_cash(
    annual_cash_flow: np.ndarray,
    total_cash_invested: np.ndarray,
) -> np.ndarray:
    """
    Cash-on-cash return = Annual Cash Flow / Total Cash Invested, as a fraction.

    Undefined (NaN) where nothing, or less than nothing, was invested.
    """
    cf = np.asarray(annual_cash_flow, dtype=float)
    invested = np.asarray(total_cash_invested, dtype=float)
    safe = np.where(invested > 0.0, invested, 1.0)
    return np.where(invested > 0.0, cf / safe, np.nan)


def compute_cap_rate(noi: np.ndarray, value: np.ndarray) -> np.ndarray:
    noi = np.asarray(noi, dtype=float)
    value = np.asarray(value, dtype=float)
    safe = np.where(value > 0.0, value, 1.0)
    return np.where(value > 0.0, noi / safe, np.nan)
