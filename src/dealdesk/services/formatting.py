# src/dealdesk/services/formatting.py
"""Display helpers. Nothing in the engine depends on these."""
from __future__ import annotations

import math
import re
from typing import Any

from dealdesk.adapters.rehab_estimator import round_half_up

_CURRENCY_JUNK = re.compile(r"[$,\s]")


def format_currency(value: float | None) -> str:
    """Whole US dollars: 1234.5 -> "$1,235", -1234.5 -> "-$1,235"."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "-"
    if math.isinf(value):
        return "∞"
    dollars = int(round_half_up(value))
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,}"


def format_percent(fraction: float | None) -> str:
    """Fraction to a two-decimal percent: 0.0725 -> "7.25%"."""
    if fraction is None or (isinstance(fraction, float) and math.isnan(fraction)):
        return "-"
    if math.isinf(fraction):
        return "∞"
    return f"{fraction * 100:.2f}%"


def format_ratio(value: float | None) -> str:
    if value is None:
        return "-"
    if math.isinf(value):
        return "∞"
    return f"{value:.2f}"


def parse_currency(value: Any) -> float:
    """
    "$1,234.56" -> 1234.56. Numbers pass through; anything unparseable is 0.0.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return 0.0
    cleaned = _CURRENCY_JUNK.sub("", str(value))
    try:
        parsed = float(cleaned)
    except ValueError:
        return 0.0
    if math.isnan(parsed):
        return 0.0
    return parsed
