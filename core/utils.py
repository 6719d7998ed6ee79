from __future__ import annotations

from datetime import date

import numpy as np
from dateutil.relativedelta import relativedelta


def round_half_up(x, decimals: int = 0):
    """Round half away from zero (vectorized), unlike Python's banker's rounding."""
    m = 10 ** decimals
    x = np.asarray(x, dtype=float)
    out = np.sign(x) * (np.floor(np.abs(x) * m + 0.5) / m)
    return float(out) if out.ndim == 0 else out


def round_to_step(value: float, step: int = 5) -> float:
    """Round to the nearest multiple of `step`, halves rounding up."""
    return round_half_up(value / step) * step


def add_months(d: date, months: int) -> date:
    """Calendar-month arithmetic; Jan 31 + 1 month clamps to the end of February."""
    return d + relativedelta(months=months)


def whole_years_between(start: date, end: date) -> int:
    """Complete years from start to end (negative when end precedes start)."""
    return relativedelta(end, start).years
