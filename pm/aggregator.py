"""
Aggregate N simulated paths into yearly percentile bands.

Instead of: "In 30 years you will have $1.2M" (one number, no context)
The planner gets: "P10=$0.6M, median=$1.1M, P90=$2.0M" for every year.

Percentiles use linear interpolation between order statistics:
    index = p / 100 * (n - 1), interpolate between floor and ceil ranks
which is numpy's default ("linear") percentile method.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

BAND_PERCENTILES: Tuple[int, ...] = (10, 25, 50, 75, 90)


@dataclass(frozen=True)
class YearlyPercentiles:
    """Cross-section of all paths at the end of one year."""
    year: int
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    contributions: float  # initial value + contributions to date (not simulated)

    def deflated(self, inflation_rate: float) -> "YearlyPercentiles":
        """Express every value in today's money: divide by (1 + inflation)^year."""
        factor = (1.0 + inflation_rate / 100.0) ** self.year
        return replace(
            self,
            p10=self.p10 / factor,
            p25=self.p25 / factor,
            p50=self.p50 / factor,
            p75=self.p75 / factor,
            p90=self.p90 / factor,
            contributions=self.contributions / factor,
        )


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """Linear-interpolated percentile of an ascending sequence (0 when empty)."""
    if len(sorted_values) == 0:
        return 0.0
    return float(np.percentile(np.asarray(sorted_values, dtype=float), p))


def contributions_to_date(initial_value: float, monthly_contribution: float, year: int) -> float:
    return initial_value + monthly_contribution * 12 * year


def aggregate_yearly_bands(
    yearly_values: np.ndarray,
    *,
    initial_value: float,
    monthly_contribution: float,
    inflation_rate: float = 0.0,
) -> List[YearlyPercentiles]:
    """
    Build one percentile band per simulated year.

    Parameters
    ----------
    yearly_values : np.ndarray
        Shape (n_paths, years) — end-of-year balance of each path
    inflation_rate : float
        Annual inflation in percent; when > 0 every band is deflated post-hoc
    """
    values = np.asarray(yearly_values, dtype=float)
    n_years = values.shape[1]

    bands = []
    for y in range(n_years):
        cross_section = np.sort(values[:, y])
        p10, p25, p50, p75, p90 = (percentile(cross_section, p) for p in BAND_PERCENTILES)
        band = YearlyPercentiles(
            year=y + 1,
            p10=p10,
            p25=p25,
            p50=p50,
            p75=p75,
            p90=p90,
            contributions=contributions_to_date(initial_value, monthly_contribution, y + 1),
        )
        if inflation_rate > 0:
            band = band.deflated(inflation_rate)
        bands.append(band)

    return bands


def bands_to_dataframe(bands: Sequence[YearlyPercentiles]) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "year": b.year,
            "p10": b.p10,
            "p25": b.p25,
            "p50": b.p50,
            "p75": b.p75,
            "p90": b.p90,
            "contributions": b.contributions,
        }
        for b in bands
    ])
