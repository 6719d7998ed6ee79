"""
Final-year metrics over all simulated paths.

Doubling / loss probabilities are measured against NOMINAL total
contributions, even when the yearly bands are shown inflation-adjusted.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from .aggregator import percentile


@dataclass(frozen=True)
class FinalValueMetrics:
    sorted_final_values: np.ndarray
    median_final: float
    mean_final: float
    probability_of_doubling: float  # P(final >= 2 * total contributions)
    probability_of_loss: float      # P(final < total contributions)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([
            {"Metric": "Median Final Value", "Value": f"{self.median_final:,.2f}"},
            {"Metric": "Mean Final Value", "Value": f"{self.mean_final:,.2f}"},
            {"Metric": "P(Doubling)", "Value": f"{self.probability_of_doubling:.1%}"},
            {"Metric": "P(Loss)", "Value": f"{self.probability_of_loss:.1%}"},
        ])


def compute_final_metrics(final_values, *, total_contributions: float) -> FinalValueMetrics:
    """
    Parameters
    ----------
    final_values : array-like
        One nominal final-year balance per path
    total_contributions : float
        initial value + monthly contribution * 12 * years
    """
    values = np.sort(np.asarray(final_values, dtype=float))
    if len(values) == 0:
        raise ValueError("No final values to compute metrics from.")

    return FinalValueMetrics(
        sorted_final_values=values,
        median_final=percentile(values, 50),
        mean_final=float(np.mean(values)),
        probability_of_doubling=float(np.mean(values >= 2.0 * total_contributions)),
        probability_of_loss=float(np.mean(values < total_contributions)),
    )
