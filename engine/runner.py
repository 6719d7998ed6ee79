"""
Monte Carlo runner — simulates N independent portfolio paths month by month.

Each path:
  for every month:  balance = balance * (1 + r_month) + contribution, floored at 0
  where 1 + r_month = exp(monthly_log_mean + monthly_log_std * z), z ~ N(0, 1)

The end-of-year balance of every path is recorded, giving an (n_paths × years)
array that pm.aggregator turns into yearly percentile bands and pm.metrics
into final-year statistics.

Zero volatility short-circuits to a single deterministic path (same monthly
compounding as engine.projection); every percentile then collapses to the same
value and the doubling / loss probabilities become 0 or 1.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from core.config import SimulationConfig
from distributions.sampler import (
    LogNormalParams,
    RandomLike,
    UniformSource,
    box_muller_normal,
    compute_monthly_log_params,
    resolve_uniform,
)
from pm.aggregator import YearlyPercentiles, aggregate_yearly_bands, bands_to_dataframe
from pm.metrics import compute_final_metrics

logger = logging.getLogger(__name__)


@dataclass
class MonteCarloResult:
    yearly_data: List[YearlyPercentiles]
    final_values: np.ndarray  # sorted ascending, nominal
    median_final: float
    mean_final: float
    probability_of_doubling: float
    probability_of_loss: float

    def to_dataframe(self) -> pd.DataFrame:
        return bands_to_dataframe(self.yearly_data)

    def chart_rows(self, initial_value: float) -> List[YearlyPercentiles]:
        """Yearly bands with a leading year-0 row where every band equals the initial value."""
        start = YearlyPercentiles(
            year=0,
            p10=initial_value,
            p25=initial_value,
            p50=initial_value,
            p75=initial_value,
            p90=initial_value,
            contributions=initial_value,
        )
        return [start, *self.yearly_data]


def simulate_path(
    initial_value: float,
    monthly_contribution: float,
    params: LogNormalParams,
    years: int,
    uniform: UniformSource,
) -> np.ndarray:
    """Run one path; returns the end-of-year balance for each of `years` years."""
    yearly_values = np.zeros(years, dtype=float)
    balance = float(initial_value)

    for year in range(years):
        for _ in range(12):
            z = box_muller_normal(uniform)
            balance = balance * (1.0 + params.monthly_return(z)) + monthly_contribution
            if balance < 0:
                balance = 0.0
        yearly_values[year] = balance

    return yearly_values


def run_deterministic_simulation(
    initial_value: float,
    monthly_contribution: float,
    annual_return: float,
    inflation_rate: float,
    years: int,
) -> MonteCarloResult:
    """Single compound path used when volatility is zero."""
    monthly_rate = annual_return / 100.0 / 12.0
    yearly_values = np.zeros((1, years), dtype=float)
    balance = float(initial_value)

    for y in range(years):
        for _ in range(12):
            balance = balance * (1.0 + monthly_rate) + monthly_contribution
        yearly_values[0, y] = balance

    return _build_result(
        yearly_values,
        initial_value=initial_value,
        monthly_contribution=monthly_contribution,
        inflation_rate=inflation_rate,
        years=years,
    )


def run_monte_carlo_simulation(
    initial_value: float,
    monthly_contribution: float,
    annual_return: float,
    annual_volatility: float,
    inflation_rate: float,
    years: int,
    n_simulations: Optional[int] = None,
    *,
    rng: RandomLike = None,
    config: Optional[SimulationConfig] = None,
) -> MonteCarloResult:
    """
    Run the full Monte Carlo simulation and return percentile bands per year.

    Parameters
    ----------
    initial_value, monthly_contribution : float
        Starting balance and end-of-month contribution
    annual_return, annual_volatility, inflation_rate : float
        Percent values (7 = 7%)
    years : int
        Number of simulated years (> 0)
    n_simulations : int, optional
        Number of paths; defaults to config.n_simulations
    rng : callable | numpy.random.Generator, optional
        Uniform [0, 1) source. Defaults to numpy's generator seeded with config.seed.
    config : SimulationConfig, optional
    """
    cfg = config or SimulationConfig()
    n_paths = cfg.n_simulations if n_simulations is None else n_simulations
    if n_paths <= 0:
        raise ValueError(f"n_simulations must be positive, got {n_paths}.")

    if annual_volatility == 0:
        logger.debug("Zero volatility: running deterministic path over %d years", years)
        return run_deterministic_simulation(
            initial_value, monthly_contribution, annual_return, inflation_rate, years
        )

    uniform = resolve_uniform(rng, seed=cfg.seed)
    params = compute_monthly_log_params(annual_return, annual_volatility)

    # ========= MAIN PATH LOOP =========
    yearly_values = np.zeros((n_paths, years), dtype=float)
    for p in range(n_paths):
        yearly_values[p, :] = simulate_path(
            initial_value, monthly_contribution, params, years, uniform
        )

    logger.debug(
        "Simulated %d paths over %d years (log mean=%.6f, log std=%.6f)",
        n_paths, years, params.monthly_log_mean, params.monthly_log_std,
    )

    return _build_result(
        yearly_values,
        initial_value=initial_value,
        monthly_contribution=monthly_contribution,
        inflation_rate=inflation_rate,
        years=years,
    )


def _build_result(
    yearly_values: np.ndarray,
    *,
    initial_value: float,
    monthly_contribution: float,
    inflation_rate: float,
    years: int,
) -> MonteCarloResult:
    bands = aggregate_yearly_bands(
        yearly_values,
        initial_value=initial_value,
        monthly_contribution=monthly_contribution,
        inflation_rate=inflation_rate,
    )

    # nominal on purpose: compared with nominal contributions
    total_contributions = initial_value + monthly_contribution * 12 * years
    final = compute_final_metrics(yearly_values[:, years - 1], total_contributions=total_contributions)

    return MonteCarloResult(
        yearly_data=bands,
        final_values=final.sorted_final_values,
        median_final=final.median_final,
        mean_final=final.mean_final,
        probability_of_doubling=final.probability_of_doubling,
        probability_of_loss=final.probability_of_loss,
    )
