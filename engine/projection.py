"""
Deterministic investment projection — closed-form compound growth + ordinary annuity.

    r      = annual_return / 100 / 12
    n      = years * 12
    FV     = P * (1 + r)^n + C * ((1 + r)^n - 1) / r      (r != 0)
    FV     = P + C * n                                     (r == 0)
    real   = FV / (1 + inflation / 100)^years

The same month-by-month compounding is reused by the Monte Carlo runner when
volatility is zero (see runner.run_deterministic_simulation).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvestmentProjection:
    future_value: float
    total_contributions: float
    investment_gains: float
    real_value: float  # future value in today's money

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([
            {"Metric": "Future Value", "Value": self.future_value},
            {"Metric": "Total Contributions", "Value": self.total_contributions},
            {"Metric": "Investment Gains", "Value": self.investment_gains},
            {"Metric": "Real Value", "Value": self.real_value},
        ])


def project(
    initial_value: float,
    monthly_contribution: float,
    annual_return: float,
    years: float,
    inflation_rate: float,
) -> InvestmentProjection:
    """
    Project a portfolio forward with monthly compounding.

    Parameters
    ----------
    initial_value : float
        Current portfolio value (>= 0)
    monthly_contribution : float
        Amount added at the end of every month (>= 0)
    annual_return : float
        Expected annual return in percent (7 = 7%)
    years : float
        Horizon in years (> 0)
    inflation_rate : float
        Annual inflation in percent, used only for real_value
    """
    monthly_rate = annual_return / 100.0 / 12.0
    months = years * 12

    if monthly_rate == 0:
        future_value = initial_value + monthly_contribution * months
    else:
        growth = (1.0 + monthly_rate) ** months
        future_value = initial_value * growth
        if monthly_contribution > 0:
            future_value += monthly_contribution * ((growth - 1.0) / monthly_rate)

    total_contributions = initial_value + monthly_contribution * months
    investment_gains = future_value - total_contributions

    if inflation_rate == 0:
        real_value = future_value
    else:
        real_value = future_value / (1.0 + inflation_rate / 100.0) ** years

    logger.debug(
        "Projected %.2f over %s years: future=%.2f real=%.2f",
        initial_value, years, future_value, real_value,
    )

    return InvestmentProjection(
        future_value=future_value,
        total_contributions=total_contributions,
        investment_gains=investment_gains,
        real_value=real_value,
    )


@dataclass(frozen=True)
class Bucket:
    """A slice of the projected portfolio, drawn down in withdrawal_order."""
    name: str
    percentage: float
    withdrawal_order: int


@dataclass(frozen=True)
class BucketAllocation:
    name: str
    amount: float
    withdrawal_order: int


DEFAULT_BUCKETS: tuple = (
    Bucket("Cash & Equivalents", 10.0, 1),
    Bucket("Bonds & Fixed Income", 30.0, 2),
    Bucket("Stocks & Equity", 50.0, 3),
    Bucket("Real Estate & Alternatives", 10.0, 4),
)


def allocate_buckets(
    future_value: float,
    buckets: Sequence[Bucket] = DEFAULT_BUCKETS,
) -> List[BucketAllocation]:
    """Split a projected value across buckets, ordered by withdrawal order."""
    allocations = [
        BucketAllocation(
            name=b.name,
            amount=future_value * b.percentage / 100.0,
            withdrawal_order=b.withdrawal_order,
        )
        for b in buckets
    ]
    return sorted(allocations, key=lambda a: a.withdrawal_order)
