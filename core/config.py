"""
Calculation configuration.
Each engine takes its config as an optional keyword argument; the defaults
reproduce the behaviour of the household planner screens.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class SimulationConfig:
    n_simulations: int = 500
    seed: Optional[int] = None  # only used when no RNG is injected


@dataclass(frozen=True)
class PayoffConfig:
    max_months: int = 600  # 50 years
    start_date: Optional[date] = None  # payment dates are stamped from here (default: today)


@dataclass(frozen=True)
class DetectionConfig:
    min_occurrences: int = 3
    similarity_threshold: float = 0.6  # word-set overlap must be strictly above this
    min_confidence: float = 0.5


@dataclass(frozen=True)
class AllocationConfig:
    us_stock_share: float = 0.70
    sustainable_withdrawal_rate: float = 4.5
    high_withdrawal_rate: float = 5.0
    max_withdrawal_adjustment: float = 10.0
    stock_floor_after_adjustment: float = 30.0
    rounding_step: int = 5

    # bonds split between total market and short-term treasuries near withdrawal
    near_term_horizon_years: int = 5
    near_term_total_bond_share: float = 0.60
