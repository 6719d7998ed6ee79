"""
Calculation engines — deterministic projection, Monte Carlo runner, debt payoff.
"""

from .projection import (
    DEFAULT_BUCKETS,
    Bucket,
    BucketAllocation,
    InvestmentProjection,
    allocate_buckets,
    project,
)
from .runner import (
    MonteCarloResult,
    run_deterministic_simulation,
    run_monte_carlo_simulation,
    simulate_path,
)
from .debt import (
    DebtSchedule,
    PaymentEntry,
    PayoffResult,
    StrategyComparison,
    calculate_avalanche,
    calculate_snowball,
    compare_strategies,
    order_debts,
    payoff,
)

__all__ = [
    "DEFAULT_BUCKETS",
    "Bucket",
    "BucketAllocation",
    "InvestmentProjection",
    "allocate_buckets",
    "project",
    "MonteCarloResult",
    "run_deterministic_simulation",
    "run_monte_carlo_simulation",
    "simulate_path",
    "DebtSchedule",
    "PaymentEntry",
    "PayoffResult",
    "StrategyComparison",
    "calculate_avalanche",
    "calculate_snowball",
    "compare_strategies",
    "order_debts",
    "payoff",
]
