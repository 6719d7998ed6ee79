"""
Core package — input records, configuration, and shared utilities.
No business logic lives here.
"""

from .schema import Debt, Transaction
from .config import AllocationConfig, DetectionConfig, PayoffConfig, SimulationConfig
from .utils import add_months, round_half_up, round_to_step, whole_years_between
from .logging import setup_logging

__all__ = [
    "Debt",
    "Transaction",
    "AllocationConfig",
    "DetectionConfig",
    "PayoffConfig",
    "SimulationConfig",
    "add_months",
    "round_half_up",
    "round_to_step",
    "whole_years_between",
    "setup_logging",
]
