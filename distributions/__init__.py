"""
Distributions package — random-variate generation for the Monte Carlo runner.

  sampler.py — uniform source resolution, Box–Muller normal draws, and the
               log-normal monthly return parameters derived from annual inputs
"""

from .sampler import (
    LogNormalParams,
    NormalSampler,
    box_muller_normal,
    compute_monthly_log_params,
    resolve_uniform,
)

__all__ = [
    "LogNormalParams",
    "NormalSampler",
    "box_muller_normal",
    "compute_monthly_log_params",
    "resolve_uniform",
]
