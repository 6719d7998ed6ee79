"""
Normal sampler — turns a uniform [0,1) source into standard normal draws.

The uniform source is an injected dependency so that every stochastic call is
reproducible under a fixed seed:
  - a zero-argument callable returning a float in [0, 1), or
  - a numpy.random.Generator (its .random method is used), or
  - None → numpy.random.default_rng(seed).random

Monthly returns are log-normal:
    ln(1 + r_month) ~ Normal(monthly_log_mean, monthly_log_std)

with the annual log mean drift-corrected by -sigma²/2 so that the
arithmetic-mean expectation matches the requested annual return.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

import numpy as np

UniformSource = Callable[[], float]
RandomLike = Union[UniformSource, np.random.Generator, None]


def resolve_uniform(rng: RandomLike = None, *, seed: Optional[int] = None) -> UniformSource:
    """Normalise the accepted RNG forms into a zero-argument uniform source."""
    if rng is None:
        return np.random.default_rng(seed).random
    if isinstance(rng, np.random.Generator):
        return rng.random
    if callable(rng):
        return rng
    raise ValueError(
        f"rng must be a callable returning a uniform in [0, 1) or a numpy Generator, "
        f"got {type(rng).__name__}"
    )


def box_muller_normal(uniform: UniformSource) -> float:
    """
    Standard normal variate from two uniform draws (Box–Muller, cosine branch).
    The first draw is repeated while it is exactly 0 to keep log() finite.
    """
    u1 = float(uniform())
    while u1 == 0.0:
        u1 = float(uniform())
    u2 = float(uniform())
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


@dataclass(frozen=True)
class LogNormalParams:
    """Monthly log-return parameters (decimal fractions, not percent)."""
    monthly_log_mean: float
    monthly_log_std: float

    def monthly_return(self, z: float) -> float:
        return math.exp(self.monthly_log_mean + self.monthly_log_std * z) - 1.0


def compute_monthly_log_params(annual_return: float, annual_volatility: float) -> LogNormalParams:
    """
    Convert user-facing annual return / volatility (percent) into monthly
    log-normal parameters.

    annual_log_mean = ln(1 + r) - sigma² / 2
    monthly_log_mean = annual_log_mean / 12
    monthly_log_std  = sigma / sqrt(12)
    """
    r = annual_return / 100.0
    sigma = annual_volatility / 100.0

    annual_log_mean = math.log(1.0 + r) - (sigma * sigma) / 2.0

    return LogNormalParams(
        monthly_log_mean=annual_log_mean / 12.0,
        monthly_log_std=sigma / math.sqrt(12.0),
    )


class NormalSampler:
    """
    Draws standard normal variates one at a time from an injected uniform source.

    Usage:
        sampler = NormalSampler(np.random.default_rng(42))
        z = sampler.draw()
        zs = sampler.draw_many(12)
    """

    def __init__(self, rng: RandomLike = None, *, seed: Optional[int] = None):
        self.uniform = resolve_uniform(rng, seed=seed)

    def draw(self) -> float:
        return box_muller_normal(self.uniform)

    def draw_many(self, n: int) -> np.ndarray:
        return np.array([self.draw() for _ in range(n)], dtype=float)
