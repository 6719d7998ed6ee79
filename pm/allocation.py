"""
Portfolio allocation recommender — rule table from investor profile to an
asset mix, then to concrete low-cost ETFs.

Primary factor is the time until withdrawals start:

  years until withdrawal | stocks | bonds | cash | risk level
  -----------------------+--------+-------+------+------------
  > 20                   |   90   |  10   |   0  | Aggressive
  > 15                   |   80   |  20   |   0  | Growth
  > 10                   |   70   |  25   |   5  | Balanced
  > 5                    |   60   |  30   |  10  | Moderate
  > 0                    |   50   |  35   |  15  | Moderate
  <= 0 (withdrawing)     | max(110 - age, 40), rest bonds/cash | Conservative

A withdrawal rate above 5% shifts up to 10 points out of stocks (floor 30%)
into bonds and cash. Percentages are then rounded to the nearest 5 with cash
absorbing the rounding so the mix always sums to 100.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal, Optional, Tuple, Union

import pandas as pd

from core.config import AllocationConfig
from core.utils import round_to_step, whole_years_between

from .etf_data import CASH_PLACEHOLDER, ETFInfo, get_etf

logger = logging.getLogger(__name__)

RiskLevel = Literal["Conservative", "Moderate", "Balanced", "Growth", "Aggressive"]
DateLike = Union[date, str]

# (exclusive lower bound on years until withdrawal, stocks, bonds, cash, risk level)
HORIZON_BANDS: Tuple[Tuple[int, float, float, float, RiskLevel], ...] = (
    (20, 90.0, 10.0, 0.0, "Aggressive"),
    (15, 80.0, 20.0, 0.0, "Growth"),
    (10, 70.0, 25.0, 5.0, "Balanced"),
    (5, 60.0, 30.0, 10.0, "Moderate"),
    (0, 50.0, 35.0, 15.0, "Moderate"),
)


@dataclass(frozen=True)
class AssetAllocation:
    asset_class: str
    percentage: float
    amount: float
    description: str


@dataclass(frozen=True)
class ETFRecommendation:
    ticker: str
    name: str
    provider: str
    percentage: float
    amount: float
    expense_ratio: float
    description: str


@dataclass
class PortfolioRecommendation:
    allocations: List[AssetAllocation]
    etf_recommendations: List[ETFRecommendation]
    rationale: List[str]
    risk_level: RiskLevel
    withdrawal_rate: float  # percent
    is_sustainable: bool

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([
            {
                "Asset Class": a.asset_class,
                "Percentage": a.percentage,
                "Amount": a.amount,
                "Description": a.description,
            }
            for a in self.allocations
        ])

    def etfs_to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([
            {
                "Ticker": e.ticker,
                "Name": e.name,
                "Provider": e.provider,
                "Percentage": e.percentage,
                "Amount": e.amount,
                "Expense Ratio (%)": e.expense_ratio,
            }
            for e in self.etf_recommendations
        ])


@dataclass
class AssetMix:
    """Stock / bond / cash split in percent, before sub-allocation."""
    stocks: float
    bonds: float
    cash: float
    risk_level: RiskLevel
    rationale: List[str] = field(default_factory=list)


def determine_allocation(
    age: int,
    years_until_withdrawal: int,
    withdrawal_rate: float,
    *,
    config: Optional[AllocationConfig] = None,
) -> AssetMix:
    """Apply the horizon rule table, the withdrawal-rate shift, and rounding."""
    cfg = config or AllocationConfig()
    rationale: List[str] = []

    if years_until_withdrawal > 0:
        for lower, stocks, bonds, cash, risk_level in HORIZON_BANDS:
            if years_until_withdrawal > lower:
                break
        rationale.extend(_horizon_rationale(lower, years_until_withdrawal))
    else:
        years_into_withdrawal = abs(years_until_withdrawal)

        # 110 - age, never below 40% stocks even late in retirement
        stocks = float(max(110 - age, 40))
        bonds = float(max(min(60 - stocks, 50), 0))
        cash = 100.0 - stocks - bonds
        risk_level = "Conservative"

        if years_into_withdrawal == 0:
            rationale.append("You are at the start of your withdrawal phase.")
        else:
            rationale.append(f"You are {years_into_withdrawal} years into your withdrawal phase.")
        rationale.append("Maintaining growth assets to combat inflation over a potentially long retirement.")
        rationale.append(f"At age {age}, {stocks:g}% stocks provides balance between growth and stability.")

    if withdrawal_rate > cfg.high_withdrawal_rate:
        adjustment = min(cfg.max_withdrawal_adjustment, withdrawal_rate - cfg.high_withdrawal_rate)
        stocks = max(stocks - adjustment, cfg.stock_floor_after_adjustment)
        bonds += adjustment / 2
        cash += adjustment / 2
        rationale.append("⚠ Higher withdrawal rate requires more conservative allocation for sustainability.")

    stocks = round_to_step(stocks, cfg.rounding_step)
    bonds = round_to_step(bonds, cfg.rounding_step)
    cash = 100.0 - stocks - bonds

    logger.debug(
        "Allocation for age=%s horizon=%s rate=%.2f: %s/%s/%s (%s)",
        age, years_until_withdrawal, withdrawal_rate, stocks, bonds, cash, risk_level,
    )

    return AssetMix(stocks=stocks, bonds=bonds, cash=cash, risk_level=risk_level, rationale=rationale)


def calculate_portfolio_allocation(
    birthdate: DateLike,
    first_withdrawal_date: DateLike,
    annual_withdrawal: float,
    portfolio_amount: float,
    *,
    as_of: Optional[date] = None,
    config: Optional[AllocationConfig] = None,
) -> PortfolioRecommendation:
    """
    Recommend an asset mix and ETFs for a retirement portfolio.

    Parameters
    ----------
    birthdate, first_withdrawal_date : date or ISO string
    annual_withdrawal : float
        Planned yearly withdrawal (>= 0)
    portfolio_amount : float
        Current portfolio value (>= 0)
    as_of : date, optional
        Reference "today" for age and horizon (defaults to date.today())
    """
    cfg = config or AllocationConfig()
    today = as_of or date.today()

    age = whole_years_between(_as_date(birthdate), today)
    years_until_withdrawal = whole_years_between(today, _as_date(first_withdrawal_date))
    withdrawal_rate = (
        annual_withdrawal / portfolio_amount * 100.0 if portfolio_amount > 0 else 0.0
    )

    mix = determine_allocation(age, years_until_withdrawal, withdrawal_rate, config=cfg)

    us_stock_pct = mix.stocks * cfg.us_stock_share
    intl_stock_pct = mix.stocks * (1.0 - cfg.us_stock_share)

    def amount(pct: float) -> float:
        return portfolio_amount * (pct / 100.0)

    allocations = [
        AssetAllocation("US Stocks", us_stock_pct, amount(us_stock_pct),
                        "Domestic equity for growth and dividend income"),
        AssetAllocation("International Stocks", intl_stock_pct, amount(intl_stock_pct),
                        "Global diversification and exposure to developed/emerging markets"),
        AssetAllocation("Bonds", mix.bonds, amount(mix.bonds),
                        "Fixed income for stability and income generation"),
    ]
    if mix.cash > 0:
        allocations.append(
            AssetAllocation("Cash", mix.cash, amount(mix.cash), "Liquidity and emergency reserves")
        )

    etfs = generate_etf_recommendations(
        us_stock_pct,
        intl_stock_pct,
        mix.bonds,
        mix.cash,
        portfolio_amount,
        years_until_withdrawal,
        config=cfg,
    )

    rationale = list(mix.rationale)
    is_sustainable = withdrawal_rate <= cfg.sustainable_withdrawal_rate
    if not is_sustainable:
        rationale.append(
            f"⚠ Warning: Your withdrawal rate of {withdrawal_rate:.1f}% exceeds the commonly "
            f"recommended 4% rule, which may not be sustainable long-term."
        )

    return PortfolioRecommendation(
        allocations=allocations,
        etf_recommendations=etfs,
        rationale=rationale,
        risk_level=mix.risk_level,
        withdrawal_rate=withdrawal_rate,
        is_sustainable=is_sustainable,
    )


def generate_etf_recommendations(
    us_stock_pct: float,
    intl_stock_pct: float,
    bond_pct: float,
    cash_pct: float,
    portfolio_amount: float,
    years_until_withdrawal: int,
    *,
    config: Optional[AllocationConfig] = None,
) -> List[ETFRecommendation]:
    """One representative fund per asset class; bonds split near withdrawal."""
    cfg = config or AllocationConfig()
    recommendations: List[ETFRecommendation] = []

    def add(etf: ETFInfo, pct: float) -> None:
        recommendations.append(ETFRecommendation(
            ticker=etf.ticker,
            name=etf.name,
            provider=etf.provider,
            percentage=pct,
            amount=portfolio_amount * (pct / 100.0),
            expense_ratio=etf.expense_ratio,
            description=etf.description,
        ))

    if us_stock_pct > 0:
        add(get_etf("us_stock_broad", "SCHB"), us_stock_pct)

    if intl_stock_pct > 0:
        add(get_etf("intl_stock_total", "VXUS"), intl_stock_pct)

    if bond_pct > 0:
        if years_until_withdrawal < cfg.near_term_horizon_years:
            total_share = cfg.near_term_total_bond_share
            add(get_etf("bond_total", "BND"), bond_pct * total_share)
            add(get_etf("bond_short_term", "VGSH"), bond_pct * (1.0 - total_share))
        else:
            add(get_etf("bond_total", "SCHZ"), bond_pct)

    if cash_pct > 0:
        add(CASH_PLACEHOLDER, cash_pct)

    return recommendations


def _horizon_rationale(band_lower: int, years: int) -> List[str]:
    if band_lower == 20:
        return [
            f"With {years} years until withdrawal, you have time to ride out market volatility.",
            "A growth-focused allocation maximizes long-term returns.",
        ]
    if band_lower == 15:
        return [
            f"{years} years provides good time for stock market growth.",
            "20% bonds provide some stability while maintaining growth potential.",
        ]
    if band_lower == 10:
        return [
            f"With {years} years until withdrawals, a balanced approach is appropriate.",
            "Beginning to add bonds and cash for stability as you approach retirement.",
        ]
    if band_lower == 5:
        return [
            f"{years} years until withdrawals - reducing equity risk.",
            "Building cash reserves for near-term needs.",
        ]
    return [
        f"With withdrawals starting in {years} years, maintaining some growth while prioritizing stability.",
        "Increased cash allocation for upcoming withdrawal needs.",
    ]


def _as_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)
