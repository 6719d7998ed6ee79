"""
PM (portfolio manager) outputs — simulation aggregation, final metrics,
allocation recommendations, and the ETF reference table.
"""

from .aggregator import YearlyPercentiles, aggregate_yearly_bands, percentile
from .metrics import FinalValueMetrics, compute_final_metrics
from .allocation import (
    AssetAllocation,
    AssetMix,
    ETFRecommendation,
    PortfolioRecommendation,
    calculate_portfolio_allocation,
    determine_allocation,
    generate_etf_recommendations,
)
from .etf_data import (
    ETF_DATABASE,
    ETFInfo,
    get_etf_by_ticker,
    get_etfs_by_asset_class,
    get_etfs_by_provider,
    get_providers,
)

__all__ = [
    "YearlyPercentiles",
    "aggregate_yearly_bands",
    "percentile",
    "FinalValueMetrics",
    "compute_final_metrics",
    "AssetAllocation",
    "AssetMix",
    "ETFRecommendation",
    "PortfolioRecommendation",
    "calculate_portfolio_allocation",
    "determine_allocation",
    "generate_etf_recommendations",
    "ETF_DATABASE",
    "ETFInfo",
    "get_etf_by_ticker",
    "get_etfs_by_asset_class",
    "get_etfs_by_provider",
    "get_providers",
]
