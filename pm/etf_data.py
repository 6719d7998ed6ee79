"""
Reference data for common low-cost ETFs, keyed by asset class.

Used by the allocation recommender to turn percentages into concrete funds.
Expense ratios are in percent (0.03 = 0.03% per year).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

ASSET_CLASSES: Tuple[str, ...] = (
    "us_stock_broad",
    "us_stock_large",
    "us_stock_mid",
    "us_stock_small",
    "intl_stock_developed",
    "intl_stock_emerging",
    "intl_stock_total",
    "bond_total",
    "bond_govt",
    "bond_corporate",
    "bond_tips",
    "bond_short_term",
    "bond_intl",
    "cash",
)


@dataclass(frozen=True)
class ETFInfo:
    ticker: str
    name: str
    provider: str  # Schwab, Vanguard, iShares, Fidelity, SPDR
    asset_class: str
    expense_ratio: float
    description: str


ETF_DATABASE: Tuple[ETFInfo, ...] = (
    # ----- US stocks: broad market -----
    ETFInfo("SCHB", "Schwab U.S. Broad Market ETF", "Schwab", "us_stock_broad", 0.03,
            "Tracks total U.S. stock market including large, mid, and small cap stocks"),
    ETFInfo("VTI", "Vanguard Total Stock Market ETF", "Vanguard", "us_stock_broad", 0.03,
            "Tracks the entire U.S. stock market across all capitalizations"),
    ETFInfo("ITOT", "iShares Core S&P Total U.S. Stock Market ETF", "iShares", "us_stock_broad", 0.03,
            "Broad exposure to U.S. stocks across all market segments"),

    # ----- US stocks: large cap -----
    ETFInfo("SCHX", "Schwab U.S. Large-Cap ETF", "Schwab", "us_stock_large", 0.03,
            "Tracks the largest 750 U.S. publicly traded companies"),
    ETFInfo("VOO", "Vanguard S&P 500 ETF", "Vanguard", "us_stock_large", 0.03,
            "Tracks the S&P 500 Index of large-cap U.S. stocks"),
    ETFInfo("IVV", "iShares Core S&P 500 ETF", "iShares", "us_stock_large", 0.03,
            "S&P 500 tracking with strong liquidity"),

    # ----- US stocks: mid cap -----
    ETFInfo("SCHM", "Schwab U.S. Mid-Cap ETF", "Schwab", "us_stock_mid", 0.04,
            "Mid-cap U.S. stocks with growth potential"),
    ETFInfo("VO", "Vanguard Mid-Cap ETF", "Vanguard", "us_stock_mid", 0.04,
            "Mid-cap blend of U.S. companies"),

    # ----- US stocks: small cap -----
    ETFInfo("SCHA", "Schwab U.S. Small-Cap ETF", "Schwab", "us_stock_small", 0.04,
            "Small-cap U.S. stocks with higher growth potential and volatility"),
    ETFInfo("VB", "Vanguard Small-Cap ETF", "Vanguard", "us_stock_small", 0.05,
            "Small-cap U.S. stocks across growth and value styles"),

    # ----- International stocks: total -----
    ETFInfo("VXUS", "Vanguard Total International Stock ETF", "Vanguard", "intl_stock_total", 0.08,
            "Total international stock market including developed and emerging markets"),
    ETFInfo("IXUS", "iShares Core MSCI Total International Stock ETF", "iShares", "intl_stock_total", 0.09,
            "Broad international equity exposure excluding U.S."),

    # ----- International stocks: developed -----
    ETFInfo("SCHF", "Schwab International Equity ETF", "Schwab", "intl_stock_developed", 0.06,
            "Developed market international stocks (Europe, Pacific, Canada)"),
    ETFInfo("VEA", "Vanguard FTSE Developed Markets ETF", "Vanguard", "intl_stock_developed", 0.05,
            "Large and mid-cap stocks in developed markets outside North America"),
    ETFInfo("IEFA", "iShares Core MSCI EAFE ETF", "iShares", "intl_stock_developed", 0.07,
            "Developed markets in Europe, Australasia, and Far East"),

    # ----- International stocks: emerging -----
    ETFInfo("SCHE", "Schwab Emerging Markets Equity ETF", "Schwab", "intl_stock_emerging", 0.11,
            "Emerging market stocks (China, India, Brazil, etc.)"),
    ETFInfo("VWO", "Vanguard FTSE Emerging Markets ETF", "Vanguard", "intl_stock_emerging", 0.08,
            "Large and mid-cap stocks in emerging markets"),
    ETFInfo("IEMG", "iShares Core MSCI Emerging Markets ETF", "iShares", "intl_stock_emerging", 0.09,
            "Broad emerging markets equity exposure"),

    # ----- Bonds: total market -----
    ETFInfo("SCHZ", "Schwab U.S. Aggregate Bond ETF", "Schwab", "bond_total", 0.04,
            "Total U.S. investment-grade bond market (government, corporate, mortgage-backed)"),
    ETFInfo("BND", "Vanguard Total Bond Market ETF", "Vanguard", "bond_total", 0.03,
            "Broad U.S. bond market including government, corporate, and securitized debt"),
    ETFInfo("AGG", "iShares Core U.S. Aggregate Bond ETF", "iShares", "bond_total", 0.03,
            "Tracks the Bloomberg U.S. Aggregate Bond Index"),

    # ----- Bonds: government -----
    ETFInfo("GOVT", "iShares U.S. Treasury Bond ETF", "iShares", "bond_govt", 0.05,
            "U.S. Treasury bonds across all maturities"),
    ETFInfo("SCHR", "Schwab Intermediate-Term U.S. Treasury ETF", "Schwab", "bond_govt", 0.03,
            "Intermediate-term U.S. Treasury securities (3-10 years)"),

    # ----- Bonds: TIPS -----
    ETFInfo("SCHP", "Schwab U.S. TIPS ETF", "Schwab", "bond_tips", 0.04,
            "Treasury Inflation-Protected Securities for inflation hedge"),
    ETFInfo("VTIP", "Vanguard Short-Term Inflation-Protected Securities ETF", "Vanguard", "bond_tips", 0.04,
            "Short-term TIPS with 0-5 year maturity for inflation protection"),
    ETFInfo("TIP", "iShares TIPS Bond ETF", "iShares", "bond_tips", 0.19,
            "Inflation-protected U.S. Treasury securities"),

    # ----- Bonds: short term -----
    ETFInfo("SCHO", "Schwab Short-Term U.S. Treasury ETF", "Schwab", "bond_short_term", 0.03,
            "Short-term U.S. Treasuries (1-3 years) for stability"),
    ETFInfo("VGSH", "Vanguard Short-Term Treasury ETF", "Vanguard", "bond_short_term", 0.04,
            "Short-term government bonds with low interest rate risk"),
    ETFInfo("SHV", "iShares Short Treasury Bond ETF", "iShares", "bond_short_term", 0.15,
            "Very short-term U.S. Treasury securities (0-1 year)"),

    # ----- Bonds: international -----
    ETFInfo("BNDX", "Vanguard Total International Bond ETF", "Vanguard", "bond_intl", 0.07,
            "Investment-grade international bonds hedged to USD for global diversification"),
    ETFInfo("IAGG", "iShares Core International Aggregate Bond ETF", "iShares", "bond_intl", 0.07,
            "Broad international bond exposure from developed markets"),
)

# Cash has no fund; the recommender emits this placeholder instead.
CASH_PLACEHOLDER = ETFInfo(
    "CASH", "High-Yield Savings or Money Market", "Various", "cash", 0.0,
    "Keep in high-yield savings account or money market fund for immediate liquidity",
)


def get_etfs_by_asset_class(asset_class: str) -> List[ETFInfo]:
    return [etf for etf in ETF_DATABASE if etf.asset_class == asset_class]


def get_etf_by_ticker(ticker: str) -> Optional[ETFInfo]:
    """Case-insensitive ticker lookup."""
    wanted = ticker.upper()
    for etf in ETF_DATABASE:
        if etf.ticker.upper() == wanted:
            return etf
    return None


def get_etf(asset_class: str, ticker: str) -> ETFInfo:
    """Return a specific fund from an asset class, raising if the table lacks it."""
    if asset_class not in ASSET_CLASSES:
        raise KeyError(
            f"Unknown asset class '{asset_class}'. "
            f"Available: {list(ASSET_CLASSES)}"
        )
    for etf in get_etfs_by_asset_class(asset_class):
        if etf.ticker == ticker:
            return etf
    raise KeyError(f"No ETF '{ticker}' in asset class '{asset_class}'.")


def get_providers() -> List[str]:
    """Distinct providers in table order."""
    return list(dict.fromkeys(etf.provider for etf in ETF_DATABASE))


def get_etfs_by_provider(provider: str) -> List[ETFInfo]:
    return [etf for etf in ETF_DATABASE if etf.provider == provider]
