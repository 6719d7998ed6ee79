"""Unit tests for the ETF reference table"""

import pytest

from pm.etf_data import (
    ETF_DATABASE,
    get_etf,
    get_etf_by_ticker,
    get_etfs_by_asset_class,
    get_etfs_by_provider,
    get_providers,
)


def test_tickers_are_unique():
    tickers = [etf.ticker for etf in ETF_DATABASE]
    assert len(tickers) == len(set(tickers))


def test_lookup_by_asset_class():
    assert [e.ticker for e in get_etfs_by_asset_class("bond_short_term")] == ["SCHO", "VGSH", "SHV"]
    assert get_etfs_by_asset_class("bond_corporate") == []


def test_lookup_by_ticker_is_case_insensitive():
    etf = get_etf_by_ticker("vxus")
    assert etf is not None
    assert etf.provider == "Vanguard"
    assert get_etf_by_ticker("NOPE") is None


def test_providers_in_table_order():
    assert get_providers() == ["Schwab", "Vanguard", "iShares"]
    assert all(e.provider == "iShares" for e in get_etfs_by_provider("iShares"))


def test_get_etf_raises_for_missing_entries():
    assert get_etf("bond_total", "BND").expense_ratio == 0.03
    with pytest.raises(KeyError):
        get_etf("crypto", "BTC")
    with pytest.raises(KeyError):
        get_etf("bond_total", "VTI")
