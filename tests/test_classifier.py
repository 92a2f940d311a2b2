from __future__ import annotations

import pytest

from portfolio_dash.entities import InstrumentType
from portfolio_dash.ingest.classifier import classify_instrument, instrument_display_name


@pytest.mark.parametrize("name", [
    "NIFTYBEES",
    "GOLDBEES",
    "NV20IETF",
    "MOM100",
    "MON100",
    "MIDCAPETF",
    "SENSEXIETF",
    "CPSEETF",
    "BHARATBOND",
    "niftybees",
])
def test_etf(name):
    assert classify_instrument(name) == InstrumentType.ETF


@pytest.mark.parametrize("name", [
    "109ESPL26",
    "115MFL26",
    "8ABCSL30",
    "GSEC2030",
    "TBILL91D",
    "PSUBOND",
    "2025-7.5-2030",
])
def test_bond(name):
    assert classify_instrument(name) == InstrumentType.BOND


@pytest.mark.parametrize("name", ["RELIANCE", "TCS", "HDFCBANK", "3MINDIA", "M&M", ""])
def test_stock(name):
    assert classify_instrument(name) == InstrumentType.STOCK


def test_etf_rule_wins_over_bond_rule():
    assert classify_instrument("12NIFTY34") == InstrumentType.ETF


def test_digit_fallback_needs_more_than_six_characters():
    assert classify_instrument("1A-B-2") == InstrumentType.STOCK
    assert classify_instrument("1A-B-C2") == InstrumentType.BOND


def test_display_names():
    assert instrument_display_name(InstrumentType.STOCK) == "Stock"
    assert instrument_display_name("etf") == "ETF"
    assert instrument_display_name(InstrumentType.BOND) == "Bond"
    assert instrument_display_name("crypto") == "Unknown"
