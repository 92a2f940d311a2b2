import re
from typing import Union

from ..entities.holding import InstrumentType

# Substrings used by Indian exchange-traded fund symbols (GOLDBEES, NV20IETF, ...)
ETF_KEYWORDS = (
    "ETF",
    "BEES",
    "IETF",
    "NV20",
    "MOM100",
    "MON100",
    "MIDCAP",
    "NIFTY",
    "SENSEX",
    "CPSE",
    "BHARAT",
)

# Listed corporate bonds look like 109ESPL26 or 115MFL26
BOND_PATTERNS = (
    re.compile(r"^\d+[A-Z]+\d+$"),
    re.compile(r"^\d+[A-Z]+FL\d+$"),
    re.compile(r"^\d+[A-Z]+SL\d+$"),
)

BOND_KEYWORDS = ("GSEC", "TBILL", "PSU")

DISPLAY_NAMES = {
    InstrumentType.STOCK: "Stock",
    InstrumentType.ETF: "ETF",
    InstrumentType.BOND: "Bond",
}


def classify_instrument(instrument_name: str) -> InstrumentType:
    name = instrument_name.upper()

    if any(keyword in name for keyword in ETF_KEYWORDS):
        return InstrumentType.ETF

    if any(pattern.match(name) for pattern in BOND_PATTERNS):
        return InstrumentType.BOND

    if any(keyword in name for keyword in BOND_KEYWORDS):
        return InstrumentType.BOND

    if len(name) > 6 and name[0].isdigit() and name[-1].isdigit():
        return InstrumentType.BOND

    return InstrumentType.STOCK


def instrument_display_name(instrument_type: Union[InstrumentType, str]) -> str:
    try:
        return DISPLAY_NAMES[InstrumentType(instrument_type)]
    except ValueError:
        return "Unknown"
