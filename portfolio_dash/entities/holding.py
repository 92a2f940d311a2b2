from dataclasses import dataclass
from enum import Enum
from typing import Optional


class InstrumentType(str, Enum):
    STOCK = "stock"
    ETF = "etf"
    BOND = "bond"


class MarketSentiment(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"
    STABLE = "stable"


@dataclass
class Holding:
    """One position of a portfolio.

    Monetary and quantity fields are kept as decimal strings exactly as
    they were produced by the metrics calculator.
    """

    id: int
    portfolio_id: int
    instrument: str
    instrument_type: InstrumentType
    quantity: str
    avg_cost: str
    ltp: str
    invested: str
    current_value: str
    pnl: str
    pnl_percent: str
    day_change: str
    day_change_percent: str
    company_name: Optional[str] = None
    sector: Optional[str] = None
    market_sentiment: Optional[MarketSentiment] = None
