from .portfolio_service import PortfolioService
from .market_service import MarketService
from .sentiment import WeightedRandomSentimentProvider, FixedSentimentProvider

__all__ = [
    "PortfolioService",
    "MarketService",
    "WeightedRandomSentimentProvider",
    "FixedSentimentProvider",
]
