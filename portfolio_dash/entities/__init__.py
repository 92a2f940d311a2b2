from .user import User
from .portfolio import Portfolio
from .holding import Holding, InstrumentType, MarketSentiment

__all__ = ["User", "Portfolio", "Holding", "InstrumentType", "MarketSentiment"]
