from .common import get_sentiment_provider
from .market_dependencies import get_market_service
from .portfolio_dependencies import (
    get_user_repository,
    get_portfolio_repository,
    get_holding_repository,
    get_portfolio_service,
)

__all__ = [
    "get_sentiment_provider",
    "get_market_service",
    "get_user_repository",
    "get_portfolio_repository",
    "get_holding_repository",
    "get_portfolio_service",
]
