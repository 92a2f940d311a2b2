from .portfolio import router as portfolio_router
from .holdings import router as holdings_router
from .market import router as market_router

__all__ = ["portfolio_router", "holdings_router", "market_router"]
