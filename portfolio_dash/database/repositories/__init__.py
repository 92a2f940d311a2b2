from .user_repository import UserRepository
from .portfolio_repository import PortfolioRepository
from .holding_repository import HoldingRepository

__all__ = ["UserRepository", "PortfolioRepository", "HoldingRepository"]
